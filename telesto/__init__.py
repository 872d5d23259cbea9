"""Top-level package for Telesto.

Telesto batch-requests Google Directions API responses: it validates a
CSV of origin/destination pairs, builds (optionally signed) request
URLs, executes them concurrently and writes one JSON collection of
responses in input order.
"""

__version__ = "0.3.0"
