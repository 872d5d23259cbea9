"""Transport adapters - Implementations of TransportPort.

Available implementations:
- RequestsTransport: HTTP GET over a pooled requests.Session
"""

from .requests_transport import RequestsTransport

__all__ = ["RequestsTransport"]
