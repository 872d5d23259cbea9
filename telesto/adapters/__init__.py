"""Adapters layer - Concrete implementations of ports and I/O.

This module contains the pieces that touch the outside world:
- HTTP transport (requests)
- CSV input and JSON output (files or standard streams)
"""
