"""Adapters - I/O implementations of ports."""

from .http_gateway import HttpTaskGateway

__all__ = [
    "HttpTaskGateway",
]
