"""
Transport module - HTTP API (aiohttp)
"""

from .http_transport import HTTPTransport

__all__ = [
    "HTTPTransport",
]
