"""
Client library for pushing PNG screenshots to an image server and pulling
them back by name, over raw TCP or HTTP.
"""

from imagewire.protocol import (
    BadImageFormatError,
    BadProtocolFormatError,
    ImageNotFoundError,
    ImageTransportError,
    NetworkError,
    PushError,
    RequestCancelledError,
)

from .config import TransportConfig
from .core import HttpImageTransport, ImageTransport, TcpImageTransport, create_transport

__all__ = [
    "ImageTransport",
    "TcpImageTransport",
    "HttpImageTransport",
    "TransportConfig",
    "create_transport",
    "ImageTransportError",
    "ImageNotFoundError",
    "BadImageFormatError",
    "PushError",
    "BadProtocolFormatError",
    "NetworkError",
    "RequestCancelledError",
]
