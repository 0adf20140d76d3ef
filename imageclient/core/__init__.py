from .buffer import ResponseBuffer
from .factory import create_transport
from .http import HttpImageTransport
from .tcp import TcpImageTransport
from .transport import ImageTransport, run_cancellable

__all__ = [
    "ImageTransport",
    "TcpImageTransport",
    "HttpImageTransport",
    "ResponseBuffer",
    "create_transport",
    "run_cancellable",
]
