from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict


class ResponseStatus(IntEnum):
    """Status byte leading every server response."""

    SUCCESS = 0
    IMAGE_NOT_FOUND = 1
    BAD_IMAGE_FORMAT = 2
    PUSH_FAILED = 3
    BAD_PROTOCOL_FORMAT = 4


class ImageTransportError(Exception):
    """Base class for every failure surfaced by an image transport."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ProtocolError(ImageTransportError):
    """Failure reported by (or attributed to) the image server."""

    status: ResponseStatus = ResponseStatus.BAD_PROTOCOL_FORMAT

    def __str__(self) -> str:
        return f"{self.status.name} ({int(self.status)}): {self.message}"

    def to_payload(self) -> Dict[str, Any]:
        """Map error into a JSON-friendly dict."""
        return {
            "status": int(self.status),
            "error": type(self).__name__,
            "message": self.message,
        }


class ImageNotFoundError(ProtocolError):
    """Requested image does not exist on the server."""

    status = ResponseStatus.IMAGE_NOT_FOUND

    def __init__(self, name: str, message: str = "") -> None:
        self.name = name
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["name"] = self.name
        return payload


class BadImageFormatError(ProtocolError):
    """Server refused the upload because it is not a PNG image."""

    status = ResponseStatus.BAD_IMAGE_FORMAT


class PushError(ProtocolError):
    """Server failed while processing an upload."""

    status = ResponseStatus.PUSH_FAILED


class BadProtocolFormatError(ProtocolError):
    """Response framing is broken, empty, or from another protocol version."""

    status = ResponseStatus.BAD_PROTOCOL_FORMAT


class NetworkError(ImageTransportError):
    """Network level error (connect, read, write) surfaced to callers."""

    pass


class RequestCancelledError(NetworkError):
    """The caller cancelled the request before it completed."""

    pass


__all__ = [
    "ResponseStatus",
    "ImageTransportError",
    "ProtocolError",
    "ImageNotFoundError",
    "BadImageFormatError",
    "PushError",
    "BadProtocolFormatError",
    "NetworkError",
    "RequestCancelledError",
]
