from __future__ import annotations

import logging
from typing import Dict, Tuple, Type

from .constants import DEFAULT_TRAILER, ENCODING, IMAGE_NAME_PREFIX, NO_RESPONSE_MESSAGE
from .errors import (
    BadImageFormatError,
    BadProtocolFormatError,
    ImageNotFoundError,
    ProtocolError,
    PushError,
    ResponseStatus,
)
from .messages import PullRequestHeader, PullResponse, PushRequestHeader, PushResponse

logger = logging.getLogger(__name__)

PUSH_HEADER_LENGTH = 1  # status
PULL_HEADER_LENGTH = 2  # status + jpg flag

_PUSH_FAILURES: Dict[ResponseStatus, Type[ProtocolError]] = {
    ResponseStatus.BAD_IMAGE_FORMAT: BadImageFormatError,
    ResponseStatus.PUSH_FAILED: PushError,
    ResponseStatus.BAD_PROTOCOL_FORMAT: BadProtocolFormatError,
}


def canonical_name(name: str) -> str:
    """Strip the ``i`` URL prefix so ``i123456`` and ``123456`` address the same image."""
    # Every leading "i" goes, so canonical_name("i" + n) == canonical_name(n) for any n.
    return name.lstrip(IMAGE_NAME_PREFIX)


def url_name(name: str) -> str:
    """Return the ``i``-prefixed form used in image URLs."""
    return IMAGE_NAME_PREFIX + canonical_name(name)


def encode_push(image_bytes: bytes, response_manager_id: int = 0, trailer: bytes = DEFAULT_TRAILER) -> bytes:
    """Build a push request frame: header + image + trailer."""
    header = PushRequestHeader(response_manager_id=response_manager_id)
    return header.to_bytes() + bytes(image_bytes) + trailer


def encode_pull(
    name: str,
    response_manager_id: int = 0,
    prefer_jpg: bool = False,
    trailer: bytes = DEFAULT_TRAILER,
) -> bytes:
    """Build a pull request frame: header + UTF-8 image name + trailer."""
    header = PullRequestHeader(response_manager_id=response_manager_id, prefer_jpg=prefer_jpg)
    return header.to_bytes() + canonical_name(name).encode(ENCODING) + trailer


def encode_push_response(status: int, message: str, trailer: bytes = DEFAULT_TRAILER) -> bytes:
    """Server side of a push exchange: status byte + message + trailer."""
    return bytes((int(status),)) + message.encode(ENCODING) + trailer


def encode_pull_response(
    status: int,
    data: bytes,
    is_jpg: bool = False,
    trailer: bytes = DEFAULT_TRAILER,
) -> bytes:
    """Server side of a pull exchange: status byte + jpg flag + data + trailer."""
    return bytes((int(status), 1 if is_jpg else 0)) + bytes(data) + trailer


def _ends_with_trailer(raw: bytes, trailer: bytes, header_length: int) -> bool:
    # Only the tail is checked; the stream was read to EOF so the trailer must be last.
    return len(raw) >= header_length + len(trailer) and raw.endswith(trailer)


def parse_push_response(raw: bytes, trailer: bytes = DEFAULT_TRAILER) -> PushResponse:
    """Split a raw push response into status and trimmed message."""
    if not _ends_with_trailer(raw, trailer, PUSH_HEADER_LENGTH):
        raise BadProtocolFormatError(NO_RESPONSE_MESSAGE)
    body = raw[PUSH_HEADER_LENGTH : len(raw) - len(trailer)]
    return PushResponse(status=raw[0], message=body.decode(ENCODING, errors="replace").strip())


def parse_pull_response(raw: bytes, trailer: bytes = DEFAULT_TRAILER) -> PullResponse:
    """Split a raw pull response into status, jpg flag and image data."""
    if not _ends_with_trailer(raw, trailer, PULL_HEADER_LENGTH):
        raise BadProtocolFormatError(NO_RESPONSE_MESSAGE)
    return PullResponse(
        status=raw[0],
        is_jpg=raw[1] == 1,
        data=raw[PULL_HEADER_LENGTH : len(raw) - len(trailer)],
    )


def decode_push_response(raw: bytes, trailer: bytes = DEFAULT_TRAILER) -> str:
    """Return the server-assigned image name or raise the mapped protocol error."""
    response = parse_push_response(raw, trailer)
    status = response.known_status
    failure = _PUSH_FAILURES.get(status) if status is not None else None
    if failure is not None:
        raise failure(response.message)
    if status is not ResponseStatus.SUCCESS:
        logger.warning("Unexpected push status %s, treating response as success", response.status)
    return response.message


def decode_pull_response(raw: bytes, trailer: bytes, requested_name: str) -> Tuple[bytes, bool]:
    """Return ``(data, is_jpg)`` or raise the mapped protocol error."""
    response = parse_pull_response(raw, trailer)
    if response.status == ResponseStatus.SUCCESS:
        return response.data, response.is_jpg
    text = response.data.decode(ENCODING, errors="replace")
    if response.status == ResponseStatus.IMAGE_NOT_FOUND:
        raise ImageNotFoundError(requested_name, text)
    raise BadProtocolFormatError(text.strip() or f"Unexpected pull status {response.status}")


__all__ = [
    "canonical_name",
    "url_name",
    "encode_push",
    "encode_pull",
    "encode_push_response",
    "encode_pull_response",
    "parse_push_response",
    "parse_pull_response",
    "decode_push_response",
    "decode_pull_response",
]
