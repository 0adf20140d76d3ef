"""
Wire protocol shared by the image transports: constants, error taxonomy,
header/response models and the frame codec.
"""

from .constants import DEFAULT_RESPONSE_BUFFER_LENGTH, DEFAULT_TRAILER, ENCODING, NO_RESPONSE_MESSAGE
from .errors import (
    BadImageFormatError,
    BadProtocolFormatError,
    ImageNotFoundError,
    ImageTransportError,
    NetworkError,
    ProtocolError,
    PushError,
    RequestCancelledError,
    ResponseStatus,
)
from .framing import (
    canonical_name,
    decode_pull_response,
    decode_push_response,
    encode_pull,
    encode_pull_response,
    encode_push,
    encode_push_response,
    parse_pull_response,
    parse_push_response,
    url_name,
)
from .messages import PullRequestHeader, PullResponse, PushRequestHeader, PushResponse

__all__ = [
    "DEFAULT_RESPONSE_BUFFER_LENGTH",
    "DEFAULT_TRAILER",
    "ENCODING",
    "NO_RESPONSE_MESSAGE",
    "ResponseStatus",
    "ImageTransportError",
    "ProtocolError",
    "ImageNotFoundError",
    "BadImageFormatError",
    "PushError",
    "BadProtocolFormatError",
    "NetworkError",
    "RequestCancelledError",
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
    "PushRequestHeader",
    "PullRequestHeader",
    "PushResponse",
    "PullResponse",
]
