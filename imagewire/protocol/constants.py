"""Wire-level constants shared by every transport."""

ENCODING = "utf-8"

CMD_PUSH = 0
CMD_PULL = 1

DEFAULT_TRAILER = bytes((23, 3, 4))
DEFAULT_RESPONSE_BUFFER_LENGTH = 1024  # bytes, initial capacity only
READ_CHUNK_SIZE = 4096

IMAGE_NAME_PREFIX = "i"
NO_RESPONSE_MESSAGE = "Server didn't respond."

__all__ = [
    "ENCODING",
    "CMD_PUSH",
    "CMD_PULL",
    "DEFAULT_TRAILER",
    "DEFAULT_RESPONSE_BUFFER_LENGTH",
    "READ_CHUNK_SIZE",
    "IMAGE_NAME_PREFIX",
    "NO_RESPONSE_MESSAGE",
]
