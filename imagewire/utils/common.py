from __future__ import annotations

import hashlib

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"


def looks_like_png(data: bytes) -> bool:
    """Cheap client-side check before uploading; the server has the final say."""
    return bytes(data[: len(PNG_SIGNATURE)]) == PNG_SIGNATURE


def looks_like_jpeg(data: bytes) -> bool:
    return bytes(data[: len(JPEG_SIGNATURE)]) == JPEG_SIGNATURE


def sha256_hex(data: bytes) -> str:
    """Short content fingerprint for log lines."""
    return hashlib.sha256(data).hexdigest()


__all__ = ["PNG_SIGNATURE", "JPEG_SIGNATURE", "looks_like_png", "looks_like_jpeg", "sha256_hex"]
