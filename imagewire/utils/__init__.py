from .common import JPEG_SIGNATURE, PNG_SIGNATURE, looks_like_jpeg, looks_like_png, sha256_hex

__all__ = ["PNG_SIGNATURE", "JPEG_SIGNATURE", "looks_like_png", "looks_like_jpeg", "sha256_hex"]
