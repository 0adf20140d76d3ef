from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import httpx

from imagewire.protocol import (
    BadImageFormatError,
    ImageNotFoundError,
    NetworkError,
    PushError,
    url_name,
)
from imagewire.utils import looks_like_jpeg

from .transport import ImageTransport, run_cancellable

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "image"
UPLOAD_FILENAME = "screenshot.png"
NOT_A_PNG_MESSAGE = "The server has refused this file because it's not a PNG image."


class HttpImageTransport(ImageTransport):
    """Image client speaking the server's HTTP interface (multipart upload, plain GET)."""

    def __init__(
        self,
        base_url: str,
        response_manager_name: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.response_manager_name = response_manager_name
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def push_async(self, image_bytes: bytes, *, cancel: Optional[asyncio.Event] = None) -> str:
        return await run_cancellable(self._push(image_bytes), cancel)

    async def pull_async(
        self,
        name: str,
        prefer_jpg: bool = False,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Tuple[bytes, bool]:
        # The HTTP endpoint has no format selector; prefer_jpg is accepted for parity only.
        return await run_cancellable(self._pull(name), cancel)

    async def _push(self, image_bytes: bytes) -> str:
        files = {UPLOAD_FIELD: (UPLOAD_FILENAME, bytes(image_bytes), "image/png")}
        try:
            async with self._client() as client:
                response = await client.post(f"push/{self.response_manager_name}", files=files)
        except httpx.TransportError as exc:
            raise NetworkError(f"Upload to {self.base_url} failed: {exc}") from exc

        if response.status_code == httpx.codes.OK:
            name = response.text.strip()
            logger.info("Pushed %d bytes as %s", len(image_bytes), name)
            return name
        logger.warning("Push rejected with HTTP %s: %s", response.status_code, response.text)
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise BadImageFormatError(response.text.strip() or NOT_A_PNG_MESSAGE)
        raise PushError(response.text)

    async def _pull(self, name: str) -> Tuple[bytes, bool]:
        path = f"{url_name(name)}{self.response_manager_name}"
        try:
            async with self._client() as client:
                response = await client.get(path)
        except httpx.TransportError as exc:
            raise NetworkError(f"Download from {self.base_url} failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            logger.warning("Pull of %s failed with HTTP %s", name, response.status_code)
            raise ImageNotFoundError(name, response.text)
        data = response.content
        is_jpg = looks_like_jpeg(data)
        logger.info("Pulled %s (%d bytes, %s)", name, len(data), "jpg" if is_jpg else "png")
        return data, is_jpg


__all__ = ["HttpImageTransport"]
