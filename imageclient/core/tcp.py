from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional, Tuple

from imageclient.config import TransportConfig
from imagewire.protocol import (
    NetworkError,
    ProtocolError,
    decode_pull_response,
    decode_push_response,
    encode_pull,
    encode_push,
)
from imagewire.protocol.constants import READ_CHUNK_SIZE

from .buffer import ResponseBuffer
from .transport import ImageTransport, run_cancellable

logger = logging.getLogger(__name__)


class TcpImageTransport(ImageTransport):
    """Raw-TCP image client: one connection per call, response read until the server closes."""

    def __init__(self, config: Optional[TransportConfig] = None, **overrides) -> None:
        if overrides:
            config = TransportConfig(**{**(config or TransportConfig()).model_dump(), **overrides})
        self.config: TransportConfig = config or TransportConfig()

    @property
    def address(self) -> Tuple[str, int]:
        return self.config.server_host, self.config.server_port

    async def push_async(self, image_bytes: bytes, *, cancel: Optional[asyncio.Event] = None) -> str:
        frame = encode_push(image_bytes, self.config.response_manager_id, self.config.trailer)
        raw = await run_cancellable(self._exchange(frame), cancel)
        try:
            name = decode_push_response(raw, self.config.trailer)
        except ProtocolError as exc:
            logger.warning("Push to %s:%s failed: %s", *self.address, exc)
            raise
        logger.info("Pushed %d bytes as %s", len(image_bytes), name)
        return name

    async def pull_async(
        self,
        name: str,
        prefer_jpg: bool = False,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Tuple[bytes, bool]:
        frame = encode_pull(name, self.config.response_manager_id, prefer_jpg, self.config.trailer)
        raw = await run_cancellable(self._exchange(frame), cancel)
        try:
            data, is_jpg = decode_pull_response(raw, self.config.trailer, name)
        except ProtocolError as exc:
            logger.warning("Pull of %s from %s:%s failed: %s", name, *self.address, exc)
            raise
        logger.info("Pulled %s (%d bytes, %s)", name, len(data), "jpg" if is_jpg else "png")
        return data, is_jpg

    async def _exchange(self, frame: bytes) -> bytes:
        """Connect, write the whole frame, then read until end-of-stream."""
        host, port = self.address
        try:
            reader, writer = await asyncio.open_connection(host, port)
        except OSError as exc:
            raise NetworkError(f"Connect to {host}:{port} failed: {exc}") from exc
        logger.debug("Connected to %s:%s", host, port)
        try:
            writer.write(frame)
            await writer.drain()
            buffer = ResponseBuffer(self.config.response_buffer_length)
            while True:
                chunk = await reader.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                buffer.extend(chunk)
            logger.debug("Received %d bytes from %s:%s", len(buffer), host, port)
            return buffer.getvalue()
        except OSError as exc:
            raise NetworkError(f"Connection to {host}:{port} lost: {exc}") from exc
        finally:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()


__all__ = ["TcpImageTransport"]
