from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Optional, Tuple, TypeVar

from imagewire.protocol import RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_cancellable(call: Awaitable[T], cancel: Optional[asyncio.Event] = None) -> T:
    """Run one transport call as its own task, cancelling it when ``cancel`` is set.

    Raises RequestCancelledError if the event fires before the call completes.
    Cancelling the awaiting task cancels the call as well.
    """
    if cancel is None:
        return await call
    task = asyncio.ensure_future(call)
    if cancel.is_set():
        task.cancel()
    waiter = asyncio.create_task(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
    if task.cancelled():
        logger.info("Request cancelled by caller")
        raise RequestCancelledError("Request cancelled by caller")
    return task.result()


class ImageTransport(ABC):
    """Push PNG images to, and pull them from, an image server.

    Subclasses implement the suspending forms; the blocking forms run them to
    completion on a fresh event loop and therefore must not be called from a
    thread that is already running one.
    """

    @abstractmethod
    async def push_async(self, image_bytes: bytes, *, cancel: Optional[asyncio.Event] = None) -> str:
        """Upload a PNG image and return the name the server assigned to it.

        Raises:
            BadImageFormatError: the server decided the bytes are not a PNG image.
            PushError: the server failed while processing the image.
            BadProtocolFormatError: the response is empty or framed differently.
            NetworkError: connecting, writing or reading failed.
        """

    @abstractmethod
    async def pull_async(
        self,
        name: str,
        prefer_jpg: bool = False,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Tuple[bytes, bool]:
        """Download an image by name (``i123456`` or ``123456``).

        Returns ``(data, is_jpg)``. The server is free to ignore ``prefer_jpg``.

        Raises:
            ImageNotFoundError: no image with that name exists on the server.
            BadProtocolFormatError: the response is empty or framed differently.
            NetworkError: connecting, writing or reading failed.
        """

    def push(self, image_bytes: bytes) -> str:
        return asyncio.run(self.push_async(image_bytes))

    def pull(self, name: str, prefer_jpg: bool = False) -> Tuple[bytes, bool]:
        return asyncio.run(self.pull_async(name, prefer_jpg))


__all__ = ["ImageTransport", "run_cancellable"]
