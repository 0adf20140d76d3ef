from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import CMD_PULL, CMD_PUSH
from .errors import ResponseStatus


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PushRequestHeader(_Frozen):
    """Three control bytes opening a push request."""

    command: int = Field(default=CMD_PUSH, frozen=True, description="Push command byte")
    response_manager_id: int = Field(default=0, ge=0, le=255, description="Server-side handler selector")
    reserved: int = Field(default=0, ge=0, le=255)

    def to_bytes(self) -> bytes:
        return bytes((self.command, self.response_manager_id, self.reserved))


class PullRequestHeader(_Frozen):
    """Three control bytes opening a pull request."""

    command: int = Field(default=CMD_PULL, frozen=True, description="Pull command byte")
    response_manager_id: int = Field(default=0, ge=0, le=255, description="Server-side handler selector")
    prefer_jpg: bool = Field(default=False, description="Ask for the JPG rendition if the server has one")

    def to_bytes(self) -> bytes:
        return bytes((self.command, self.response_manager_id, 1 if self.prefer_jpg else 0))


class PushResponse(_Frozen):
    status: int = Field(..., ge=0, le=255)
    message: str = ""

    @property
    def known_status(self) -> Optional[ResponseStatus]:
        try:
            return ResponseStatus(self.status)
        except ValueError:
            return None


class PullResponse(_Frozen):
    status: int = Field(..., ge=0, le=255)
    is_jpg: bool = False
    data: bytes = b""


__all__ = ["PushRequestHeader", "PullRequestHeader", "PushResponse", "PullResponse"]
