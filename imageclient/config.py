from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Sequence, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from imagewire.protocol import DEFAULT_RESPONSE_BUFFER_LENGTH, DEFAULT_TRAILER

ENV_PREFIX = "IMAGE_CLIENT_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "transport": "tcp",
    "server_host": "127.0.0.1",
    "server_port": 4300,
    "http_base_url": "http://127.0.0.1/",
    "response_manager_id": 0,
    "response_manager_name": "",
    "request_trailer": ",".join(str(b) for b in DEFAULT_TRAILER),
    "response_buffer_length": DEFAULT_RESPONSE_BUFFER_LENGTH,
    "http_timeout": 30.0,
    "log_level": "INFO",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()

TRANSPORTS = ("tcp", "http")


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


class TransportConfig(BaseModel):
    """Immutable per-transport settings, read by every call."""

    model_config = ConfigDict(frozen=True)

    server_host: str = "127.0.0.1"
    server_port: int = Field(default=4300, ge=1, le=65535)
    trailer: bytes = Field(default=DEFAULT_TRAILER, min_length=1, description="End-of-message sentinel")
    response_manager_id: int = Field(default=0, ge=0, le=255)
    response_buffer_length: int = Field(default=DEFAULT_RESPONSE_BUFFER_LENGTH, gt=0)

    @field_validator("trailer", mode="before")
    @classmethod
    def parse_trailer(cls, v: Union[str, bytes, Sequence[int]]) -> bytes:
        """Accept ``"23,3,4"``, a sequence of ints or raw bytes."""
        if isinstance(v, (bytes, bytearray)):
            return bytes(v)
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            try:
                return bytes(int(p) for p in parts)
            except ValueError as exc:
                raise ValueError(f"Invalid trailer {v!r}: {exc}") from exc
        return bytes(v)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "TransportConfig":
        cfg = config or CLIENT_CONFIG
        try:
            return cls(
                server_host=cfg["server_host"],
                server_port=int(cfg["server_port"]),
                trailer=cfg["request_trailer"],
                response_manager_id=int(cfg["response_manager_id"]),
                response_buffer_length=int(cfg["response_buffer_length"]),
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid transport configuration: {exc}") from exc


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(default_value))

    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _validate_config() -> None:
    if CLIENT_CONFIG["transport"] not in TRANSPORTS:
        raise ConfigError(f"transport must be one of {', '.join(TRANSPORTS)}")
    if CLIENT_CONFIG["http_timeout"] <= 0:
        raise ConfigError("http_timeout must be positive")
    CLIENT_CONFIG["log_level"] = str(CLIENT_CONFIG["log_level"]).upper()
    if CLIENT_CONFIG["log_level"] not in logging.getLevelNamesMapping():
        raise ConfigError(f"Unknown log_level {CLIENT_CONFIG['log_level']}")
    # Port, manager id, trailer and buffer length are range-checked by TransportConfig.
    TransportConfig.from_config(CLIENT_CONFIG)


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "TRANSPORTS", "TransportConfig", "load_config"]
