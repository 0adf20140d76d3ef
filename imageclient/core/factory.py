from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from imageclient.config import CLIENT_CONFIG, ConfigError, TransportConfig

from .http import HttpImageTransport
from .tcp import TcpImageTransport
from .transport import ImageTransport

logger = logging.getLogger(__name__)


def create_transport(config: Optional[Dict[str, Any]] = None) -> ImageTransport:
    """Build the transport selected by the ``transport`` config key."""
    cfg = config or CLIENT_CONFIG
    kind = cfg.get("transport", "tcp")
    if kind == "tcp":
        transport_config = TransportConfig.from_config(cfg)
        logger.debug("Creating TcpImageTransport for %s:%s", transport_config.server_host, transport_config.server_port)
        return TcpImageTransport(transport_config)
    if kind == "http":
        logger.debug("Creating HttpImageTransport for %s", cfg["http_base_url"])
        return HttpImageTransport(
            cfg["http_base_url"],
            response_manager_name=cfg.get("response_manager_name", ""),
            timeout=float(cfg.get("http_timeout", 30.0)),
        )
    raise ConfigError(f"Unknown transport {kind!r}")


__all__ = ["create_transport"]
