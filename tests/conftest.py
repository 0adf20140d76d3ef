from __future__ import annotations

import os
import queue
import socket
import threading
from typing import List

import pytest

from imagewire.protocol import DEFAULT_TRAILER


class FakeImageServer:
    """Threaded TCP server that records each request and replies with a queued raw frame, then closes."""

    def __init__(self, trailer: bytes = DEFAULT_TRAILER) -> None:
        self.trailer = trailer
        self.requests: List[bytes] = []
        self._responses: "queue.Queue[bytes]" = queue.Queue()
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen()
        self._sock.settimeout(0.1)
        self.host, self.port = self._sock.getsockname()
        self._thread = threading.Thread(target=self._serve, name="fake-image-server", daemon=True)

    def respond(self, *frames: bytes) -> None:
        for frame in frames:
            self._responses.put(frame)

    def start(self) -> "FakeImageServer":
        self._thread.start()
        return self

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            with conn:
                conn.settimeout(5)
                self.requests.append(self._read_request(conn))
                conn.sendall(self._responses.get(timeout=5))

    def _read_request(self, conn: socket.socket) -> bytes:
        data = b""
        while not data.endswith(self.trailer):
            chunk = conn.recv(4096)
            if not chunk:
                break
            data += chunk
        return data


@pytest.fixture
def image_server():
    server = FakeImageServer().start()
    yield server
    server.close()


@pytest.fixture
def closed_port() -> int:
    """A port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def isolated_config(monkeypatch):
    """Clear IMAGE_CLIENT_* variables and restore CLIENT_CONFIG so load_config/.env changes do not leak."""
    from imageclient.config import CLIENT_CONFIG, DEFAULT_CONFIG, ENV_PREFIX

    env_keys = [f"{ENV_PREFIX}{key.upper()}" for key in DEFAULT_CONFIG]
    for key in env_keys:
        monkeypatch.delenv(key, raising=False)
    saved = dict(CLIENT_CONFIG)
    yield CLIENT_CONFIG
    # load_dotenv writes os.environ directly, outside monkeypatch.
    for key in env_keys:
        os.environ.pop(key, None)
    CLIENT_CONFIG.clear()
    CLIENT_CONFIG.update(saved)
