import httpx
import pytest

from imageclient import (
    BadImageFormatError,
    HttpImageTransport,
    ImageNotFoundError,
    NetworkError,
    PushError,
)
from imageclient.core.http import NOT_A_PNG_MESSAGE
from imagewire.utils import JPEG_SIGNATURE, PNG_SIGNATURE

PNG = PNG_SIGNATURE + b"rest-of-png"


def _transport(handler, **kwargs) -> HttpImageTransport:
    return HttpImageTransport("http://images.test", transport=httpx.MockTransport(handler), **kwargs)


def test_base_url_gets_trailing_slash():
    assert HttpImageTransport("http://images.test").base_url == "http://images.test/"
    assert HttpImageTransport("http://images.test/").base_url == "http://images.test/"


def test_push_posts_multipart_png():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(200, text="i42\n")

    name = _transport(handler, response_manager_name="shots").push(PNG)

    assert name == "i42"
    assert seen["method"] == "POST"
    assert seen["path"] == "/push/shots"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'filename="screenshot.png"' in seen["body"]
    assert b"Content-Type: image/png" in seen["body"]
    assert PNG in seen["body"]


def test_push_bad_request_is_bad_image_format():
    transport = _transport(lambda request: httpx.Response(400, text="nope"))
    with pytest.raises(BadImageFormatError) as excinfo:
        transport.push(b"not a png")
    assert excinfo.value.message == "nope"


def test_push_bad_request_without_body_uses_default_message():
    transport = _transport(lambda request: httpx.Response(400))
    with pytest.raises(BadImageFormatError) as excinfo:
        transport.push(b"not a png")
    assert excinfo.value.message == NOT_A_PNG_MESSAGE


def test_push_other_status_is_push_error():
    transport = _transport(lambda request: httpx.Response(500, text="storage offline"))
    with pytest.raises(PushError) as excinfo:
        transport.push(PNG)
    assert excinfo.value.message == "storage offline"


@pytest.mark.parametrize("name", ["42", "i42"])
def test_pull_requests_prefixed_name(name):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return httpx.Response(200, content=PNG)

    data, is_jpg = _transport(handler, response_manager_name=".png").pull(name)

    assert seen["path"] == "/i42.png"
    assert data == PNG
    assert is_jpg is False


def test_pull_detects_jpeg():
    jpeg = JPEG_SIGNATURE + b"\xe0jfif"
    transport = _transport(lambda request: httpx.Response(200, content=jpeg))
    assert transport.pull("i1", prefer_jpg=True) == (jpeg, True)


def test_pull_missing_image():
    transport = _transport(lambda request: httpx.Response(404, text="no such image"))
    with pytest.raises(ImageNotFoundError) as excinfo:
        transport.pull("i999")
    assert excinfo.value.name == "i999"
    assert excinfo.value.message == "no such image"


def test_transport_errors_become_network_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = _transport(handler)
    with pytest.raises(NetworkError):
        transport.push(PNG)
    with pytest.raises(NetworkError):
        transport.pull("i1")
