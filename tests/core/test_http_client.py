from unittest.mock import patch

import httpx
import pytest

from pillow_api.core.exceptions import PillowError, TransportError
from pillow_api.core.http_client import HTTPClient
from pillow_api.pillow.api_client import Pillow
from pillow_api.pillow.schema import RequestConfig, TransportSettings


def test_send_returns_raw_body():
    http = HTTPClient(transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")))
    assert http.send(RequestConfig(url="http://api.test/status/")) == "boom"


def test_send_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectTimeout("connect timed out", request=request)

    http = HTTPClient(transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as exc_info:
        http.send(RequestConfig(url="http://api.test/status/"))

    assert isinstance(exc_info.value, PillowError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
    assert "connect timed out" in str(exc_info.value)


def test_build_client_applies_settings():
    settings = TransportSettings(connect_timeout=5, timeout=20, follow_redirects=False, user_agent="Test/1.0")
    config = RequestConfig(url="http://api.test/", settings=settings)

    with HTTPClient()._build_client(config) as client:
        assert client.timeout.connect == 5
        assert client.timeout.read == 20
        assert client.follow_redirects is False
        assert client.headers["User-Agent"] == "Test/1.0"


def test_post_body_is_form_encoded():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="ok")

    http = HTTPClient(transport=httpx.MockTransport(handler))
    http.send(RequestConfig(method="POST", url="http://api.test/v1/users/", body="name=ross"))

    assert seen[0].method == "POST"
    assert seen[0].headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert seen[0].content == b"name=ross"


@pytest.mark.parametrize("verify_tls", [False, True])
def test_build_client_passes_tls_and_pool_settings(verify_tls):
    config = RequestConfig(url="http://api.test/", settings=TransportSettings(), verify_tls=verify_tls)

    with patch("pillow_api.core.http_client.httpx.Client") as MockClient:
        HTTPClient()._build_client(config)

    kwargs = MockClient.call_args.kwargs
    assert kwargs["verify"] is verify_tls
    assert kwargs["limits"].max_connections == 3
    assert kwargs["timeout"].connect == 15
    assert kwargs["follow_redirects"] is True


def test_pillow_verify_tls_reaches_transport():
    http = HTTPClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="{}")))
    api = Pillow("http://api.test/", settings=TransportSettings(), verify_tls=True, http_client=http)

    with patch("pillow_api.core.http_client.httpx.Client", wraps=httpx.Client) as MockClient:
        assert api.get("status") == {}

    assert MockClient.call_args.kwargs["verify"] is True
