from typing import Callable, List

import httpx
import pytest

from pillow_api.core.http_client import HTTPClient
from pillow_api.pillow.api_client import Pillow
from pillow_api.pillow.schema import TransportSettings

API_URL = "http://api.test/"


class RecordingLogger:
    """Logger injecté qui garde les messages reçus via info()."""

    def __init__(self):
        self.messages: List[str] = []

    def info(self, msg: str) -> None:
        self.messages.append(msg)

    def contains(self, fragment: str) -> bool:
        return any(fragment in message for message in self.messages)


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    """Requêtes reçues par le transport simulé."""
    return []


@pytest.fixture
def make_client(recorder, requests_seen) -> Callable[..., Pillow]:
    """
    Fabrique un client Pillow branché sur un httpx.MockTransport.
    `handler` reçoit la httpx.Request et retourne une httpx.Response.
    """

    def _make(handler, api_url: str = API_URL, **kwargs) -> Pillow:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = HTTPClient(transport=httpx.MockTransport(_recording_handler))
        kwargs.setdefault("settings", TransportSettings())
        kwargs.setdefault("logger", recorder)
        return Pillow(api_url, http_client=http_client, **kwargs)

    return _make
