import json
from collections.abc import Callable
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from pkceflow.storage import InMemorySessionStore

IDP_URL = "https://idp.example.com"
CLIENT_ID = "client-123"
REDIRECT_URI = "https://app.example.com/callback"

AUTH_PAYLOAD = {
    "access_token": "access-token-xyz",
    "expires_in": 3600,
    "id_token": "id-token-abc",
    "refresh_token": "refresh-token-def",
    "token_type": "Bearer",
}


class RecordingNavigator:
    """Navigator that records URLs and what the store held at navigation time."""

    def __init__(self, store: InMemorySessionStore | None = None):
        self.store = store
        self.urls: list[str] = []
        self.stored_at_navigation: list[str | None] = []

    def navigate(self, url: str) -> None:
        self.urls.append(url)
        if self.store is not None:
            state = parse_qs(urlparse(url).query).get("state", [None])[0]
            self.stored_at_navigation.append(
                self.store.get(state) if state else None
            )


class TokenEndpoint:
    """Stub token endpoint served through httpx.MockTransport."""

    def __init__(self, status_code: int = 200, payload: object = AUTH_PAYLOAD):
        self.status_code = status_code
        self.payload = payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.payload, (str, bytes)):
            return httpx.Response(self.status_code, content=self.payload)
        return httpx.Response(self.status_code, content=json.dumps(self.payload))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def navigator(store: InMemorySessionStore) -> RecordingNavigator:
    return RecordingNavigator(store)


@pytest.fixture
def token_endpoint() -> Callable[..., TokenEndpoint]:
    return TokenEndpoint
