"""Shared fixtures: a client wired to an in-memory httpx transport."""

from __future__ import annotations

import json
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from ipmessaging import ClientConfig, HttpTransport, IPMessagingClient

BASE = "https://ip-messaging.twilio.com/v1"


class TrackedStream(httpx.SyncByteStream):
    """Response body that stays open until someone closes it.

    With `fail=True` the connection drops after the first chunk.
    """

    def __init__(self, data: bytes = b"", *, fail: bool = False) -> None:
        self._data = data
        self._fail = fail
        self.closed = False

    def __iter__(self):
        yield self._data
        if self._fail:
            raise httpx.ReadError("connection reset")

    def close(self) -> None:
        self.closed = True


def streamed(status: int, payload=None, *, text: str | None = None, fail: bool = False):
    """Build a response whose body is not read until the client reads it."""
    if text is not None:
        data = text.encode("utf-8")
    elif payload is not None:
        data = json.dumps(payload).encode("utf-8")
    else:
        data = b""
    stream = TrackedStream(data, fail=fail)
    return httpx.Response(status, stream=stream), stream


class FakeApi:
    """Records every request and answers with queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []

    def queue(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]) -> None:
        self._responses.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self._responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> dict[str, list[str]]:
        return parse_qs(self.last.content.decode("ascii"), keep_blank_values=True)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(account_sid="AC123", auth_token="secret-token")


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def transport(api: FakeApi, config: ClientConfig):
    t = HttpTransport(config, http_transport=httpx.MockTransport(api.handler))
    yield t
    t.close()


@pytest.fixture
def client(transport: HttpTransport) -> IPMessagingClient:
    return IPMessagingClient(transport=transport)


def channel_json(sid: str, **overrides) -> dict:
    data = {
        "sid": sid,
        "account_sid": "AC123",
        "service_sid": "IS123",
        "friendly_name": f"Channel {sid}",
        "attributes": '{"topic": "general"}',
        "type": "public",
        "date_created": "2016-03-24T20:37:57Z",
        "date_updated": "2016-03-24T21:05:19Z",
        "created_by": "system",
        "url": f"{BASE}/Services/IS123/Channels/{sid}",
    }
    data.update(overrides)
    return data


def message_json(sid: str, **overrides) -> dict:
    data = {
        "sid": sid,
        "account_sid": "AC123",
        "service_sid": "IS123",
        "to": "CH1",
        "from": "alice",
        "body": f"hello from {sid}",
        "was_edited": False,
        "date_created": "2016-03-24T20:37:57Z",
        "date_updated": "2016-03-24T20:37:57Z",
        "url": f"{BASE}/Services/IS123/Channels/CH1/Messages/{sid}",
    }
    data.update(overrides)
    return data


def meta_json(key: str) -> dict:
    return {
        "page": 0,
        "page_size": 50,
        "first_page_url": f"{BASE}/Services/IS123/{key}?PageSize=50&Page=0",
        "previous_page_url": None,
        "url": f"{BASE}/Services/IS123/{key}?PageSize=50&Page=0",
        "next_page_url": f"{BASE}/Services/IS123/{key}?PageSize=50&Page=1",
        "key": key.lower(),
    }
