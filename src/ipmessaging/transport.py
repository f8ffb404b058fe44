"""HttpTransport — the httpx-backed ``Transport``.

Usage::

    transport = HttpTransport(ClientConfig(account_sid="AC...", auth_token="..."))
    client = IPMessagingClient(transport=transport)

One ``httpx.Client`` is created per transport and reused for every call.
It carries:
  1. HTTP basic auth with the account sid and auth token.
  2. The configured timeout (inherited as-is, no extra cancellation).
  3. ``User-Agent`` and ``Accept: application/json`` headers.

Responses are sent back streamed so the caller controls when the body is
read and released.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from .base import Transport
from .config import ClientConfig

logger = logging.getLogger(__name__)


class HttpTransport(Transport):
    """Issues authenticated requests against the IP Messaging API."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._client = httpx.Client(
            auth=(self._config.account_sid, self._config.auth_token),
            timeout=httpx.Timeout(self._config.timeout),
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "application/json",
            },
            transport=http_transport,
        )

    def get(self, url: str) -> httpx.Response:
        return self._send("GET", url)

    def post(self, url: str, form_values: Mapping[str, str]) -> httpx.Response:
        return self._send("POST", url, data=dict(form_values))

    def delete(self, url: str) -> httpx.Response:
        return self._send("DELETE", url)

    def close(self) -> None:
        self._client.close()

    def _send(
        self,
        method: str,
        url: str,
        *,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        request = self._client.build_request(method, url, data=data)
        logger.debug("%s %s", method, url)
        response = self._client.send(request, stream=True)
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response
