"""Abstract HTTP-call primitive the client issues its requests through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

import httpx


class Transport(ABC):
    """Contract between ``IPMessagingClient`` and the HTTP layer.

    Each method issues one request and returns the response *open*: the
    body has not been read yet. The caller reads it and must close the
    response on every exit path.

    Authentication, timeouts and headers are the transport's concern; the
    client only supplies absolute URLs and form values. Network failures
    are raised as ``httpx.TransportError`` and are never retried.
    """

    @abstractmethod
    def get(self, url: str) -> httpx.Response:
        """Issue a body-less GET."""

    @abstractmethod
    def post(self, url: str, form_values: Mapping[str, str]) -> httpx.Response:
        """POST *form_values* as an ``application/x-www-form-urlencoded`` body."""

    @abstractmethod
    def delete(self, url: str) -> httpx.Response:
        """Issue a body-less DELETE."""

    def close(self) -> None:
        """Release pooled connections. Optional for stateless transports."""

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
