"""Exceptions raised by the IP Messaging client.

Transport failures are not wrapped here: connection, DNS and timeout errors
surface as the ``httpx`` exceptions that caused them.
"""

from __future__ import annotations

from .models import ErrorPayload


class IPMessagingError(Exception):
    """Base class for every error raised by this package."""


class RestError(IPMessagingError):
    """The provider answered a non-delete call with a non-2xx status.

    ``error`` is the decoded provider payload on a best-effort basis. When
    the body could not be decoded it is a zero-valued ``ErrorPayload`` and
    the swallowed decode failure is kept in ``decode_error``.
    """

    def __init__(
        self,
        status_code: int,
        error: ErrorPayload,
        *,
        body: bytes = b"",
        decode_error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.body = body
        self.decode_error = decode_error
        super().__init__(self._describe())

    @property
    def code(self) -> int:
        return self.error.code

    def _describe(self) -> str:
        text = f"HTTP {self.status_code}"
        if self.error.code:
            text += f" (code {self.error.code})"
        if self.error.message:
            text += f": {self.error.message}"
        return text


class ChannelDeleteError(IPMessagingError):
    """Deleting a channel returned anything but 204. Carries no provider detail."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__("failed deleting channel")


class ResponseDecodeError(IPMessagingError):
    """A 2xx response body did not match the expected shape."""
