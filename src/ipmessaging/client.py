"""IPMessagingClient — channel and message management over REST.

Every public method maps onto exactly one documented endpoint:

  GET    {base}/Services/{service}/Channels                    list channels
  POST   {base}/Services/{service}/Channels                    create channel
  DELETE {base}/Services/{service}/Channels/{channel}          delete channel
  POST   {base}/Services/{service}/Channels/{channel}/Messages  send message
  GET    {base}/Services/{service}/Channels/{channel}/Messages list messages

Each call is an independent transaction: no session, no retry, no cache
and no pagination traversal. Identifiers are formatted into the URL as-is,
so they must already be URL-safe.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from .base import Transport
from .config import ClientConfig
from .errors import ChannelDeleteError, ResponseDecodeError, RestError
from .models import (
    Channel,
    ChannelPage,
    ErrorPayload,
    Message,
    MessagePage,
)
from .transport import HttpTransport

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class IPMessagingClient:
    """Stateless client for the IP Messaging channel and message endpoints.

    Holds only immutable configuration (base URL and transport), so one
    instance can be shared between threads.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
        base_url: str | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._base_url = base_url.rstrip("/") if base_url else self._config.normalized_base_url()
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport(self._config)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> IPMessagingClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------

    def list_channels(self, service_sid: str) -> list[Channel]:
        """Return the channels of the first result page, in server order."""
        return self.list_channels_page(service_sid).channels

    def list_channels_page(self, service_sid: str) -> ChannelPage:
        """Return the first result page together with its pagination envelope."""
        return self._request(self._channels_url(service_sid), ChannelPage)

    def create_channel(
        self,
        service_sid: str,
        channel_type: str,
        friendly_name: str = "",
        unique_name: str = "",
    ) -> str:
        """Create a channel and return its sid.

        Empty ``friendly_name`` / ``unique_name`` are left out of the form
        body entirely rather than sent as empty values.
        """
        form_values: dict[str, str] = {}
        if friendly_name:
            form_values["FriendlyName"] = friendly_name
        if unique_name:
            form_values["UniqueName"] = unique_name
        form_values["Type"] = channel_type

        channel = self._request(self._channels_url(service_sid), Channel, form_values)
        return channel.sid

    def delete_channel(self, service_sid: str, channel_sid: str) -> None:
        """Delete a channel. Anything but HTTP 204 raises ``ChannelDeleteError``."""
        url = self._channel_url(service_sid, channel_sid)
        response = self._transport.delete(url)
        try:
            status_code = response.status_code
        finally:
            response.close()
        if status_code != 204:
            logger.debug("Delete of %s returned %d", url, status_code)
            raise ChannelDeleteError(status_code)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def send_message(
        self,
        service_sid: str,
        channel_sid: str,
        member_sid: str,
        body: str,
        from_: str,
    ) -> Message:
        """Post a message to a channel and return the created message.

        ``member_sid`` is accepted for API compatibility but is not sent:
        the endpoint is addressed by channel, and the sender is ``From``.
        """
        _ = member_sid
        form_values = {"Body": body, "From": from_}
        return self._request(
            self._messages_url(service_sid, channel_sid), Message, form_values
        )

    def list_messages(self, service_sid: str, channel_sid: str) -> list[Message]:
        """Return the messages of the first result page, in server order."""
        return self.list_messages_page(service_sid, channel_sid).messages

    def list_messages_page(self, service_sid: str, channel_sid: str) -> MessagePage:
        """Return the first message page together with its pagination envelope."""
        return self._request(self._messages_url(service_sid, channel_sid), MessagePage)

    # ------------------------------------------------------------------
    # URL construction
    # ------------------------------------------------------------------

    def _channels_url(self, service_sid: str) -> str:
        return f"{self._base_url}/Services/{service_sid}/Channels"

    def _channel_url(self, service_sid: str, channel_sid: str) -> str:
        return f"{self._channels_url(service_sid)}/{channel_sid}"

    def _messages_url(self, service_sid: str, channel_sid: str) -> str:
        return f"{self._channel_url(service_sid, channel_sid)}/Messages"

    # ------------------------------------------------------------------
    # Dispatch and decoding
    # ------------------------------------------------------------------

    def _request(
        self,
        url: str,
        model: type[_ModelT],
        form_values: Mapping[str, str] | None = None,
    ) -> _ModelT:
        """POST *form_values* when given, otherwise GET, and decode into *model*."""
        if form_values is None:
            method = "GET"
            response = self._transport.get(url)
        else:
            method = "POST"
            response = self._transport.post(url, form_values)

        try:
            status_code = response.status_code
            body = response.read()
        finally:
            response.close()

        if not 200 <= status_code < 300:
            raise _rest_error(status_code, body)

        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise ResponseDecodeError(
                f"Could not decode {model.__name__} from {method} {url}"
            ) from exc


def _rest_error(status_code: int, body: bytes) -> RestError:
    """Build the error for a non-2xx response.

    A body that does not decode into ``ErrorPayload`` is not an error of its
    own: the caller gets whatever fields did decode (possibly none), with
    the decode failure attached for inspection.
    """
    decode_error: Exception | None = None
    try:
        payload = ErrorPayload.model_validate_json(body)
    except ValidationError as exc:
        logger.warning(
            "Undecodable error body (HTTP %d): %.200r", status_code, body
        )
        payload = _salvage_error_payload(body, exc)
        decode_error = exc
    return RestError(status_code, payload, body=body, decode_error=decode_error)


def _salvage_error_payload(body: bytes, exc: ValidationError) -> ErrorPayload:
    """Keep the well-typed fields of an error body that failed to validate."""
    try:
        data = json.loads(body)
    except ValueError:
        return ErrorPayload()
    if not isinstance(data, dict):
        return ErrorPayload()
    bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
    return ErrorPayload.model_validate(
        {k: v for k, v in data.items() if k not in bad}
    )
