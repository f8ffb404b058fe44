"""Pydantic records mirroring the IP Messaging JSON schema.

Every record is frozen: the client only mirrors remote state at the moment
of a call and never mutates, diffs or merges what it received.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

IPMSG_URL = "https://ip-messaging.twilio.com/v1"

CHANNEL_TYPE_PUBLIC = "public"
CHANNEL_TYPE_PRIVATE = "private"


def _drop_nulls(data: Any) -> Any:
    # null decodes to the field's zero value, like a missing key
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def nulls_to_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)


class Channel(_Record):
    """A named conversation within a messaging service."""

    sid: str = ""
    account_sid: str = ""
    service_sid: str = ""
    friendly_name: str | None = None
    attributes: str | None = None  # opaque JSON blob, left undecoded
    type: str = ""  # "public" | "private"
    date_created: datetime | None = None
    date_updated: datetime | None = None
    created_by: str | None = None
    url: str = ""


class Message(_Record):
    """A message posted to a channel.

    ``from`` is a Python keyword, so the sender lives in ``from_`` and is
    read from the ``from`` key of the payload.
    """

    sid: str = ""
    account_sid: str = ""
    service_sid: str = ""
    to: str = ""
    from_: str = Field(default="", alias="from")
    body: str = ""
    was_edited: bool = False
    date_created: datetime | None = None
    date_updated: datetime | None = None
    url: str = ""


class PageMeta(_Record):
    """Pagination envelope returned with list results. Never traversed."""

    page: int = 0
    page_size: int = 0
    first_page_url: str | None = None
    previous_page_url: str | None = None
    url: str | None = None
    next_page_url: str | None = None
    key: str | None = None


class ChannelPage(_Record):
    meta: PageMeta = Field(default_factory=PageMeta)
    channels: list[Channel] = Field(default_factory=list)


class MessagePage(_Record):
    meta: PageMeta = Field(default_factory=PageMeta)
    messages: list[Message] = Field(default_factory=list)


class ErrorPayload(BaseModel):
    """Provider error body, decoded on any non-2xx response.

    The shape is provider-defined, so unknown keys are kept rather than
    dropped. All known fields default to zero values so a payload can be
    built even when the body is not decodable.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def nulls_to_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)

    status: int = 0
    message: str = ""
    code: int = 0
    more_info: str = ""

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})
