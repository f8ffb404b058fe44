"""ipmessaging — thin client for the IP Messaging REST API.

Exports the building blocks callers need:
  - IPMessagingClient — channel and message operations
  - ClientConfig      — credentials, base URL and timeout
  - HttpTransport     — httpx-backed HTTP primitive (Transport is its ABC)
  - models            — Channel, Message, pagination envelope, error payload
  - errors            — RestError, ChannelDeleteError, ResponseDecodeError
"""

from .base import Transport
from .client import IPMessagingClient
from .config import ClientConfig, load_config
from .errors import (
    ChannelDeleteError,
    IPMessagingError,
    ResponseDecodeError,
    RestError,
)
from .models import (
    CHANNEL_TYPE_PRIVATE,
    CHANNEL_TYPE_PUBLIC,
    IPMSG_URL,
    Channel,
    ChannelPage,
    ErrorPayload,
    Message,
    MessagePage,
    PageMeta,
)
from .transport import HttpTransport

__version__ = "0.1.0"
__all__ = [
    "IPMessagingClient",
    "ClientConfig",
    "load_config",
    "Transport",
    "HttpTransport",
    "IPMessagingError",
    "RestError",
    "ChannelDeleteError",
    "ResponseDecodeError",
    "IPMSG_URL",
    "CHANNEL_TYPE_PUBLIC",
    "CHANNEL_TYPE_PRIVATE",
    "Channel",
    "Message",
    "PageMeta",
    "ChannelPage",
    "MessagePage",
    "ErrorPayload",
]
