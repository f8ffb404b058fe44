"""Client configuration.

Configuration is passed in explicitly or read from a JSON file such as::

    {
      "account_sid": "AC...",
      "auth_token": "...",
      "timeout": 10
    }

No environment variables are consulted.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .models import IPMSG_URL

DEFAULT_TIMEOUT = 30.0  # seconds, applied by httpx to every phase of a request


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_sid: str = ""
    auth_token: str = Field(default="", repr=False)
    base_url: str = IPMSG_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str = "ipmessaging-client/0.1.0"

    def normalized_base_url(self) -> str:
        return self.base_url.rstrip("/")


def load_config(path: Path | str) -> ClientConfig:
    """Read a ``ClientConfig`` from a JSON file.

    Raises ``FileNotFoundError`` when *path* does not exist and
    ``pydantic.ValidationError`` when its content is not a valid config.
    """
    path = Path(path)
    return ClientConfig.model_validate_json(path.read_text(encoding="utf-8"))
