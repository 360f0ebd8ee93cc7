from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FBGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    app_env: str = "development"

    # Graph API
    graph_url: str = "https://graph.facebook.com"
    oauth_dialog_url: str = "http://www.facebook.com/dialog/oauth?"
    oauth_dialog_url_mobile: str = "http://m.facebook.com/dialog/oauth?"

    # Credentials (optional; usually passed to GraphAPI directly)
    access_token: str | None = None
    app_secret: str | None = None

    # Transport. None disables the httpx timeout.
    http_timeout: float | None = None

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def log_level(self) -> str:
        return "INFO" if self.is_production else "DEBUG"


settings = Settings()

# ---------------------------------------------------------------------------
# Library constants (not env-configurable, change in code)
# ---------------------------------------------------------------------------

USER_AGENT = "fbgraph Python Client 1.0"

# Response text encoding unless request_options["encoding"] overrides it
DEFAULT_ENCODING = "utf-8"

TOKEN_PATH = "/oauth/access_token"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable snapshot of a GraphAPI's configuration, taken per request."""

    access_token: str | None = None
    app_secret: str | None = None
    graph_url: str = "https://graph.facebook.com"
    oauth_dialog_url: str = "http://www.facebook.com/dialog/oauth?"
    oauth_dialog_url_mobile: str = "http://m.facebook.com/dialog/oauth?"
    request_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so the caller's mapping can change without touching this snapshot
        object.__setattr__(self, "request_options", MappingProxyType(dict(self.request_options)))
