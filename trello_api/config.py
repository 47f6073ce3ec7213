"""Client configuration loaded from explicit arguments and the environment.

Uses ``pydantic-settings`` for env-var loading, type coercion and ``.env``
file support.  Resolution order for every field is: explicit argument,
then ``TRELLO_<FIELD>`` environment variable, then the hard default.
``key`` and ``token`` have no default, so a client cannot be built without
them.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trello_api.errors import ConfigurationError

DEFAULT_BASE = "https://api.trello.com"
DEFAULT_API_VERSION = "1"


class TrelloSettings(BaseSettings):
    """Per-client settings.  Frozen once built.

    Environment variables (prefix: TRELLO_):
        TRELLO_KEY          - API key (required)
        TRELLO_TOKEN        - API token (required)
        TRELLO_BASE         - API host (default: https://api.trello.com)
        TRELLO_API_VERSION  - API version path segment (default: 1)
        TRELLO_BASE_HREF    - Full API root, overrides BASE + API_VERSION
        TRELLO_SLEEP_TIME   - Seconds to pause after every call (default: 1)
        TRELLO_NAME_KEYS    - Re-index named arrays into dicts (default: off)
        TRELLO_INDEX_KEY    - Field used for re-indexing (default: name)
        TRELLO_TIMEOUT      - HTTP timeout in seconds (default: 30)
        TRELLO_DEBUG        - Log URLs and responses to stderr (default: off)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRELLO_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    key: str
    token: str
    base: str = DEFAULT_BASE
    api_version: str = DEFAULT_API_VERSION
    base_href: Optional[str] = None
    sleep_time: float = Field(default=1.0, ge=0)
    name_keys: bool = False
    index_key: str = "name"
    timeout: float = Field(default=30.0, gt=0)
    debug: bool = False

    @field_validator("key", "token", "index_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("base", "base_href")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return value.rstrip("/")

    @field_validator("api_version", mode="before")
    @classmethod
    def _version_as_str(cls, value: Any) -> str:
        return str(value).strip("/")

    @property
    def api_root(self) -> str:
        """The ``{base}/{api_version}`` prefix every request path hangs off."""
        return self.base_href or f"{self.base}/{self.api_version}"


def load_settings(env_file: str | None = ".env", **overrides: Any) -> TrelloSettings:
    """Resolve settings, raising ``ConfigurationError`` instead of a
    pydantic ``ValidationError``.

    Overrides that are ``None`` count as "not supplied" and fall through
    to the environment or the default.
    """
    explicit = {name: value for name, value in overrides.items() if value is not None}
    unknown = sorted(set(explicit) - set(TrelloSettings.model_fields))
    if unknown:
        raise ConfigurationError(unknown, reason=f"unknown setting(s) {', '.join(unknown)}")

    try:
        return TrelloSettings(_env_file=env_file, **explicit)
    except ValidationError as exc:
        errors = exc.errors()
        fields = [".".join(str(part) for part in err["loc"]) for err in errors]
        if all(err["type"] == "missing" for err in errors):
            raise ConfigurationError(fields) from exc
        reasons = "; ".join(
            f"{field}: {err['msg']}" for field, err in zip(fields, errors)
        )
        raise ConfigurationError(fields, reason=reasons) from exc
