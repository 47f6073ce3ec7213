"""Client error hierarchy.

Every error carries typed fields (not just a message string),
supports ``to_dict()`` for structured logging, and has a readable
``__str__``.
"""

from __future__ import annotations

from trello_api.log import redact_url


class TrelloError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message, **self.detail}

    def __str__(self) -> str:
        return self.message


class InvalidRequest(TrelloError):
    """The caller supplied a bad path or verb."""

    def __init__(self, field: str, value: object = None, *, reason: str | None = None) -> None:
        self.field = field
        self.value = value
        self.reason = reason or f"invalid {field}"
        super().__init__(
            f"Invalid request: {self.reason} ({field}={value!r})",
            detail={"field": field, "value": value},
        )


class ConfigurationError(TrelloError):
    """A required setting is unset or a setting failed validation."""

    def __init__(self, fields: list[str], *, reason: str | None = None) -> None:
        self.fields = fields
        if reason:
            msg = f"Configuration error: {reason}"
        else:
            msg = f"Configuration error: missing required setting(s) {', '.join(fields)}"
        super().__init__(msg, detail={"fields": fields})


class RemoteCallFailed(TrelloError):
    """Transport failure or non-success HTTP status.

    ``status_code`` is ``None`` when no response was received at all.
    ``url`` keeps the raw URL; the message and ``detail`` mask credentials.
    """

    def __init__(self, url: str, status_code: int | None, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        shown = redact_url(url)
        prefix = f"[{status_code}] " if status_code is not None else ""
        super().__init__(
            f"{prefix}Error getting url '{shown}': {reason}",
            detail={"url": shown, "status_code": status_code, "reason": reason},
        )


class MalformedResponse(TrelloError):
    """The response body could not be decoded as JSON, or decoded to ``null``."""

    def __init__(self, url: str, parse_error: str) -> None:
        self.url = url
        self.parse_error = parse_error
        shown = redact_url(url)
        super().__init__(
            f"Error parsing JSON from url '{shown}': {parse_error}",
            detail={"url": shown, "parse_error": parse_error},
        )
