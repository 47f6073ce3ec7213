"""Thin synchronous client for the Trello REST API.

Public API
----------
Client::

    TrelloClient  — get / post / put / delete / request / build_url
    Verb

Configuration::

    TrelloSettings, load_settings

Normalization::

    normalize_response, reindex, is_indexable

Errors::

    TrelloError, InvalidRequest, ConfigurationError,
    RemoteCallFailed, MalformedResponse
"""

from trello_api.client import TrelloClient, Verb
from trello_api.config import TrelloSettings, load_settings
from trello_api.errors import (
    ConfigurationError,
    InvalidRequest,
    MalformedResponse,
    RemoteCallFailed,
    TrelloError,
)
from trello_api.normalize import is_indexable, normalize_response, reindex

__all__ = [
    "TrelloClient",
    "Verb",
    "TrelloSettings",
    "load_settings",
    "normalize_response",
    "reindex",
    "is_indexable",
    "TrelloError",
    "InvalidRequest",
    "ConfigurationError",
    "RemoteCallFailed",
    "MalformedResponse",
]

__version__ = "0.1.0"
