"""Response normalization: empty arrays become ``None`` and arrays of named
objects can be re-indexed into a dict keyed by name."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import Any

logger = logging.getLogger(__name__)


def is_indexable(data: Any, index_key: str = "name") -> bool:
    """True when *data* is a non-empty list of mappings that all carry a
    hashable *index_key* value."""
    return (
        isinstance(data, list)
        and len(data) > 0
        and all(
            isinstance(item, Mapping)
            and index_key in item
            and isinstance(item[index_key], Hashable)
            for item in data
        )
    )


def reindex(items: list[Mapping], index_key: str = "name", *, debug: bool = False) -> dict:
    """Map each item's *index_key* value to the item.

    Later items overwrite earlier ones that share a key; the clobbered
    keys are logged as a warning.  Per-item traces are only emitted when
    *debug* is set.
    """
    indexed: dict = {}
    duplicates: list = []
    for item in items:
        name = item[index_key]
        if debug:
            logger.debug("item %s: %s", index_key, name)
        if name in indexed and name not in duplicates:
            duplicates.append(name)
        indexed[name] = item
    if duplicates:
        logger.warning(
            "Re-indexing by %r dropped earlier items with duplicate keys: %s",
            index_key, ", ".join(repr(d) for d in duplicates),
        )
    return indexed


def normalize_response(
    data: Any,
    *,
    name_keys: bool = False,
    index_key: str = "name",
    debug: bool = False,
) -> Any:
    """Apply the output rules to a decoded JSON value.

    - ``[]`` -> ``None``
    - non-empty list of mappings all carrying a hashable *index_key*,
      with *name_keys* on -> dict keyed by that field
    - anything else is returned untouched
    """
    if isinstance(data, list) and not data:
        return None
    if name_keys and is_indexable(data, index_key):
        return reindex(data, index_key, debug=debug)
    return data
