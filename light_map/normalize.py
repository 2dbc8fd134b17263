"""Nested pair-sequence detection and plain-data flattening."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)

_SEQUENCE_TYPES = (list, tuple)


def is_pair(item: Any) -> bool:
    """Return True when ``item`` is a list or tuple of exactly two items."""
    return isinstance(item, _SEQUENCE_TYPES) and len(item) == 2


def is_pair_sequence(value: Any) -> bool:
    """Return True when every item of a list/tuple ``value`` is a pair.

    An empty list or tuple is vacuously a pair sequence.
    """
    return isinstance(value, _SEQUENCE_TYPES) and all(is_pair(item) for item in value)


def normalize_value(value: Any, factory: Callable[[Any], Any]) -> Any:
    """Build a nested container from a pair sequence, or return ``value`` unchanged.

    Recursion happens through ``factory`` itself, which normalizes the values
    of the nested entries in turn. Sequences holding anything other than
    pairs are not descended into.
    """
    if not is_pair_sequence(value):
        return value
    logger.debug("building nested map from %d pairs", len(value))
    return factory(value)


def to_plain(value: Any) -> Any:
    """Flatten objects exposing ``map_to_array`` into nested lists of pairs."""
    map_to_array = getattr(value, "map_to_array", None)
    if callable(map_to_array):
        return map_to_array()
    return value
