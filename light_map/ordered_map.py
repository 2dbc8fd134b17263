"""Insertion-ordered mapping with functional transforms and JSON serialization."""

from __future__ import annotations

import json
import locale
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from functools import cmp_to_key, partial
from typing import Any, ClassVar, Self, TypeVar, override

from ._version import version as _package_version
from .normalize import normalize_value, to_plain


logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Compare = Callable[[Any, Any], int]

def _json_default(value: Any) -> Any:
    map_to_array = getattr(value, "map_to_array", None)
    if callable(map_to_array):
        return map_to_array()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


_compact_json = partial(json.dumps, separators=(",", ":"), default=_json_default)


def _locale_compare(left: Any, right: Any) -> int:
    left_text, right_text = str(left), str(right)
    try:
        return locale.strcoll(left_text, right_text)
    except ValueError:
        # strcoll rejects embedded NUL characters
        return (left_text > right_text) - (left_text < right_text)


def _pick(result: Any, index: int, fallback: Any) -> Any:
    if isinstance(result, (list, tuple)) and len(result) > index and result[index]:
        return result[index]
    return fallback


class LightMap(MutableMapping[Any, Any]):
    """Ordered key/value container with chainable transforms.

    Entries keep insertion order. Values given at construction that are
    sequences of ``[key, value]`` pairs become nested ``LightMap`` instances;
    ``map_to_array`` is the exact inverse of that normalization.

    Every transform returns a new instance and leaves the receiver untouched,
    except ``reduce`` which folds to an arbitrary result.
    """

    _light_map_marker: ClassVar[bool] = True

    def __init__(self, entries: Iterable[Any] | Mapping[Any, Any] | None = None) -> None:
        super().__init__()
        self._data: dict[Any, Any] = {}
        if entries is None:
            return
        items = entries.items() if isinstance(entries, Mapping) else entries
        for entry in items:
            if not isinstance(entry, (list, tuple)):
                msg = "LightMap entries must be key/value sequences"
                raise TypeError(msg)
            if len(entry) != 2:
                logger.debug("entry %r is not a pair, using its first two items", entry)
            key = entry[0] if entry else None
            value = entry[1] if len(entry) > 1 else None
            self._data[key] = normalize_value(value, LightMap)

    @classmethod
    def _from_entries(cls, entries: Iterable[tuple[Any, Any]]) -> Self:
        """Build an instance without normalizing values again."""
        result = cls()
        for key, value in entries:
            result._data[key] = value
        return result

    @staticmethod
    def version() -> str:
        """Return the package version, prefixed with ``v``."""
        return f"v{_package_version}"

    @staticmethod
    def is_light_map(value: Any) -> bool:
        """Return True when the type of ``value`` declares the LightMap marker."""
        return getattr(type(value), "_light_map_marker", False) is True

    @property
    def tag(self) -> str:
        """Display name of the container type."""
        return type(self).__name__

    @override
    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    @override
    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[key] = value

    @override
    def __delitem__(self, key: Any) -> None:
        del self._data[key]

    @override
    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    @override
    def __len__(self) -> int:
        return len(self._data)

    def filter(self, predicate: Callable[[Any, Any, Self], Any]) -> Self:
        """Return a new map with the entries for which ``predicate(value, key, self)`` is truthy."""
        return self._from_entries((key, value) for key, value in self._data.items() if predicate(value, key, self))

    def map(self, transform: Callable[[Any, Any, Self], Any]) -> Self:
        """Return a new map built from ``transform(value, key, self)`` results.

        The transform returns a ``(new_key, new_value)`` pair. A falsy part, a
        missing part or a falsy result keeps the original key and/or value, so
        keys and values cannot be replaced by ``0``, ``""``, ``False``,
        ``None`` or empty containers.
        """
        result = type(self)()
        for key, value in self._data.items():
            mapped = transform(value, key, self)
            new_key = _pick(mapped, 0, key)
            new_value = _pick(mapped, 1, value)
            if not mapped:
                logger.debug("map transform returned %r for key %r, keeping entry", mapped, key)
            result._data[new_key] = new_value
        return result

    def reduce(
        self,
        fold: Callable[[_T, tuple[Any, Any], Any, Self], _T],
        initial: _T,
        entries: Iterable[tuple[Any, Any]] | None = None,
    ) -> _T:
        """Fold ``fold(accumulator, (key, value), key, self)`` over the entries in order.

        ``entries`` replaces the receiver's own entries as the folded sequence.
        """
        accumulator = initial
        for key, value in self._data.items() if entries is None else entries:
            accumulator = fold(accumulator, (key, value), key, self)
        return accumulator

    def sort_keys(self, compare: Compare | None = None) -> Self:
        """Return a new map ordered by key.

        ``compare(a, b)`` returns a negative, zero or positive number. The
        default compares ``str(key)`` with the current locale collation. The
        sort is stable.
        """
        keys = sorted(self._data, key=cmp_to_key(compare or _locale_compare))
        return self._from_entries((key, self._data[key]) for key in keys)

    def sort_values(self, compare: Compare | None = None) -> Self:
        """Return a new map ordered by value, keeping each key with its value."""
        value_key = cmp_to_key(compare or _locale_compare)
        entries = sorted(self._data.items(), key=lambda entry: value_key(entry[1]))
        return self._from_entries(entries)

    def map_to_array(self) -> list[list[Any]]:
        """Flatten to a list of ``[key, value]`` lists, nested maps included."""

        def collect(result: list[list[Any]], entry: tuple[Any, Any], _key: Any, _self: Self) -> list[list[Any]]:
            key, value = entry
            result.append([key, to_plain(value)])
            return result

        return self.reduce(collect, [])

    def to_json(self) -> list[list[Any]]:
        """Return the JSON-ready array-of-pairs form."""
        return self.map_to_array()

    def to_string(self, encoder: Callable[[Any], str] | None = None) -> str:
        """Encode ``map_to_array()`` as compact JSON text, or with ``encoder`` when given."""
        return (encoder or _compact_json)(self.map_to_array())

    def index_of(self, key: Any) -> int:
        """Return the position of ``key`` in insertion order, or -1 when absent."""
        position = -1

        def locate(found: int, entry: tuple[Any, Any], _key: Any, _self: Self) -> int:
            nonlocal position
            if found != -1:
                return found
            position += 1
            return position if entry[0] == key else found

        return self.reduce(locate, -1)

    def search(self, key: Any) -> int:
        """Alias of ``index_of``."""
        return self.index_of(key)

    def replace(self, text: str) -> str:
        """Substitute every occurrence of each key in ``text`` with its value.

        Substitutions run in iteration order on the progressively rewritten
        text, so earlier replacements can create or destroy later matches.
        """
        return self.reduce(lambda result, entry, _key, _self: result.replace(str(entry[0]), str(entry[1])), text)

    def to_primitive(self, hint: str = "default") -> str | int | bool:
        """Coerce to a primitive: ``number`` size, ``boolean`` True, any other hint the JSON text."""
        if hint == "number":
            return len(self)
        if hint == "boolean":
            return True
        return self.to_string()

    def equals(self, other: Any) -> bool:
        """Return True when ``other`` holds the same entries in the same order."""
        if not self.is_light_map(other):
            return False
        return self.map_to_array() == other.map_to_array()

    def copy(self) -> Self:
        """Return a shallow copy with its own backing entries."""
        return self._from_entries(self._data.items())

    @override
    def __eq__(self, other: object) -> bool:
        if self.is_light_map(other):
            return self.equals(other)
        return super().__eq__(other)

    def __bool__(self) -> bool:
        return True

    def __int__(self) -> int:
        return len(self)

    @override
    def __str__(self) -> str:
        return self.to_string()

    @override
    def __repr__(self) -> str:
        return f"{self.tag}({self.map_to_array()!r})"
