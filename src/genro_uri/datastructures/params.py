# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Ordered key/value parameter lists for URI query strings and fragments.

Purpose
=======
A query string or fragment such as ``one=two&three&four=five`` is a list of
parameters, not a dict: order matters and keys may repeat. ``ParamList``
keeps that list intact and adds key-based access on top of it.

Each parameter value has three states::

    value            serialized as      meaning
    ─────────────    ──────────────     ──────────────────────────────
    "two"            one=two            key with a value
    None             three              bare key, no "="
    UNDEFINED        (omitted)          entry kept, not serialized

``UNDEFINED`` is how a parameter is removed: the entry stays in the list
(so a later ``set`` reuses its position) but it no longer appears in the
serialized string.

Parsing Schema::

    "one=two&three&&four=a%20b+c"
              ↓  split on "&", skip empty tokens
    ["one=two", "three", "four=a%20b+c"]
              ↓  split each on the first "=" only
    [["one", "two"], ["three", None], ["four", "a b c"]]

Definition::

    class ParamList:
        __slots__ = ("_entries",)

        def __init__(self, items: Iterable[tuple[str, ParamValue]] = ()) -> None
        @classmethod parse(cls, raw: str) -> ParamList
        def get(self, key: str) -> ParamValue
        def set(self, key: str, value: ParamValue) -> ParamList
        def update(self, params: Mapping[str, ParamValue]) -> ParamList
        def add(self, key: str, value: ParamValue) -> ParamList
        def get_all(self, key: str) -> list[str | None]
        def remove(self, key: str) -> ParamList
        def items(self) -> list[tuple[str, ParamValue]]
        def serialize(self) -> str
        def copy(self) -> ParamList

Design Notes
============
- ``set`` touches only the first entry with a matching key; later
  duplicates produced by parsing are left alone.
- Encoding follows ``encodeURIComponent``: everything except
  ``A-Z a-z 0-9 - _ . ! ~ * ' ( )`` is percent-encoded.
- Values decode ``+`` as a space; keys do not.
- ``%XX`` escapes must decode to valid UTF-8; anything else raises
  ``MalformedUri`` instead of being replaced with U+FFFD.
- ``add`` keeps duplicates (multi-value parameters); ``remove`` hides every
  entry for the key.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Union
from urllib.parse import quote, unquote

from ..exceptions import MalformedUri

__all__ = [
    "UNDEFINED",
    "ParamList",
    "ParamValue",
    "decode_component",
    "encode_component",
]

# Characters left alone by JavaScript's encodeURIComponent
_COMPONENT_SAFE = "-_.!~*'()"


class _Undefined:
    """Marker for a parameter that exists in the list but is not serialized."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

ParamValue = Union[str, None, _Undefined]


def encode_component(value: str) -> str:
    """Percent-encode a key or value the way encodeURIComponent does."""
    return quote(value, safe=_COMPONENT_SAFE)


def decode_component(value: str, plus_as_space: bool = False) -> str:
    """
    Decode a percent-encoded key or value.

    Args:
        value: Encoded text.
        plus_as_space: Treat ``+`` as an encoded space (form encoding).

    Raises:
        UnicodeDecodeError: If the escapes are not valid UTF-8.
    """
    if plus_as_space:
        value = value.replace("+", " ")
    return unquote(value, errors="strict")


class ParamList:
    """
    Ordered list of ``(key, value)`` parameters with key-based access.

    Example:
        >>> params = ParamList.parse("one=two&three&four=five")
        >>> params.get("one")
        'two'
        >>> params.get("three") is None
        True
        >>> params.get("missing")
        UNDEFINED
        >>> params.set("one", "1").remove("four").serialize()
        'one=1&three'
    """

    __slots__ = ("_entries",)

    def __init__(self, items: Iterable[tuple[str, ParamValue]] = ()) -> None:
        self._entries: list[list] = [[key, value] for key, value in items]

    @classmethod
    def parse(cls, raw: str) -> ParamList:
        """
        Parse a raw ``key=value&key`` string into a new list.

        Raises:
            MalformedUri: If an escape sequence is not valid UTF-8.
        """
        params = cls()
        for token in raw.split("&"):
            if not token:
                continue
            key, sep, value = token.partition("=")
            try:
                entry = [
                    decode_component(key),
                    decode_component(value, plus_as_space=True) if sep else None,
                ]
            except UnicodeDecodeError as e:
                raise MalformedUri(raw) from e
            params._entries.append(entry)
        return params

    def _find(self, key: str) -> list | None:
        for entry in self._entries:
            if entry[0] == key:
                return entry
        return None

    def get(self, key: str) -> ParamValue:
        """Return the first value stored for ``key``, or ``UNDEFINED``."""
        entry = self._find(key)
        if entry is None:
            return UNDEFINED
        value: ParamValue = entry[1]
        return value

    def set(self, key: str, value: ParamValue) -> ParamList:
        """Update the first entry for ``key`` in place, or append a new one."""
        entry = self._find(key)
        if entry is None:
            self._entries.append([key, value])
        else:
            entry[1] = value
        return self

    def add(self, key: str, value: ParamValue) -> ParamList:
        """
        Add a value for ``key``, keeping existing ones.

        A removed (``UNDEFINED``) first entry is reused; otherwise a new
        entry is appended.
        """
        entry = self._find(key)
        if entry is not None and entry[1] is UNDEFINED:
            entry[1] = value
        else:
            self._entries.append([key, value])
        return self

    def get_all(self, key: str) -> list[str | None]:
        """Return every serialized value for ``key``, in order."""
        return [
            value for name, value in self._entries if name == key and value is not UNDEFINED
        ]

    def update(self, params: Mapping[str, ParamValue]) -> ParamList:
        """``set`` every item of ``params``, in mapping order."""
        for key, value in params.items():
            self.set(key, value)
        return self

    def remove(self, key: str) -> ParamList:
        """Mark every entry for ``key`` as ``UNDEFINED`` so none is serialized."""
        for entry in self._entries:
            if entry[0] == key:
                entry[1] = UNDEFINED
        return self

    def items(self) -> list[tuple[str, ParamValue]]:
        """Return all entries as ``(key, value)`` tuples, duplicates included."""
        return [(key, value) for key, value in self._entries]

    def serialize(self) -> str:
        """Serialize to ``key=value&key`` form, skipping ``UNDEFINED`` values."""
        tokens = []
        for key, value in self._entries:
            if value is UNDEFINED:
                continue
            token = encode_component(key)
            if value is not None:
                token += "=" + encode_component(value)
            tokens.append(token)
        return "&".join(tokens)

    def copy(self) -> ParamList:
        """Return an independent copy."""
        return ParamList(self.items())

    def __contains__(self, key: object) -> bool:
        """True when the first entry for ``key`` is not ``UNDEFINED``."""
        if not isinstance(key, str):
            return False
        return self.get(key) is not UNDEFINED

    def __iter__(self) -> Iterator[str]:
        """Iterate over keys in list order."""
        return iter([entry[0] for entry in self._entries])

    def __len__(self) -> int:
        """Return the number of entries, duplicates and removed ones included."""
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParamList):
            return self._entries == other._entries
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"ParamList({self.items()!r})"
