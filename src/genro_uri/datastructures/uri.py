# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Mutable URI value with lazily parsed query and fragment parameters.

Purpose
=======
Parses a URI string into its five components, lets callers change any of
them in place, and serializes the result back to a string. Query and
fragment parameters are only parsed when a caller asks for one of them.

URI Parsing Schema::

    http://www.example.com/my/path?qk1=qv1&qk2=qv2#fk1=fv1&fk2=fv2
    ────   ───────────────────────  ───────────────  ───────────────
    scheme    authority     path         query           fragment
    ──────────────────────
            origin

Query and fragment state::

    str        raw text, authoritative until a parameter is read or set
    ParamList  materialized parameters, authoritative; the string form is
               re-serialized from it on every read

``set_query()`` / ``set_fragment()`` always go back to the raw ``str`` state.

Definition::

    class UriValue:
        __slots__ = ("_scheme", "_authority", "_path", "_query", "_fragment")

        def __init__(self, source: str | UriValue | None = None) -> None
        @classmethod parse(cls, source: str) -> UriValue
        @property scheme / authority / path / query / fragment / origin -> str
        def set_scheme(self, value: str) -> UriValue
        def set_authority(self, value: str) -> UriValue
        def set_path(self, value: str | None) -> UriValue
        def clear_path(self) -> UriValue
        def set_query(self, raw: str | None) -> UriValue
        def set_fragment(self, raw: str | None) -> UriValue
        def get_query_param(self, key: str) -> ParamValue
        def get_fragment_param(self, key: str) -> ParamValue
        def set_query_param(self, key, value=UNDEFINED) -> UriValue
        def set_fragment_param(self, key, value=UNDEFINED) -> UriValue
        def add_query_param(self, key: str, value: ParamValue) -> UriValue
        def add_fragment_param(self, key: str, value: ParamValue) -> UriValue
        def get_query_params(self, key: str) -> list[str | None]
        def get_fragment_params(self, key: str) -> list[str | None]
        def remove_query_param(self, key: str) -> UriValue
        def remove_fragment_param(self, key: str) -> UriValue
        def set_existing_param(self, key: str, value: ParamValue) -> UriValue
        def resolve(self, relative: str | UriValue) -> UriValue
        def has_same_origin(self, other: str | UriValue) -> bool
        def copy(self) -> UriValue

Example::

    from genro_uri import UriValue

    uri = (
        UriValue("http://www.example.com/my/path?one=two&baz#three=four")
        .set_authority("www.foo.com")
        .set_query_param("one", "five")
        .set_fragment("foo=bar")
    )
    str(uri)  # "http://www.foo.com/my/path?one=five&baz#foo=bar"

Design Notes
============
- All mutators return ``self`` for chaining.
- ``set_path("")`` is a no-op, unlike ``set_query("")`` which clears the
  query. Use ``clear_path()`` to empty the path.
- Parsed components are stored verbatim; only ``set_path`` normalizes.
- ``resolve`` follows RFC 3986 section 5.2 and removes dot segments from
  the merged path; it returns a new value and leaves ``self`` alone.
- Not thread-safe: one writer per instance.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Union

from ..exceptions import MalformedUri
from .params import UNDEFINED, ParamList, ParamValue

__all__ = ["UriValue"]

# RFC 3986 appendix B, anchored. No DOTALL: a line break in the fragment fails.
URI_PATTERN = re.compile(
    r"(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?"
)

_ParamState = Union[str, ParamList]


class UriValue:
    """
    Mutable URI with chainable setters.

    Attributes:
        scheme: Scheme without ``:`` (e.g. "http"), or "".
        authority: Host and optional port/userinfo, or "".
        path: Path as stored, or "".
        query: Query string without ``?``.
        fragment: Fragment without ``#``.
        origin: ``scheme://authority`` with absent parts omitted.

    Example:
        >>> uri = UriValue("http://www.example.com/my/path?qk1=qv1#fk1=fv1")
        >>> uri.origin
        'http://www.example.com'
        >>> uri.get_query_param("qk1")
        'qv1'
        >>> str(uri.set_query_param("qk1", None))
        'http://www.example.com/my/path?qk1#fk1=fv1'
    """

    __slots__ = ("_scheme", "_authority", "_path", "_query", "_fragment")

    def __init__(self, source: str | UriValue | None = None) -> None:
        """
        Initialize from a URI string, another UriValue, or nothing.

        Args:
            source: URI string to parse, UriValue to copy, or None for an
                    empty URI.

        Raises:
            MalformedUri: If source is not a valid URI string.
        """
        self._scheme = ""
        self._authority = ""
        self._path = ""
        self._query: _ParamState = ""
        self._fragment: _ParamState = ""
        if source is None:
            return
        if isinstance(source, UriValue):
            self._copy_from(source)
        else:
            self._parse_from(source)

    @classmethod
    def parse(cls, source: str) -> UriValue:
        """Parse ``source`` into a new UriValue, raising MalformedUri."""
        return cls(source)

    def _parse_from(self, source: object) -> None:
        if not isinstance(source, str):
            raise MalformedUri(source)
        match = URI_PATTERN.fullmatch(source)
        if match is None:
            raise MalformedUri(source)
        scheme, authority, path, query, fragment = match.groups()
        self._scheme = scheme or ""
        self._authority = authority or ""
        self._path = path or ""
        self._query = query or ""
        self._fragment = fragment or ""

    def _copy_from(self, other: UriValue) -> None:
        self._scheme = other._scheme
        self._authority = other._authority
        self._path = other._path
        self._query = _copy_state(other._query)
        self._fragment = _copy_state(other._fragment)

    # Components

    @property
    def scheme(self) -> str:
        """Scheme without the trailing ':'."""
        return self._scheme

    @property
    def authority(self) -> str:
        """Authority without the leading '//'."""
        return self._authority

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> str:
        """Query string without '?', re-serialized if parameters were touched."""
        return str(self._query)

    @property
    def fragment(self) -> str:
        """Fragment without '#', re-serialized if parameters were touched."""
        return str(self._fragment)

    @property
    def origin(self) -> str:
        """``scheme://authority``, omitting ':' without scheme and '//' without authority."""
        parts = []
        if self._scheme:
            parts.append(self._scheme + ":")
        if self._authority:
            parts.append("//" + self._authority)
        return "".join(parts)

    def set_scheme(self, value: str) -> UriValue:
        self._scheme = value
        return self

    def set_authority(self, value: str) -> UriValue:
        self._authority = value
        return self

    def set_path(self, value: str | None) -> UriValue:
        """
        Set the path, adding a leading '/' when missing.

        An empty or None value leaves the current path untouched; use
        ``clear_path()`` to empty it.
        """
        if value:
            self._path = value if value.startswith("/") else "/" + value
        return self

    def clear_path(self) -> UriValue:
        """Empty the path."""
        self._path = ""
        return self

    def set_query(self, raw: str | None) -> UriValue:
        """Replace the raw query, dropping one leading '?' and any parsed parameters."""
        self._query = _strip_prefix(raw, "?")
        return self

    def set_fragment(self, raw: str | None) -> UriValue:
        """Replace the raw fragment, dropping one leading '#' and any parsed parameters."""
        self._fragment = _strip_prefix(raw, "#")
        return self

    # Parameters

    def _query_params(self) -> ParamList:
        if not isinstance(self._query, ParamList):
            self._query = ParamList.parse(self._query)
        return self._query

    def _fragment_params(self) -> ParamList:
        if not isinstance(self._fragment, ParamList):
            self._fragment = ParamList.parse(self._fragment)
        return self._fragment

    def get_query_param(self, key: str) -> ParamValue:
        """
        Return a query parameter value.

        Returns:
            The string value, None for a bare key, UNDEFINED if absent.
        """
        return self._query_params().get(key)

    def get_fragment_param(self, key: str) -> ParamValue:
        """
        Return a fragment parameter value.

        Returns:
            The string value, None for a bare key, UNDEFINED if absent.
        """
        return self._fragment_params().get(key)

    def set_query_param(
        self,
        key: str | Mapping[str, ParamValue],
        value: ParamValue = UNDEFINED,
    ) -> UriValue:
        """
        Set one query parameter, or several from a mapping.

        Existing keys keep their position; new keys are appended. A value of
        None serializes as a bare key, UNDEFINED removes the key from the
        output.

        Args:
            key: Parameter name, or a mapping of names to values.
            value: New value (ignored when key is a mapping).
        """
        _apply(self._query_params(), key, value)
        return self

    def set_fragment_param(
        self,
        key: str | Mapping[str, ParamValue],
        value: ParamValue = UNDEFINED,
    ) -> UriValue:
        """Set one fragment parameter, or several from a mapping. See ``set_query_param``."""
        _apply(self._fragment_params(), key, value)
        return self

    def add_query_param(self, key: str, value: ParamValue) -> UriValue:
        """Add a query parameter, keeping any existing values for ``key``."""
        self._query_params().add(key, value)
        return self

    def add_fragment_param(self, key: str, value: ParamValue) -> UriValue:
        """Add a fragment parameter, keeping any existing values for ``key``."""
        self._fragment_params().add(key, value)
        return self

    def get_query_params(self, key: str) -> list[str | None]:
        """Return every value of a repeated query parameter, in order."""
        return self._query_params().get_all(key)

    def get_fragment_params(self, key: str) -> list[str | None]:
        """Return every value of a repeated fragment parameter, in order."""
        return self._fragment_params().get_all(key)

    def remove_query_param(self, key: str) -> UriValue:
        self._query_params().remove(key)
        return self

    def remove_fragment_param(self, key: str) -> UriValue:
        self._fragment_params().remove(key)
        return self

    def set_existing_param(self, key: str, value: ParamValue) -> UriValue:
        """
        Update ``key`` wherever it already exists (query and/or fragment).

        Does nothing if neither the query nor the fragment contains the key.
        """
        if self.get_query_param(key) is not UNDEFINED:
            self.set_query_param(key, value)
        if self.get_fragment_param(key) is not UNDEFINED:
            self.set_fragment_param(key, value)
        return self

    @property
    def query_params(self) -> list[tuple[str, ParamValue]]:
        """Parsed query parameters, in order, duplicates included."""
        return self._query_params().items()

    @property
    def fragment_params(self) -> list[tuple[str, ParamValue]]:
        """Parsed fragment parameters, in order, duplicates included."""
        return self._fragment_params().items()

    # Comparison and serialization

    def is_absolute(self) -> bool:
        """True if the URI has a scheme."""
        return bool(self._scheme)

    def resolve(self, relative: str | UriValue) -> UriValue:
        """
        Resolve a relative reference against this URI.

        Args:
            relative: Reference such as "../g", "?y", "#s" or "//host/p".

        Returns:
            A new UriValue; this one is not modified.

        Raises:
            MalformedUri: If relative is not a valid URI string.

        Example:
            >>> str(UriValue("http://a/b/c/d;p?q").resolve("../g"))
            'http://a/b/g'
        """
        source = str(relative) if isinstance(relative, UriValue) else relative
        if not isinstance(source, str):
            raise MalformedUri(source)
        match = URI_PATTERN.fullmatch(source)
        if match is None:
            raise MalformedUri(source)
        scheme, authority, path, query, fragment = match.groups()
        path = path or ""

        target = UriValue()
        if scheme is not None:
            target._scheme = scheme
            target._authority = authority or ""
            target._path = remove_dot_segments(path)
            target._query = query or ""
        else:
            if authority is not None:
                target._authority = authority
                target._path = remove_dot_segments(path)
                target._query = query or ""
            else:
                if not path:
                    target._path = self._path
                    target._query = query if query is not None else self.query
                else:
                    if path.startswith("/"):
                        target._path = remove_dot_segments(path)
                    else:
                        target._path = remove_dot_segments(self._merge_path(path))
                    target._query = query or ""
                target._authority = self._authority
            target._scheme = self._scheme
        target._fragment = fragment or ""
        return target

    def _merge_path(self, path: str) -> str:
        if self._authority and not self._path:
            return "/" + path
        return self._path[: self._path.rfind("/") + 1] + path

    def has_same_origin(self, other: str | UriValue) -> bool:
        """
        Compare origins with another URI.

        Schemes and authorities are compared case-insensitively.
        """
        if not isinstance(other, UriValue):
            other = UriValue(other)
        return self.origin.lower() == other.origin.lower()

    def copy(self) -> UriValue:
        """Return an independent copy."""
        return UriValue(self)

    def __str__(self) -> str:
        result = self.origin + self._path
        query = self.query
        if query:
            result += "?" + query
        fragment = self.fragment
        if fragment:
            result += "#" + fragment
        return result

    def __repr__(self) -> str:
        return f"UriValue({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        """Compare serialized forms with another UriValue or a string."""
        if isinstance(other, UriValue):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return False

    __hash__ = None  # type: ignore[assignment]


def remove_dot_segments(path: str) -> str:
    """Remove "." and ".." segments from ``path`` (RFC 3986 section 5.2.4)."""
    output: list[str] = []
    while path:
        if path.startswith("../"):
            path = path[3:]
        elif path.startswith("./"):
            path = path[2:]
        elif path.startswith("/./"):
            path = path[2:]
        elif path == "/.":
            path = "/"
        elif path.startswith("/../"):
            path = path[3:]
            if output:
                output.pop()
        elif path == "/..":
            path = "/"
            if output:
                output.pop()
        elif path in (".", ".."):
            path = ""
        else:
            end = path.find("/", 1 if path.startswith("/") else 0)
            if end == -1:
                end = len(path)
            output.append(path[:end])
            path = path[end:]
    return "".join(output)


def _strip_prefix(raw: str | None, prefix: str) -> str:
    if not raw:
        return ""
    return raw[1:] if raw.startswith(prefix) else raw


def _copy_state(state: _ParamState) -> _ParamState:
    if isinstance(state, ParamList):
        return state.copy()
    return state


def _apply(
    params: ParamList,
    key: str | Mapping[str, ParamValue],
    value: ParamValue,
) -> None:
    if isinstance(key, Mapping):
        params.update(key)
    else:
        params.set(key, value)
