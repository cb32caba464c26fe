# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Operator registry for template placeholders.

Purpose
=======
A placeholder of the form ``{-name|arg|var1,var2}`` is expanded by the
operator registered as ``name``. The binder parses the span, resolves each
variable against the environment and hands the result to the operator; the
operator only turns resolved values into a string.

Built-in operators::

    {-prefix|/|foo}      foo="a"        → "/a"
                         foo=["a","b"]  → "/a/b"
    {-suffix|/|foo}      foo=["a","b"]  → "a/b/"
    {-list|,|foo}        foo=["a","b"]  → "a,b"
    {-join|&|a,b}        a="1", b=None  → "a=1"
    {-opt|yes|a,b}       any present    → "yes"
    {-neg|no|a,b}        none present   → "no"

``prefix``, ``suffix`` and ``list`` take exactly one variable; the others
take one or more.

Definition::

    class Resolved(NamedTuple):
        name: str
        value: str | list[str] | None

    class Operator:
        __slots__ = ("name", "expand", "single")

    class OperatorRegistry:
        __slots__ = ("_operators",)

        @classmethod default(cls) -> OperatorRegistry
        def register(self, name: str, expand: Expander, single: bool = False) -> None
        def get(self, name: str) -> Operator | None
        def copy(self) -> OperatorRegistry
        @property names -> list[str]

Extensibility::

    registry = OperatorRegistry.default()
    registry.register(
        "upper",
        lambda arg, values: (values[0].value or "").upper(),
        single=True,
    )
    TemplateBinder(operators=registry).bind("{-upper||name}", {"name": "x"})

Design Notes
============
- Expanders are plain functions ``(argument, values) -> str``, so each one
  can be tested without the binder.
- Presence: a value is present unless it is None/UNDEFINED or an empty
  sequence. An empty string is present.
"""

from __future__ import annotations

from collections.abc import Set
from typing import Any, Callable, NamedTuple

from ..datastructures import UNDEFINED

__all__ = [
    "Expander",
    "Operator",
    "OperatorRegistry",
    "Resolved",
    "is_present",
]


class Resolved(NamedTuple):
    """A placeholder variable after environment lookup and default fallback."""

    name: str
    value: str | list[str] | None

    @property
    def present(self) -> bool:
        return is_present(self.value)


Expander = Callable[[str, list[Resolved]], str]


def is_present(value: Any) -> bool:
    """
    Presence predicate shared by ``join``, ``opt`` and ``neg``.

    Returns:
        False for None, UNDEFINED and empty sequences, True otherwise
        (an empty string is present).
    """
    if value is None or value is UNDEFINED:
        return False
    if isinstance(value, str):
        return True
    if isinstance(value, (list, tuple, Set)):
        return len(value) > 0
    return True


def _as_list(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _flatten(value: str | list[str]) -> str:
    if isinstance(value, str):
        return value
    return ",".join(value)


def expand_prefix(argument: str, values: list[Resolved]) -> str:
    return "".join(argument + item for item in _as_list(values[0].value))


def expand_suffix(argument: str, values: list[Resolved]) -> str:
    return "".join(item + argument for item in _as_list(values[0].value))


def expand_list(argument: str, values: list[Resolved]) -> str:
    return argument.join(_as_list(values[0].value))


def expand_join(argument: str, values: list[Resolved]) -> str:
    tokens = []
    for resolved in values:
        if resolved.present:
            tokens.append(f"{resolved.name}={_flatten(resolved.value)}")  # type: ignore[arg-type]
    return argument.join(tokens)


def expand_opt(argument: str, values: list[Resolved]) -> str:
    """Emit the literal if at least one variable is present."""
    if any(resolved.present for resolved in values):
        return argument
    return ""


def expand_neg(argument: str, values: list[Resolved]) -> str:
    """Emit the literal if no variable is present."""
    if any(resolved.present for resolved in values):
        return ""
    return argument


class Operator:
    """
    A named expander.

    Attributes:
        name: Operator name as written after ``-`` in a placeholder.
        expand: Function ``(argument, values) -> str``.
        single: True if the placeholder must name exactly one variable.
    """

    __slots__ = ("name", "expand", "single")

    def __init__(self, name: str, expand: Expander, single: bool = False) -> None:
        self.name = name
        self.expand = expand
        self.single = single

    def __call__(self, argument: str, values: list[Resolved]) -> str:
        return self.expand(argument, values)

    def __repr__(self) -> str:
        return f"Operator(name={self.name!r}, single={self.single})"


class OperatorRegistry:
    """
    Registry of template operators by name.

    Example:
        >>> registry = OperatorRegistry.default()
        >>> "prefix" in registry
        True
        >>> registry.get("prefix")("/", [Resolved("foo", ["a", "b"])])
        '/a/b'
    """

    __slots__ = ("_operators",)

    def __init__(self) -> None:
        self._operators: dict[str, Operator] = {}

    @classmethod
    def default(cls) -> OperatorRegistry:
        """Return a registry holding the six built-in operators."""
        registry = cls()
        registry.register("prefix", expand_prefix, single=True)
        registry.register("suffix", expand_suffix, single=True)
        registry.register("list", expand_list, single=True)
        registry.register("join", expand_join)
        registry.register("opt", expand_opt)
        registry.register("neg", expand_neg)
        return registry

    def register(self, name: str, expand: Expander, single: bool = False) -> None:
        """
        Register (or replace) an operator.

        Args:
            name: Operator name, letters only.
            expand: Function ``(argument, values) -> str``.
            single: Require exactly one variable in the placeholder.

        Raises:
            ValueError: If name is not made of ASCII letters.
        """
        if not (name.isascii() and name.isalpha()):
            raise ValueError(f"Invalid operator name: {name!r}")
        self._operators[name] = Operator(name, expand, single=single)

    def get(self, name: str) -> Operator | None:
        """Return the operator registered as ``name``, or None."""
        return self._operators.get(name)

    def copy(self) -> OperatorRegistry:
        registry = OperatorRegistry()
        registry._operators = dict(self._operators)
        return registry

    @property
    def names(self) -> list[str]:
        """Registered operator names, in registration order."""
        return list(self._operators)

    def __len__(self) -> int:
        return len(self._operators)

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    def __repr__(self) -> str:
        return f"OperatorRegistry(operators={self.names})"
