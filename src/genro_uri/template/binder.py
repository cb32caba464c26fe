# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Placeholder template binding.

Purpose
=======
Expands ``{...}`` placeholders in a URL template against an environment
mapping (viewer id, owner id, country, language, ...) and returns the
resulting string. Literal text outside placeholders passes through
unchanged.

Placeholder Grammar::

    {name}                      value of name, "" if absent
    {name=default}              value of name, "default" if absent
    {-op|arg|name1,name2=dflt}  operator "op" applied to the listed names

    name            [A-Za-z0-9][A-Za-z0-9._-]*
    default         [A-Za-z0-9._~-] or %XX escapes, may be empty
    op              [A-Za-z]+, registered in the OperatorRegistry
    arg             anything but "|" (separator or literal, per operator)

Binding Flow::

    bind(template, environment)
        │
        ├── template not str      → InvalidTemplate
        ├── environment not Mapping → InvalidEnvironment
        │
        └── for each {span}:
              ├── "-op|arg|vars"  → registry[op](arg, resolved vars)
              ├── "-" otherwise   → InvalidSyntax(span)
              ├── "name[=dflt]"   → resolved value
              └── otherwise       → InvalidSyntax(span)

Example::

    from genro_uri import bind

    bind("http://host/path/{A=65}{66=B}", {"A": "a"})
    # "http://host/path/aB"

    bind("http://host/{-list|/|parts}", {"parts": ["f", "o", "o"]})
    # "http://host/f/o/o"

Design Notes
============
- ``None`` (or ``UNDEFINED``) in the environment counts as absent.
- A sequence in a plain placeholder is joined with ",".
- Non-string scalars are converted with ``str()``.
- Braces do not nest; a lone "{" or "}" is literal text.
- A leading "-" always introduces an operator; names cannot start with it.
- Defaults are substituted as written; "%XX" escapes are not decoded.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Mapping, Set
from typing import Any

from ..config import BinderConfig
from ..datastructures import UNDEFINED
from ..exceptions import InvalidEnvironment, InvalidSyntax, InvalidTemplate
from .operators import OperatorRegistry, Resolved

__all__ = ["TemplateBinder", "bind", "default_binder"]

logger = logging.getLogger("genro_uri.template")

SPAN_PATTERN = re.compile(r"\{([^{}]*)\}")
OPERATOR_PATTERN = re.compile(r"-([A-Za-z]+)\|([^|]*)\|(.*)")
VARIABLE_PATTERN = re.compile(
    r"([A-Za-z0-9][A-Za-z0-9._-]*)(?:=((?:[A-Za-z0-9._~-]|%[0-9A-Fa-f]{2})*))?"
)


class TemplateBinder:
    """
    Binds placeholder templates against an environment.

    Stateless once built: ``bind`` has no side effects and can be called
    from several threads at once.

    Attributes:
        operators: The operator registry used for ``{-op|...}`` spans.
        config: Binder options (missing-value substitution, tracing).

    Example:
        >>> binder = TemplateBinder()
        >>> binder.bind("http://host/path/{recurring}{recurring}", {"recurring": "."})
        'http://host/path/..'
    """

    __slots__ = ("operators", "config")

    def __init__(
        self,
        operators: OperatorRegistry | None = None,
        config: BinderConfig | None = None,
    ) -> None:
        """
        Initialize the binder.

        Args:
            operators: Operator registry. Defaults to the six built-ins.
            config: Binder options. Defaults to ``BinderConfig()``.
        """
        self.operators = operators if operators is not None else OperatorRegistry.default()
        self.config = config if config is not None else BinderConfig()

    def bind(self, template: str, environment: Mapping[str, Any]) -> str:
        """
        Expand every placeholder of ``template``.

        Args:
            template: Template string.
            environment: Mapping of variable names to strings or sequences
                         of strings.

        Returns:
            The expanded string.

        Raises:
            InvalidTemplate: If template is not a string.
            InvalidEnvironment: If environment is not a mapping.
            InvalidSyntax: If a placeholder is empty, malformed, or names an
                           unknown operator.
        """
        if not isinstance(template, str):
            raise InvalidTemplate(template)
        if not isinstance(environment, Mapping):
            raise InvalidEnvironment(environment)

        result = SPAN_PATTERN.sub(lambda m: self._expand(m, environment), template)
        if self.config.trace:
            logger.debug(f"bind {template!r} -> {result!r}")
        return result

    def _expand(self, match: re.Match[str], environment: Mapping[str, Any]) -> str:
        span = match.group(0)
        content = match.group(1)
        if not content:
            raise self._syntax_error(span, "empty placeholder")

        if content.startswith("-"):
            op_match = OPERATOR_PATTERN.fullmatch(content)
            if op_match is None:
                raise self._syntax_error(span, "malformed operator")
            name, argument, variables = op_match.groups()
            return self._expand_operator(span, name, argument, variables, environment)

        var_match = VARIABLE_PATTERN.fullmatch(content)
        if var_match is None:
            raise self._syntax_error(span, "malformed placeholder")
        name, default = var_match.groups()
        value = self._resolve(environment, name, default)
        if value is None:
            return self.config.missing
        if isinstance(value, list):
            return ",".join(value)
        return value

    def _expand_operator(
        self,
        span: str,
        name: str,
        argument: str,
        variables: str,
        environment: Mapping[str, Any],
    ) -> str:
        operator = self.operators.get(name)
        if operator is None:
            raise self._syntax_error(span, f"unknown operator {name!r}")

        resolved = []
        for item in variables.split(","):
            var_match = VARIABLE_PATTERN.fullmatch(item)
            if var_match is None:
                raise self._syntax_error(span, f"malformed variable {item!r}")
            var_name, default = var_match.groups()
            resolved.append(Resolved(var_name, self._resolve(environment, var_name, default)))

        if operator.single and len(resolved) != 1:
            raise self._syntax_error(span, f"operator {name!r} takes exactly one variable")
        return operator(argument, resolved)

    @staticmethod
    def _resolve(
        environment: Mapping[str, Any],
        name: str,
        default: str | None,
    ) -> str | list[str] | None:
        """Look ``name`` up, falling back to ``default`` (None if absent and no default)."""
        value = environment.get(name)
        if value is None or value is UNDEFINED:
            return default
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple, Set)):
            return [str(item) for item in value]
        return str(value)

    @staticmethod
    def _syntax_error(span: str, reason: str) -> InvalidSyntax:
        logger.debug(f"Rejected placeholder {span!r}: {reason}")
        return InvalidSyntax(span, reason)

    def __repr__(self) -> str:
        return f"TemplateBinder(operators={self.operators.names}, config={self.config!r})"


@functools.lru_cache(maxsize=None)
def default_binder() -> TemplateBinder:
    """Return the shared binder used by the module-level ``bind``."""
    return TemplateBinder()


def bind(template: str, environment: Mapping[str, Any]) -> str:
    """Bind ``template`` against ``environment`` with the default binder."""
    return default_binder().bind(template, environment)
