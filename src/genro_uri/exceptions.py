# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for genro-uri URI handling and template binding.

Every error raised by this package is a caller contract violation: a
malformed URI string, a template that is not a string, an environment that
is not a mapping, or a placeholder that breaks the template grammar. Nothing
is retried or recovered internally; errors propagate to the immediate caller.

Module Structure
----------------
Two independent families, each with a common base so callers can catch a
whole family at once::

    UriError (ValueError)
    └── MalformedUri

    TemplateError (Exception)
    ├── InvalidTemplate
    ├── InvalidEnvironment
    └── InvalidSyntax

MalformedUri
------------
Raised by ``UriValue.parse()`` (and the ``UriValue`` constructor) when the
source does not match the generic URI grammar or is not a string.

Attributes:
    source: The rejected source value.

Example:
    >>> UriValue.parse("#frag\\nment")
    Traceback (most recent call last):
    ...
    MalformedUri: Malformed URI: '#frag\\nment'

InvalidSyntax
-------------
Raised by ``bind()`` when a ``{...}`` placeholder is empty, breaks the
placeholder grammar, or names an unknown operator. The message always
contains the offending span, braces included, because callers match on it.

Attributes:
    span: The literal placeholder text, e.g. ``"{}"``.

Example:
    >>> bind("http://host/path/{} is also invalid", {})
    Traceback (most recent call last):
    ...
    InvalidSyntax: Invalid syntax : {} (empty placeholder)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "UriError",
    "MalformedUri",
    "TemplateError",
    "InvalidTemplate",
    "InvalidEnvironment",
    "InvalidSyntax",
]


class UriError(ValueError):
    """Base class for URI errors."""


class MalformedUri(UriError):
    """
    Source value does not match the generic URI grammar.

    Attributes:
        source: The value that failed to parse.
    """

    def __init__(self, source: Any) -> None:
        self.source = source
        super().__init__(f"Malformed URI: {source!r}")

    def __repr__(self) -> str:
        return f"MalformedUri(source={self.source!r})"


class TemplateError(Exception):
    """Base class for template binding errors."""


class InvalidTemplate(TemplateError):
    """Template argument is missing or not a string."""

    def __init__(self, template: Any = None) -> None:
        self.template = template
        super().__init__(f"Invalid template: {template!r}")


class InvalidEnvironment(TemplateError):
    """Environment argument is not a mapping."""

    def __init__(self, environment: Any = None) -> None:
        self.environment = environment
        super().__init__(f"Invalid environment: {environment!r}")


class InvalidSyntax(TemplateError):
    """
    Placeholder span violates the template grammar.

    Attributes:
        span: The offending placeholder, braces included.
        reason: Optional detail about what is wrong with it.
    """

    def __init__(self, span: str, reason: str = "") -> None:
        self.span = span
        self.reason = reason
        message = f"Invalid syntax : {span}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InvalidSyntax(span={self.span!r}, reason={self.reason!r})"
