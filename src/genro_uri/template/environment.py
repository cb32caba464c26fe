# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Standard binding environment built from a request URI.

``environment_from_uri()`` returns the ``request.*`` entries that URL
templates commonly reference, so a caller only has to add its own
variables (viewer, owner, locale, ...) on top::

    env = environment_from_uri("https://example.com:8443/gadgets/ifr?v=1")
    env.update({"viewer": "john.doe", "lang": "en"})
    bind("{request.scheme}://{request.host}{-prefix|/|viewer}", env)
    # "https://example.com/john.doe"

Entries::

    request.url       the URI as given
    request.scheme    scheme, "http" if missing
    request.host      host, "localhost" if missing
    request.port      port, "443" for https / "80" otherwise if missing
    request.path      path
    request.query     query string without "?"
    request.fragment  fragment without "#"
"""

from __future__ import annotations

from ..datastructures import UriValue

__all__ = ["environment_from_uri", "split_authority"]

DEFAULT_PORTS = {"http": "80", "https": "443"}


def split_authority(authority: str) -> tuple[str, str]:
    """
    Split an authority into host and port, dropping any userinfo.

    Bracketed IPv6 hosts keep their brackets. Port is "" when absent.
    """
    hostport = authority.rpartition("@")[2]
    if hostport.startswith("["):
        host, _, rest = hostport.partition("]")
        return host + "]", rest[1:] if rest.startswith(":") else ""
    host, _, port = hostport.partition(":")
    return host, port


def environment_from_uri(uri: str | UriValue) -> dict[str, str]:
    """
    Build the ``request.*`` environment for ``uri``.

    Args:
        uri: Request URI string or UriValue.

    Returns:
        A new dict, safe for the caller to extend.

    Raises:
        MalformedUri: If uri is a string that cannot be parsed.
    """
    value = uri if isinstance(uri, UriValue) else UriValue(uri)
    scheme = value.scheme or "http"
    host, port = split_authority(value.authority)
    return {
        "request.url": str(uri),
        "request.scheme": scheme,
        "request.host": host or "localhost",
        "request.port": port or DEFAULT_PORTS.get(scheme.lower(), "80"),
        "request.path": value.path,
        "request.query": value.query,
        "request.fragment": value.fragment,
    }
