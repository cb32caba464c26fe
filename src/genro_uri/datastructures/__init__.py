# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
URI data structures.

Mapping from URI text to genro-uri classes::

    URI text                               genro-uri Classes
    ─────────────────                      ──────────────────
    "http://host/p?a=1&b#c=2"           →  UriValue (mutable, chainable)
    "a=1&b"  (query or fragment)        →  ParamList (ordered, tri-state)
    removed parameter                   →  UNDEFINED

Public Exports
==============
::

    from genro_uri.datastructures import (
        UNDEFINED,
        ParamList,
        ParamValue,
        UriValue,
        decode_component,
        encode_component,
    )

Modules
=======
- ``params``: Ordered parameter list, undefined marker, component codec
- ``uri``: Mutable URI value with lazy parameter parsing
"""

from .params import (
    UNDEFINED,
    ParamList,
    ParamValue,
    decode_component,
    encode_component,
)
from .uri import UriValue

__all__ = [
    "UNDEFINED",
    "ParamList",
    "ParamValue",
    "UriValue",
    "decode_component",
    "encode_component",
]
