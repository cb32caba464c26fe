# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Placeholder template binding.

Public Exports
==============
::

    from genro_uri.template import (
        Operator,
        OperatorRegistry,
        Resolved,
        TemplateBinder,
        bind,
        default_binder,
        environment_from_uri,
        is_present,
    )

Modules
=======
- ``operators``: Operator registry and the six built-in operators
- ``binder``: Template scanner, variable resolution, ``bind()``
- ``environment``: Standard ``request.*`` environment from a URI
"""

from .binder import TemplateBinder, bind, default_binder
from .environment import environment_from_uri, split_authority
from .operators import Operator, OperatorRegistry, Resolved, is_present

__all__ = [
    "Operator",
    "OperatorRegistry",
    "Resolved",
    "TemplateBinder",
    "bind",
    "default_binder",
    "environment_from_uri",
    "is_present",
    "split_authority",
]
