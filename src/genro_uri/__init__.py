# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""genro-uri - URI values and view URL templates.

Main components:
    UriValue: Mutable URI with chainable setters and lazy query/fragment params
    ParamList: Ordered query/fragment parameters with tri-state values
    TemplateBinder: Expands {placeholder} templates against an environment
    OperatorRegistry: prefix, suffix, list, join, opt, neg (extensible)

Usage:
    from genro_uri import UriValue, bind

    url = bind("http://host/{-list|/|path}", {"path": ["a", "b"]})
    uri = UriValue(url).set_query_param("lang", "en")
    str(uri)  # "http://host/a/b?lang=en"
"""

__version__ = "0.1.0"

from .config import BinderConfig, ConfigError
from .datastructures import (
    UNDEFINED,
    ParamList,
    ParamValue,
    UriValue,
    decode_component,
    encode_component,
)
from .exceptions import (
    InvalidEnvironment,
    InvalidSyntax,
    InvalidTemplate,
    MalformedUri,
    TemplateError,
    UriError,
)
from .template import (
    Operator,
    OperatorRegistry,
    Resolved,
    TemplateBinder,
    bind,
    default_binder,
    environment_from_uri,
    is_present,
)

__all__ = [
    # Data structures
    "UNDEFINED",
    "ParamList",
    "ParamValue",
    "UriValue",
    "decode_component",
    "encode_component",
    # Templates
    "Operator",
    "OperatorRegistry",
    "Resolved",
    "TemplateBinder",
    "bind",
    "default_binder",
    "environment_from_uri",
    "is_present",
    # Configuration
    "BinderConfig",
    "ConfigError",
    # Exceptions
    "InvalidEnvironment",
    "InvalidSyntax",
    "InvalidTemplate",
    "MalformedUri",
    "TemplateError",
    "UriError",
]
