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

"""
Configuration for template binding.

Binder options are merged with genro-toolbox SmartOptions, priority:

    built-in DEFAULTS < environment variables < command line < explicit arguments

Only ``trace`` is read from the environment (GENRO_URI_TRACE=1) and the
command line (--trace); it changes logging, never binding output.
``missing`` is constructor-only so that a bind result depends on nothing
but the template, the environment mapping and the binder it runs on.
Explicit arguments left as None do not override anything.

Options:
    missing: String substituted for a variable that is absent from the
             environment and has no ``=default``. Defaults to "".
    trace:   Log every bind at DEBUG level on the ``genro_uri.template``
             logger. Defaults to False.
"""

from __future__ import annotations

from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

__all__ = ["BinderConfig", "ConfigError", "DEFAULTS"]

DEFAULTS = {"missing": "", "trace": False}

# Options read from GENRO_URI_* variables and argv
ENV_OPTIONS = ("trace",)


class ConfigError(Exception):
    """Configuration error."""


def _binder_opts_spec(trace: bool) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class BinderConfig:
    """Resolved binder options."""

    __slots__ = ("_opts",)

    def __init__(
        self,
        missing: str | None = None,
        trace: bool | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self._opts = self._build_config(missing=missing, trace=trace, argv=argv or [])
        missing_opt = self._opts["missing"]
        if missing_opt is not None and not isinstance(missing_opt, str):
            raise ConfigError(
                f"Invalid option 'missing': expected a string, got {missing_opt!r}"
            )

    def _build_config(
        self,
        missing: str | None,
        trace: bool | None,
        argv: list[str],
    ) -> SmartOptions:
        env_argv_opts = SmartOptions(
            _binder_opts_spec,
            env="GENRO_URI",
            argv=argv,
            filter_fn=lambda key, value: key in ENV_OPTIONS,
        )
        caller_opts = SmartOptions(dict(missing=missing, trace=trace), ignore_none=True)
        return SmartOptions(DEFAULTS) + env_argv_opts + caller_opts

    @property
    def missing(self) -> str:
        """Substitution for absent variables without a default."""
        result: str = self._opts["missing"] or ""
        return result

    @property
    def trace(self) -> bool:
        """Whether each bind is logged at DEBUG level."""
        return bool(self._opts["trace"])

    def as_dict(self) -> dict[str, Any]:
        return {"missing": self.missing, "trace": self.trace}

    def __repr__(self) -> str:
        return f"BinderConfig(missing={self.missing!r}, trace={self.trace})"
