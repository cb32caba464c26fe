# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for binder configuration."""

import pytest

from genro_uri.config import DEFAULTS, BinderConfig, ConfigError


class TestBinderConfig:
    """Test BinderConfig option merging."""

    def test_defaults(self, monkeypatch):
        """Without arguments the built-in defaults apply."""
        monkeypatch.delenv("GENRO_URI_MISSING", raising=False)
        monkeypatch.delenv("GENRO_URI_TRACE", raising=False)
        config = BinderConfig()
        assert config.missing == DEFAULTS["missing"] == ""
        assert config.trace is False

    def test_explicit_arguments(self):
        """Explicit arguments override the defaults."""
        config = BinderConfig(missing="-", trace=True)
        assert config.missing == "-"
        assert config.trace is True

    def test_none_does_not_override(self):
        """None arguments are ignored."""
        config = BinderConfig(missing=None, trace=None)
        assert config.missing == ""

    def test_invalid_missing(self):
        """A non-string missing value is rejected."""
        with pytest.raises(ConfigError):
            BinderConfig(missing=5)  # type: ignore[arg-type]

    def test_as_dict(self):
        config = BinderConfig(missing="?", trace=False)
        assert config.as_dict() == {"missing": "?", "trace": False}

    def test_repr(self):
        assert repr(BinderConfig(missing="?")).startswith("BinderConfig(missing='?'")


class TestPrecedence:
    """Environment and command-line layering."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        monkeypatch.delenv("GENRO_URI_MISSING", raising=False)
        monkeypatch.delenv("GENRO_URI_TRACE", raising=False)

    def test_trace_from_environment(self, monkeypatch):
        """GENRO_URI_TRACE should enable tracing."""
        monkeypatch.setenv("GENRO_URI_TRACE", "true")
        assert BinderConfig().trace is True

    def test_falsy_environment_value(self, monkeypatch):
        """Values other than true/1/yes/on disable tracing."""
        monkeypatch.setenv("GENRO_URI_TRACE", "0")
        assert BinderConfig().trace is False

    def test_explicit_beats_environment(self, monkeypatch):
        """An explicit argument wins over the environment."""
        monkeypatch.setenv("GENRO_URI_TRACE", "true")
        assert BinderConfig(trace=False).trace is False

    def test_trace_from_argv(self):
        """--trace on the command line should enable tracing."""
        assert BinderConfig(argv=["--trace"]).trace is True

    def test_argv_beats_environment(self, monkeypatch):
        """The command line wins over the environment."""
        monkeypatch.setenv("GENRO_URI_TRACE", "0")
        assert BinderConfig(argv=["--trace"]).trace is True

    def test_explicit_beats_argv(self):
        """An explicit argument wins over the command line."""
        assert BinderConfig(trace=False, argv=["--trace"]).trace is False

    def test_missing_ignores_environment(self, monkeypatch):
        """GENRO_URI_MISSING must not change the missing substitution."""
        monkeypatch.setenv("GENRO_URI_MISSING", "NULL")
        assert BinderConfig().missing == ""
        assert BinderConfig(missing="?").missing == "?"

    def test_missing_ignores_argv(self):
        """--missing on the command line is not an accepted option."""
        assert BinderConfig(argv=["--missing", "NULL"]).missing == ""
