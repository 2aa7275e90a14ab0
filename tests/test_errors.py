"""Tests for trill.errors — exception hierarchy."""

import pytest

from trill.errors import (
    ConfigurationError,
    ConstructionError,
    EngineNotInstalledError,
    OverrideConflictError,
    TrillError,
    UnknownEngineError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [ConfigurationError, ConstructionError, UnknownEngineError, OverrideConflictError, EngineNotInstalledError],
    )
    def test_is_trill_error(self, cls: type) -> None:
        assert issubclass(cls, TrillError)

    def test_override_conflict_is_configuration_error(self) -> None:
        assert issubclass(OverrideConflictError, ConfigurationError)


class TestUnknownEngineError:
    def test_default_message(self) -> None:
        err = UnknownEngineError("notes.txt")
        assert err.identifier == "notes.txt"
        assert str(err) == "Unknown engine for notes.txt"

    def test_custom_detail(self) -> None:
        err = UnknownEngineError("liquid", "Unknown template engine: 'liquid'")
        assert err.identifier == "liquid"
        assert "liquid" in str(err)


class TestOverrideConflictError:
    def test_echoes_declaration(self) -> None:
        err = OverrideConflictError("njk,liquid")
        assert err.declaration == "njk,liquid"
        assert str(err).endswith("You used: njk,liquid")
