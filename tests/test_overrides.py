"""Tests for trill.overrides — front matter engine override parsing."""

import pytest

from trill.errors import ConfigurationError, OverrideConflictError
from trill.overrides import parse_engine_overrides


# ── Markdown pairing ─────────────────────────────────────────────────────


class TestMarkdownPairing:
    @pytest.mark.parametrize("declaration", ["md,kida", "kida,md", " KIDA , Md "])
    def test_markdown_sorts_first(self, declaration: str) -> None:
        assert parse_engine_overrides(declaration) == ["md", "kida"]

    def test_markdown_alone(self) -> None:
        assert parse_engine_overrides("md") == ["md"]

    def test_repeated_markdown_collapses(self) -> None:
        assert parse_engine_overrides("md,md,jinja2,md") == ["md", "jinja2"]

    def test_markdown_with_html(self) -> None:
        assert parse_engine_overrides("html,md") == ["md"]


# ── Empty and html-only ──────────────────────────────────────────────────


class TestEmptyDeclarations:
    @pytest.mark.parametrize("declaration", ["", " ", ",", " , ,", "html", "HTML, html", None])
    def test_returns_empty_chain(self, declaration: str | None) -> None:
        assert parse_engine_overrides(declaration) == []


# ── Single engine and duplicates ─────────────────────────────────────────


class TestSingleEngine:
    def test_single_engine(self) -> None:
        assert parse_engine_overrides("kida") == ["kida"]

    def test_lowercases_and_strips(self) -> None:
        assert parse_engine_overrides("  Jinja2 ") == ["jinja2"]

    def test_duplicates_collapse(self) -> None:
        assert parse_engine_overrides("kida,kida") == parse_engine_overrides("kida")

    def test_html_is_dropped(self) -> None:
        assert parse_engine_overrides("kida,html") == ["kida"]

    def test_idempotent(self) -> None:
        declaration = "kida,md,kida"
        assert parse_engine_overrides(declaration) == parse_engine_overrides(declaration)


# ── Conflicts ────────────────────────────────────────────────────────────


class TestConflicts:
    @pytest.mark.parametrize("declaration", ["kida,jinja2", "md,kida,jinja2", "kida,liquid,njk"])
    def test_multiple_engines_rejected(self, declaration: str) -> None:
        with pytest.raises(OverrideConflictError):
            parse_engine_overrides(declaration)

    def test_error_echoes_declaration(self) -> None:
        with pytest.raises(OverrideConflictError) as exc_info:
            parse_engine_overrides("njk,liquid")
        assert exc_info.value.declaration == "njk,liquid"
        assert "njk,liquid" in str(exc_info.value)

    def test_conflict_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_engine_overrides("kida,jinja2")

    def test_duplicate_of_one_engine_is_not_a_conflict(self) -> None:
        assert parse_engine_overrides("kida, KIDA, md") == ["md", "kida"]
