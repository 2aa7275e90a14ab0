"""Tests for trill.session — Renderer sessions rendering through real engines."""

from pathlib import Path

import pytest

from trill.cache import CompiledTemplateCache
from trill.config import RenderConfig
from trill.errors import OverrideConflictError
from trill.session import Renderer


@pytest.fixture
def renderer(tmp_path: Path) -> Renderer:
    return Renderer(RenderConfig(input_dir=tmp_path))


class TestTemplates:
    def test_templates_share_session_objects(self, renderer: Renderer) -> None:
        a = renderer.template("a.md")
        b = renderer.template("b.md")
        assert a.cache is b.cache is renderer.cache
        assert a.engine_manager is b.engine_manager is renderer.engine_manager
        assert a.config is renderer.config

    def test_override_applied(self, renderer: Renderer) -> None:
        tr = renderer.template("page.md", override="kida")
        assert tr.engine_name == "kida"
        assert tr.use_markdown is False

    def test_override_conflict(self, renderer: Renderer) -> None:
        with pytest.raises(OverrideConflictError):
            renderer.template("page.md", override="kida,jinja2")

    def test_injected_cache(self) -> None:
        cache = CompiledTemplateCache()
        assert Renderer(cache=cache).template("page.md").cache is cache


class TestRendering:
    @pytest.mark.asyncio
    async def test_markdown_page_with_default_preprocessor(self, renderer: Renderer) -> None:
        tr = renderer.template("page.md")
        assert tr.engine_name == "md"
        assert tr.use_markdown is True
        assert tr.markdown_engine == "kida"

        html = await tr.render("# Hi {{ name }}", {"name": "A"})
        assert "<h1" in html
        assert "Hi A" in html

    @pytest.mark.asyncio
    async def test_kida_override_on_markdown_file(self, renderer: Renderer) -> None:
        html = await renderer.render("page.md", "# Hi {{ name }}", {"name": "A"}, override="kida")
        assert html == "# Hi A"

    @pytest.mark.asyncio
    async def test_jinja_markdown_override(self, renderer: Renderer) -> None:
        tr = renderer.template("page.html", override="jinja2,md")
        assert tr.get_engines_str() == "jinja2 (and markdown)"
        html = await tr.render("**{{ word }}**", {"word": "bold"})
        assert "<strong>bold</strong>" in html

    @pytest.mark.asyncio
    async def test_html_page_preprocessed_by_kida(self, renderer: Renderer) -> None:
        html = await renderer.render("index.html", "<p>{{ name }}</p>", {"name": "A"})
        assert html == "<p>A</p>"

    @pytest.mark.asyncio
    async def test_html_override_leaves_markup_alone(self, renderer: Renderer) -> None:
        html = await renderer.render("index.html", "<p>{{ name }}</p>", {"name": "A"}, override="html")
        assert html == "<p>{{ name }}</p>"

    @pytest.mark.asyncio
    async def test_compiled_function_reused_with_new_data(self, renderer: Renderer) -> None:
        tr = renderer.template("page.kida")
        assert await tr.render("Hello {{ name }}", {"name": "A"}) == "Hello A"
        assert await tr.render("Hello {{ name }}", {"name": "B"}) == "Hello B"
        assert len(renderer.cache) == 1
        assert renderer.cache.stats.hits == 1


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_clears_cache(self, renderer: Renderer) -> None:
        await renderer.render("page.kida", "x")
        assert len(renderer.cache) == 1
        renderer.close()
        assert len(renderer.cache) == 0

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        with Renderer(RenderConfig(input_dir=tmp_path)) as renderer:
            await renderer.render("page.kida", "x")
            cache = renderer.cache
            assert len(cache) == 1
        assert len(cache) == 0
