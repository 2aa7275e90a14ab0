"""Shared fixtures for trill tests.

``RecordingEngine`` and ``RecordingMarkdownEngine`` count compiles and keep
the arguments each compile received, so tests can check cache behaviour
and chain argument shapes without a real template engine.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from trill.cache import CompiledTemplateCache
from trill.config import RenderConfig
from trill.engines.base import RenderFunction, TemplateEngine, static_render
from trill.engines.html import HtmlEngine
from trill.engines.manager import EngineManager
from trill.engines.markdown import MarkdownEngine
from trill.extensions import ExtensionMap
from trill.render import TemplateRender


class RecordingEngine(TemplateEngine):
    """Renders ``"<name>:<source>"`` and records every compile."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.compiles: list[tuple[str, str, tuple[Any, ...]]] = []
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1

    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        self.compiles.append((source, name_or_path, args))
        name = self.name

        async def render(data: Mapping[str, Any]) -> str:
            return f"{name}:{source}"

        return render


class RecordingMarkdownEngine(MarkdownEngine):
    """Markdown family engine that records chain arguments instead of rendering."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.compiles: list[tuple[str, str, tuple[Any, ...]]] = []

    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        self.compiles.append((source, name_or_path, args))
        return static_render(f"md:{source}")


class RecordingHtmlEngine(HtmlEngine):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.compiles: list[tuple[str, str, tuple[Any, ...]]] = []

    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        self.compiles.append((source, name_or_path, args))
        return static_render(f"html:{source}")


RECORDING_ENGINES: dict[str, type[TemplateEngine]] = {
    "md": RecordingMarkdownEngine,
    "html": RecordingHtmlEngine,
    "kida": RecordingEngine,
    "jinja2": RecordingEngine,
}


@pytest.fixture
def config(tmp_path: Path) -> RenderConfig:
    return RenderConfig(input_dir=tmp_path)


@pytest.fixture
def cache() -> CompiledTemplateCache:
    return CompiledTemplateCache()


@pytest.fixture
def recording_manager(config: RenderConfig) -> EngineManager:
    """Engine manager whose built-in names all map to recording engines."""
    return EngineManager(config, engines=RECORDING_ENGINES)


@pytest.fixture
def make_render(config: RenderConfig, recording_manager: EngineManager, cache: CompiledTemplateCache):
    """Factory for TemplateRender objects sharing one recording manager and cache."""

    def _make(name_or_path: str, input_dir: str | Path | None = None) -> TemplateRender:
        return TemplateRender(
            name_or_path,
            input_dir,
            config=config,
            extension_map=ExtensionMap.from_config(config),
            engine_manager=recording_manager,
            cache=cache,
        )

    return _make
