"""Per-template render dispatch.

``TemplateRender`` decides which engine renders a template, applies front
matter engine overrides, and hands out compiled render functions through
the compiled-template cache::

    tr = TemplateRender("posts/hello.md", config=config, cache=cache)
    tr.set_engine_override("kida,md")
    fn = await tr.get_compiled_template(body)
    html = await fn({"title": "Hello"})

Works with full paths or bare engine names (``TemplateRender("kida")``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from trill.cache import CompiledTemplateCache
from trill.config import RenderConfig
from trill.errors import ConstructionError, UnknownEngineError
from trill.overrides import HTML, MARKDOWN, parse_engine_overrides
from trill.resolver import BoundEngine, EngineResolver, Resolution

if TYPE_CHECKING:
    from trill.chain import CompileChain
    from trill.engines.base import RenderFunction, TemplateEngine
    from trill.engines.manager import EngineManager
    from trill.extensions import ExtensionMap

logger = logging.getLogger("trill.render")


@dataclass(slots=True)
class RenderState:
    """Chaining state for one template.

    ``use_markdown`` is ``None`` until set explicitly or defaulted by the
    first resolution. Preprocessor engines of ``None`` mean disabled.
    """

    use_markdown: bool | None = None
    markdown_engine: str | None = None
    html_engine: str | None = None


class TemplateRender:
    """Engine selection and compiled-template lookup for one template.

    Args:
        name_or_path: Template path (``"posts/a.md"``) or engine name (``"md"``).
        input_dir: Input directory hint; the includes directory is
            resolved relative to it. Defaults to ``config.input_dir``.
        config: Render configuration.
        extension_map: Extension lookup. Built from ``config`` if omitted.
        engine_manager: Shared engine manager. A fresh one per
            resolution if omitted.
        cache: Compiled-template cache. Pass the session's cache to share
            compiles across templates; a private one is created if omitted.

    Raises:
        ConstructionError: If ``name_or_path`` is empty.
    """

    def __init__(
        self,
        name_or_path: str,
        input_dir: str | Path | None = None,
        *,
        config: RenderConfig | None = None,
        extension_map: ExtensionMap | None = None,
        engine_manager: EngineManager | None = None,
        cache: CompiledTemplateCache | None = None,
    ) -> None:
        if not name_or_path:
            msg = f"TemplateRender requires a template path or engine name, got {name_or_path!r}"
            raise ConstructionError(msg)

        self.name_or_path = name_or_path
        self.input_dir = input_dir
        self.config = config or RenderConfig()
        self.cache = cache if cache is not None else CompiledTemplateCache()
        self._resolver = EngineResolver(self.config, extension_map, engine_manager)
        self.includes_dir = self._resolver.includes_dir_for(input_dir)

        self._state = RenderState(
            markdown_engine=self.config.markdown_template_engine,
            html_engine=self.config.html_template_engine,
        )
        self._bound: BoundEngine | None = None

    # -- Resolution -------------------------------------------------------

    @property
    def resolution(self) -> Resolution:
        return Resolution.UNRESOLVED if self._bound is None else Resolution.RESOLVED

    def _resolve(self, identifier: str) -> BoundEngine:
        bound = self._resolver.resolve(identifier, self.includes_dir)
        self._bound = bound
        if self._state.use_markdown is None:
            self.set_use_markdown(bound.name == MARKDOWN)
        return bound

    @property
    def bound(self) -> BoundEngine:
        """The bound engine, resolving ``name_or_path`` on first access."""
        if self._bound is None:
            return self._resolve(self.name_or_path)
        return self._bound

    @property
    def engine_name(self) -> str:
        return self.bound.name

    @property
    def engine(self) -> TemplateEngine:
        return self.bound.engine

    @property
    def engine_manager(self) -> EngineManager:
        return self.bound.manager

    def is_engine(self, name: str) -> bool:
        return self.engine_name == name

    # -- State ------------------------------------------------------------

    @property
    def use_markdown(self) -> bool:
        _ = self.bound
        return bool(self._state.use_markdown)

    @property
    def markdown_engine(self) -> str | None:
        return self._state.markdown_engine

    @property
    def html_engine(self) -> str | None:
        return self._state.html_engine

    def set_use_markdown(self, use_markdown: bool) -> None:
        self._state.use_markdown = bool(use_markdown)

    def set_markdown_engine(self, engine: str | None) -> None:
        """Set the markdown preprocessor; ``None``/``False`` parses markdown only."""
        self._state.markdown_engine = engine or None

    def set_html_engine(self, engine: str | None) -> None:
        """Set the html preprocessor; ``None``/``False`` leaves html untouched."""
        self._state.html_engine = engine or None

    def set_engine_override(self, declaration: str | None, bypass_markdown: bool = False) -> None:
        """Apply a front matter engine override.

        The override engine becomes the primary engine, so html is never
        preprocessed afterwards. ``"kida,md"`` renders markdown
        preprocessed by kida; ``"kida"`` renders with kida alone.

        Raises:
            OverrideConflictError: If two non-markup engines are named.
            UnknownEngineError: If the override names an unknown or
                disabled engine, as primary or as markdown preprocessor.
        """
        engines = parse_engine_overrides(declaration)

        self.set_html_engine(None)

        if not engines:
            self._resolve(HTML)
            return

        self._resolve(engines[0])

        using_markdown = engines[0] == MARKDOWN and not bypass_markdown
        self.set_use_markdown(using_markdown)

        if using_markdown:
            preprocessor = None
            if len(engines) > 1:
                # Same alias and enabled-format lookup as the primary engine
                preprocessor = self._resolver.extension_map.get_key(engines[1])
                if preprocessor is None:
                    raise UnknownEngineError(engines[1])
            self.set_markdown_engine(preprocessor)

        logger.debug(
            "Engine override %r on %s: %s", declaration, self.name_or_path, self.get_engines_str()
        )

    parse_engine_overrides = staticmethod(parse_engine_overrides)

    def get_engines_str(self) -> str:
        """Human-readable engine description for error messages."""
        if self.engine_name == MARKDOWN and self.use_markdown:
            if self._state.markdown_engine:
                return f"{self._state.markdown_engine} (and markdown)"
            return "markdown"
        return self.engine_name

    # -- Compilation ------------------------------------------------------

    @property
    def chain(self) -> CompileChain:
        """Compile chain for the bound engine and current state."""
        return self.engine.make_chain(self._state)

    def cache_key(self, body: str) -> str:
        return self.chain.cache_key(self.engine_name, self.name_or_path, body)

    async def get_compiled_template(self, body: str) -> RenderFunction:
        """Return the compiled render function for ``body``, compiling on a cache miss."""
        bound = self.bound
        chain = bound.engine.make_chain(self._state)
        key = chain.cache_key(bound.name, self.name_or_path, body)

        async def compile_template() -> RenderFunction:
            return await chain.compile(bound.engine, body, self.name_or_path)

        return await self.cache.get_or_compile(key, compile_template)

    async def render(self, body: str, data: Mapping[str, Any] | None = None) -> str:
        """Compile (or fetch) ``body`` and render it with ``data``."""
        fn = await self.get_compiled_template(body)
        return await fn(data or {})

    def __repr__(self) -> str:
        return f"TemplateRender({self.name_or_path!r}, {self.resolution.value})"
