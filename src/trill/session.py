"""Render session.

A ``Renderer`` owns everything that should live for one build: the
config, the extension map, a shared engine manager and the
compiled-template cache. Templates created from the same session share
compiled output; ``close()`` drops it.

Basic usage::

    from trill import Renderer

    with Renderer(RenderConfig(input_dir="site")) as renderer:
        html = await renderer.render("site/index.md", "# Hi {{ name }}", {"name": "A"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from trill.cache import CompiledTemplateCache
from trill.config import RenderConfig
from trill.engines.manager import EngineManager
from trill.extensions import ExtensionMap
from trill.render import TemplateRender

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger("trill.session")


class Renderer:
    """Factory for ``TemplateRender`` objects sharing one cache and engine manager."""

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        extension_map: ExtensionMap | None = None,
        engine_manager: EngineManager | None = None,
        cache: CompiledTemplateCache | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.extension_map = extension_map or ExtensionMap.from_config(self.config)
        self.engine_manager = engine_manager or EngineManager(self.config)
        self.cache = cache if cache is not None else CompiledTemplateCache()

    def template(
        self,
        name_or_path: str,
        input_dir: str | Path | None = None,
        *,
        override: str | None = None,
        bypass_markdown: bool = False,
    ) -> TemplateRender:
        """Create a ``TemplateRender`` bound to this session.

        ``override`` is a front matter engine declaration; when given it
        is applied immediately.
        """
        tr = TemplateRender(
            name_or_path,
            input_dir,
            config=self.config,
            extension_map=self.extension_map,
            engine_manager=self.engine_manager,
            cache=self.cache,
        )
        if override is not None:
            tr.set_engine_override(override, bypass_markdown)
        return tr

    async def render(
        self,
        name_or_path: str,
        body: str,
        data: Mapping[str, Any] | None = None,
        *,
        input_dir: str | Path | None = None,
        override: str | None = None,
        bypass_markdown: bool = False,
    ) -> str:
        """Render ``body`` as the template ``name_or_path``."""
        tr = self.template(
            name_or_path, input_dir, override=override, bypass_markdown=bypass_markdown
        )
        return await tr.render(body, data)

    def close(self) -> None:
        """End the session, dropping every compiled template.

        Compiles still running when the session closes are not stored.
        """
        stats = self.cache.stats
        logger.debug(
            "Closing render session: %d compiled, %d hits, %d coalesced",
            len(self.cache),
            stats.hits,
            stats.coalesced,
        )
        self.cache.clear()

    def __enter__(self) -> Renderer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
