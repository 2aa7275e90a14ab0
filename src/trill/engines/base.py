"""Template engine base class.

Every engine compiles a template string into an async render function.
Engines are created and cached by ``EngineManager`` and receive the active
``RenderConfig`` through ``set_config()`` during resolution.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

from trill.chain import CompileChain, PlainChain
from trill.config import RenderConfig

if TYPE_CHECKING:
    from trill.engines.manager import EngineManager
    from trill.render import RenderState

logger = logging.getLogger("trill.engines")

# Compiled template — receives render data, returns output
RenderFunction: TypeAlias = Callable[[Mapping[str, Any]], Awaitable[str]]


class TemplateEngine(ABC):
    """Base for engines that turn a template string into a ``RenderFunction``.

    Subclasses implement ``compile()``. Engines that take chaining
    arguments (markdown, html) also override ``make_chain()`` so the
    dispatcher never has to branch on engine names.
    """

    def __init__(
        self,
        name: str,
        includes_dir: str | Path,
        *,
        manager: EngineManager | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        self.name = name
        self.includes_dir = Path(includes_dir)
        self.manager = manager
        self._config = config or RenderConfig()
        self._seen: set[str] = set()

    @property
    def config(self) -> RenderConfig:
        return self._config

    def set_config(self, config: RenderConfig) -> None:
        """Swap the active config, dropping state built from the old one."""
        if config == self._config:
            return
        self._config = config
        self.reset()

    def reset_module_cache(self, identifier: str) -> None:
        """Forget cached engine state when ``identifier`` is resolved again.

        The first resolution of an identifier only records it; later ones
        reset so includes and config edits are picked up.
        """
        if identifier in self._seen:
            logger.debug("Resetting %s engine state for %s", self.name, identifier)
            self.reset()
        self._seen.add(identifier)

    def reset(self) -> None:
        """Drop cached environments. No-op for stateless engines."""

    def make_chain(self, state: RenderState) -> CompileChain:
        """Build the compile chain for the current render state."""
        return PlainChain()

    @abstractmethod
    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        """Compile ``source`` into a render function."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, includes_dir={str(self.includes_dir)!r})"


def static_render(output: str) -> RenderFunction:
    """Render function that ignores its data and returns ``output``."""

    async def render(data: Mapping[str, Any]) -> str:
        return output

    return render
