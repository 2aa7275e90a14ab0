"""Jinja2 engine.

Optional — requires ``jinja2``::

    pip install trill[jinja]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from trill.engines.base import RenderFunction, TemplateEngine
from trill.errors import JinjaNotInstalledError

if TYPE_CHECKING:
    from jinja2 import Environment


class JinjaEngine(TemplateEngine):
    """Compile template strings with an async jinja2 environment."""

    _env: Environment | None = None

    @property
    def environment(self) -> Environment:
        if self._env is None:
            self._env = _get_environment(self)
        return self._env

    def reset(self) -> None:
        self._env = None

    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        template = self.environment.from_string(source)

        async def render(data: Mapping[str, Any]) -> str:
            return await template.render_async(dict(data))

        return render


def _get_environment(engine: TemplateEngine) -> Environment:
    """Create a jinja2 Environment, raising a clear error if missing."""
    try:
        from jinja2 import Environment, FileSystemLoader
    except ImportError:
        msg = (
            "The jinja2 engine requires 'jinja2'. "
            "Install with: pip install trill[jinja]"
        )
        raise JinjaNotInstalledError(msg) from None

    config = engine.config
    return Environment(
        loader=FileSystemLoader(str(engine.includes_dir)),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        enable_async=True,
    )
