"""Kida engine.

Builds a kida Environment from the active ``RenderConfig`` with the
includes directory as its loader root. The environment is created on first
compile and dropped whenever the engine is reset.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader

from trill.engines.base import RenderFunction, TemplateEngine


class KidaEngine(TemplateEngine):
    """Compile template strings with kida."""

    _env: Environment | None = None

    @property
    def environment(self) -> Environment:
        if self._env is None:
            self._env = create_environment(self)
        return self._env

    def reset(self) -> None:
        self._env = None

    async def compile(self, source: str, name_or_path: str, *args: Any) -> RenderFunction:
        template = self.environment.from_string(source)

        async def render(data: Mapping[str, Any]) -> str:
            return template.render(dict(data))

        return render


def create_environment(engine: TemplateEngine) -> Environment:
    """Create a kida Environment for an engine's config and includes dir.

    The includes directory is only attached as a loader when it exists,
    so inline templates compile without a site layout on disk.
    """
    config = engine.config
    options: dict[str, Any] = {
        "autoescape": config.autoescape,
        "trim_blocks": config.trim_blocks,
        "lstrip_blocks": config.lstrip_blocks,
    }
    if engine.includes_dir.is_dir():
        options["loader"] = FileSystemLoader(str(engine.includes_dir))
    return Environment(**options)
