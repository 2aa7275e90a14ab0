"""Engine manager — creates, configures and caches engine instances.

Built-in engines are imported lazily so ``import trill`` does not pull in
patitas or jinja2. Third-party engines are added with ``register_engine()``.
"""

from __future__ import annotations

import importlib
from pathlib import Path

from trill.config import RenderConfig
from trill.engines.base import TemplateEngine
from trill.errors import UnknownEngineError

# name -> "module:ClassName"
_BUILTIN_ENGINES: dict[str, str] = {
    "md": "trill.engines.markdown:MarkdownEngine",
    "html": "trill.engines.html:HtmlEngine",
    "kida": "trill.engines.kida:KidaEngine",
    "jinja2": "trill.engines.jinja:JinjaEngine",
}

# Third-party engine registry (for plugins)
_ENGINES: dict[str, type[TemplateEngine]] = {}


def register_engine(name: str, engine_class: type[TemplateEngine]) -> None:
    """Register a third-party template engine for every manager.

    Args:
        name: Engine identifier (used in overrides and ``template_formats``)
        engine_class: ``TemplateEngine`` subclass

    """
    _ENGINES[name.lower()] = engine_class


def _load_builtin(name: str) -> type[TemplateEngine]:
    module_path, _, class_name = _BUILTIN_ENGINES[name].partition(":")
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


class EngineManager:
    """Hand out engine instances, one per ``(name, includes_dir)``.

    Engines created here share the manager's config and can fetch each
    other through ``engine.manager`` for preprocessing.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        engines: dict[str, type[TemplateEngine]] | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self._classes: dict[str, type[TemplateEngine]] = dict(engines or {})
        self._instances: dict[tuple[str, Path], TemplateEngine] = {}

    def register(self, name: str, engine_class: type[TemplateEngine]) -> None:
        """Register an engine on this manager only."""
        self._classes[name.lower()] = engine_class

    def has_engine(self, name: str) -> bool:
        name = name.lower()
        return name in self._classes or name in _ENGINES or name in _BUILTIN_ENGINES

    def engine_class(self, name: str) -> type[TemplateEngine]:
        name = name.lower()
        if name in self._classes:
            return self._classes[name]
        if name in _ENGINES:
            return _ENGINES[name]
        if name in _BUILTIN_ENGINES:
            return _load_builtin(name)

        available = sorted({*_BUILTIN_ENGINES, *_ENGINES, *self._classes})
        raise UnknownEngineError(
            name,
            f"Unknown template engine: '{name}'. Available: {', '.join(available)}",
        )

    def get_engine(self, name: str, includes_dir: str | Path) -> TemplateEngine:
        """Return the cached engine for ``name``, creating it on first use."""
        key = (name.lower(), Path(includes_dir))
        engine = self._instances.get(key)
        if engine is None:
            cls = self.engine_class(name)
            engine = cls(key[0], key[1], manager=self, config=self.config)
            self._instances[key] = engine
        return engine
