"""Engine resolution.

Turns a template path or bare engine name into a ``BoundEngine``: the
canonical engine name, a configured engine instance, the manager that
owns it and the includes directory it loads from.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from trill.config import RenderConfig
from trill.engines.base import TemplateEngine
from trill.engines.manager import EngineManager
from trill.errors import UnknownEngineError
from trill.extensions import ExtensionMap, is_engine_name

logger = logging.getLogger("trill.resolver")


class Resolution(Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


@dataclass(frozen=True, slots=True)
class BoundEngine:
    """Result of resolving an identifier. Immutable."""

    name: str
    engine: TemplateEngine
    manager: EngineManager
    includes_dir: Path


class EngineResolver:
    """Resolve identifiers against an extension map and engine manager.

    Args:
        config: Active render configuration, injected into every engine
            it resolves.
        extension_map: Extension lookup. Defaults to one built from
            ``config.template_formats``.
        engine_manager: Shared manager. When ``None`` every resolution
            gets a fresh manager, so engine instances are not shared
            between templates.
    """

    def __init__(
        self,
        config: RenderConfig,
        extension_map: ExtensionMap | None = None,
        engine_manager: EngineManager | None = None,
    ) -> None:
        self.config = config
        self.extension_map = extension_map or ExtensionMap.from_config(config)
        self.engine_manager = engine_manager

    def includes_dir_for(self, input_dir: str | Path | None = None) -> Path:
        """Join the includes sub-path onto ``input_dir`` (or the configured input dir)."""
        return Path(input_dir or self.config.input_dir) / self.config.includes_dir

    def resolve(self, name_or_path: str, includes_dir: str | Path) -> BoundEngine:
        """Bind a configured engine for ``name_or_path``.

        Raises:
            UnknownEngineError: If no enabled engine matches.
        """
        name = self.extension_map.get_key(name_or_path)
        if not name:
            raise UnknownEngineError(name_or_path)

        manager = self.engine_manager or EngineManager(self.config)
        engine = manager.get_engine(name, includes_dir)
        engine.set_config(self.config)
        # Only template files have per-file engine state to refresh
        if not is_engine_name(name_or_path):
            engine.reset_module_cache(name_or_path)

        logger.debug("Resolved %s to %s engine", name_or_path, name)
        return BoundEngine(name=name, engine=engine, manager=manager, includes_dir=Path(includes_dir))
