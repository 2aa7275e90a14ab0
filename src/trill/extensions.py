"""Extension-to-engine lookup.

Maps file extensions and bare engine names to canonical engine names,
restricted to the engines enabled in ``RenderConfig.template_formats``.
"""

from pathlib import PurePath

from trill.config import DEFAULT_TEMPLATE_FORMATS, RenderConfig

DEFAULT_EXTENSIONS: dict[str, str] = {
    "md": "md",
    "markdown": "md",
    "html": "html",
    "htm": "html",
    "kida": "kida",
    "j2": "jinja2",
    "jinja": "jinja2",
    "jinja2": "jinja2",
}


def is_engine_name(name_or_path: str) -> bool:
    """True for a bare engine name or alias (``"md"``, ``"jinja"``), not a path."""
    return not any(sep in name_or_path for sep in (".", "/", "\\"))


class ExtensionMap:
    """Resolve ``"page.md"`` or ``"md"`` to the engine name ``"md"``.

    Args:
        formats: Engine names enabled for lookup. Anything else resolves
            to ``None`` even when the extension is known.
        extensions: Extension table (without dots). Defaults to
            ``DEFAULT_EXTENSIONS``.
    """

    def __init__(
        self,
        formats: tuple[str, ...] | list[str] = DEFAULT_TEMPLATE_FORMATS,
        extensions: dict[str, str] | None = None,
    ) -> None:
        self.formats = frozenset(f.lower() for f in formats)
        self._extensions = dict(DEFAULT_EXTENSIONS if extensions is None else extensions)

    @classmethod
    def from_config(cls, config: RenderConfig) -> "ExtensionMap":
        return cls(config.template_formats)

    def register(self, extension: str, engine: str) -> None:
        """Map an extension (``"njk"`` or ``".njk"``) to an engine name."""
        self._extensions[extension.lstrip(".").lower()] = engine.lower()

    @property
    def extensions(self) -> tuple[str, ...]:
        """Enabled extensions, sorted."""
        return tuple(sorted(ext for ext, key in self._extensions.items() if key in self.formats))

    def get_key(self, name_or_path: str) -> str | None:
        """Return the engine name for a path or bare engine name, or ``None``."""
        if not name_or_path:
            return None

        candidate = name_or_path.strip().lower()
        if is_engine_name(candidate):
            key = self._extensions.get(candidate, candidate)
        else:
            suffix = PurePath(candidate).suffix.lstrip(".")
            key = self._extensions.get(suffix)

        if key is None or key not in self.formats:
            return None
        return key

    def has_engine(self, name_or_path: str) -> bool:
        return self.get_key(name_or_path) is not None
