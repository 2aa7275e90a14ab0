"""Render configuration.

RenderConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from trill.errors import ConfigurationError

DEFAULT_TEMPLATE_FORMATS: tuple[str, ...] = ("md", "html", "kida", "jinja2")

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Render configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RenderConfig(markdown_template_engine="jinja2", includes_dir="partials")

    Derive a variant with ``dataclasses.replace(config, ...)``.
    """

    # Preprocessors (None = parse without a template engine first)
    markdown_template_engine: str | None = "kida"
    html_template_engine: str | None = "kida"

    # Directories
    input_dir: str | Path = "."
    includes_dir: str = "_includes"  # Relative to the input directory

    # Engines enabled for extension lookup
    template_formats: tuple[str, ...] = DEFAULT_TEMPLATE_FORMATS

    # Engine options
    autoescape: bool = False
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Markdown (patitas)
    markdown_plugins: tuple[str, ...] = ("all",)
    markdown_highlight: bool = False

    # Logging
    log_level: str = "warning"

    def __post_init__(self) -> None:
        if self.markdown_template_engine:
            object.__setattr__(
                self, "markdown_template_engine", self.markdown_template_engine.lower()
            )
        else:
            object.__setattr__(self, "markdown_template_engine", None)
        if self.html_template_engine:
            object.__setattr__(self, "html_template_engine", self.html_template_engine.lower())
        else:
            object.__setattr__(self, "html_template_engine", None)
        object.__setattr__(
            self, "template_formats", tuple(f.lower() for f in self.template_formats)
        )

        if not self.includes_dir:
            msg = "includes_dir must not be empty"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"Unknown log_level {self.log_level!r}. Expected one of: {', '.join(sorted(_LOG_LEVELS))}"
            raise ConfigurationError(msg)
