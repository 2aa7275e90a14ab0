"""Markdown engine wrapping patitas.

Markdown can be preprocessed by another engine (``{{ name }}`` expanded
by kida before the markdown pass) or bypassed entirely, in which case only
the preprocessor runs.

Requires ``patitas``::

    pip install trill[markdown]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from trill.chain import CompileChain, MarkdownChain
from trill.engines.base import RenderFunction, TemplateEngine, static_render
from trill.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from patitas import Markdown

    from trill.render import RenderState


class MarkdownEngine(TemplateEngine):
    """Render Markdown source to HTML via patitas.

    The patitas instance is built lazily from ``markdown_plugins`` and
    ``markdown_highlight`` and rebuilt after a config change.
    """

    _md: Markdown | None = None

    @property
    def markdown(self) -> Markdown:
        if self._md is None:
            self._md = _get_markdown(
                plugins=list(self.config.markdown_plugins),
                highlight=self.config.markdown_highlight,
            )
        return self._md

    def reset(self) -> None:
        self._md = None

    def make_chain(self, state: RenderState) -> CompileChain:
        return MarkdownChain(preprocessor=state.markdown_engine, use_markdown=bool(state.use_markdown))

    def render_markdown(self, source: str) -> str:
        """Render Markdown source to an HTML string."""
        if not source:
            return ""
        return self.markdown(source)

    async def compile(
        self,
        source: str,
        name_or_path: str,
        preprocessor: str | None = None,
        bypass_markdown: bool = False,
        *args: Any,
    ) -> RenderFunction:
        """Compile markdown, optionally through a preprocessor engine first.

        Args:
            source: Raw markdown (possibly containing template syntax).
            name_or_path: Template identifier, passed to the preprocessor.
            preprocessor: Engine name to run before markdown, or ``None``.
            bypass_markdown: Skip the markdown pass.
        """
        if preprocessor:
            if self.manager is None:
                msg = f"{self.name} engine has no engine manager to fetch {preprocessor!r} from"
                raise RuntimeError(msg)
            engine = self.manager.get_engine(preprocessor, self.includes_dir)
            fn = await engine.compile(source, name_or_path)
            if bypass_markdown:
                return fn

            async def render(data: Mapping[str, Any]) -> str:
                return self.render_markdown(await fn(data))

            return render

        if bypass_markdown:
            return static_render(source)
        return static_render(self.render_markdown(source))


def _get_markdown(
    *,
    plugins: list[str] | None,
    highlight: bool,
) -> Markdown:
    """Create a patitas Markdown instance, raising a clear error if missing."""
    try:
        from patitas import Markdown
    except ImportError:
        msg = (
            "The markdown engine requires 'patitas' for Markdown rendering. "
            "Install with: pip install trill[markdown]"
        )
        raise MarkdownNotInstalledError(msg) from None

    return Markdown(plugins=plugins or ["all"], highlight=highlight)
