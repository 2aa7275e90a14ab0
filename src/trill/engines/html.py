"""HTML engine — plain markup, optionally preprocessed by another engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from trill.chain import CompileChain, HtmlChain
from trill.engines.base import RenderFunction, TemplateEngine, static_render

if TYPE_CHECKING:
    from trill.render import RenderState


class HtmlEngine(TemplateEngine):
    def make_chain(self, state: RenderState) -> CompileChain:
        return HtmlChain(preprocessor=state.html_engine)

    async def compile(
        self,
        source: str,
        name_or_path: str,
        preprocessor: str | None = None,
        *args: Any,
    ) -> RenderFunction:
        if preprocessor:
            if self.manager is None:
                msg = f"{self.name} engine has no engine manager to fetch {preprocessor!r} from"
                raise RuntimeError(msg)
            engine = self.manager.get_engine(preprocessor, self.includes_dir)
            return await engine.compile(source, name_or_path)
        return static_render(source)
