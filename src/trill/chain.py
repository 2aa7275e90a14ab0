"""Compile chains — what an engine family needs to compile and cache a template.

One variant per engine family:

- ``PlainChain`` — the engine compiles the body on its own.
- ``MarkdownChain`` — optional preprocessor engine, then markdown unless
  bypassed.
- ``HtmlChain`` — optional preprocessor engine, otherwise the body is
  returned as-is.

Each variant derives its own cache key from exactly the arguments it
carries, so configuration that does not affect an engine never splits or
merges its cache entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from trill.engines.base import RenderFunction, TemplateEngine

_SEP = "|"


def _ident(name_or_path: str) -> str:
    # Length prefix keeps "|" inside a path from shifting the body boundary
    return f"{len(name_or_path)}:{name_or_path}"


def _flag(value: str | bool | None) -> str:
    if value is None or value is False:
        return "false"
    if value is True:
        return "true"
    return value


@dataclass(frozen=True, slots=True)
class PlainChain:
    """No chaining. Keyed on engine, identifier and body."""

    def cache_key(self, engine_name: str, name_or_path: str, body: str) -> str:
        return _SEP.join((engine_name, _ident(name_or_path), body))

    async def compile(self, engine: TemplateEngine, body: str, name_or_path: str) -> RenderFunction:
        return await engine.compile(body, name_or_path)


@dataclass(frozen=True, slots=True)
class MarkdownChain:
    """Markdown, optionally preprocessed by another engine.

    ``use_markdown=False`` means the markdown pass is bypassed and only the
    preprocessor (if any) runs.
    """

    preprocessor: str | None
    use_markdown: bool

    def cache_key(self, engine_name: str, name_or_path: str, body: str) -> str:
        return _SEP.join(
            (
                engine_name,
                _ident(name_or_path),
                _flag(self.preprocessor),
                _flag(self.use_markdown),
                body,
            )
        )

    async def compile(self, engine: TemplateEngine, body: str, name_or_path: str) -> RenderFunction:
        return await engine.compile(body, name_or_path, self.preprocessor, not self.use_markdown)


@dataclass(frozen=True, slots=True)
class HtmlChain:
    """Plain markup, optionally preprocessed by another engine."""

    preprocessor: str | None

    def cache_key(self, engine_name: str, name_or_path: str, body: str) -> str:
        return _SEP.join((engine_name, _ident(name_or_path), _flag(self.preprocessor), body))

    async def compile(self, engine: TemplateEngine, body: str, name_or_path: str) -> RenderFunction:
        return await engine.compile(body, name_or_path, self.preprocessor)


CompileChain: TypeAlias = PlainChain | MarkdownChain | HtmlChain
