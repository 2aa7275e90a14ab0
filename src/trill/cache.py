"""Compiled-template cache.

Maps a derived key (engine, identifier, chain arguments, body) to the
render function an engine compiled for it. Entries live as long as the
cache object; there is no eviction. A ``Renderer`` session owns one cache
and clears it on ``close()``.

Concurrent misses on the same key are coalesced: the first caller
compiles, later callers wait for its result instead of compiling again.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import anyio

if TYPE_CHECKING:
    from trill.engines.base import RenderFunction

logger = logging.getLogger("trill.cache")


@dataclass(slots=True)
class _Inflight:
    """A compile in progress. Waiters block on ``done``."""

    done: anyio.Event
    result: RenderFunction | None = None
    error: Exception | None = None


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    coalesced: int = 0


@dataclass
class CompiledTemplateCache:
    """Key -> compiled render function, with single-flight compiles.

    Failed compiles are never stored. Waiters on a failed compile receive
    the same exception; waiters on a cancelled compile retry.
    """

    _entries: dict[str, RenderFunction] = field(default_factory=dict)
    _inflight: dict[str, _Inflight] = field(default_factory=dict)
    stats: CacheStats = field(default_factory=CacheStats)
    # Bumped by clear(); compiles started before a clear do not write back
    _generation: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> RenderFunction | None:
        return self._entries.get(key)

    def add(self, key: str, fn: RenderFunction) -> None:
        self._entries[key] = fn

    def clear(self) -> None:
        """Drop every entry.

        Compiles still in flight finish and hand their result to their
        callers, but the result is not stored.
        """
        self._entries.clear()
        self._generation += 1

    async def get_or_compile(
        self,
        key: str,
        compile_fn: Callable[[], Awaitable[RenderFunction]],
    ) -> RenderFunction:
        """Return the cached function for ``key``, compiling it on a miss."""
        while True:
            cached = self._entries.get(key)
            if cached is not None:
                self.stats.hits += 1
                logger.debug("Compiled template cache hit: %.80s", key)
                return cached

            inflight = self._inflight.get(key)
            if inflight is None:
                break

            self.stats.coalesced += 1
            logger.debug("Waiting on in-flight compile: %.80s", key)
            await inflight.done.wait()
            if inflight.error is not None:
                raise inflight.error
            if inflight.result is not None:
                return inflight.result
            # Creator was cancelled; try again

        self.stats.misses += 1
        logger.debug("Compiled template cache miss: %.80s", key)
        inflight = _Inflight(done=anyio.Event())
        self._inflight[key] = inflight
        generation = self._generation
        try:
            fn = await compile_fn()
        except Exception as exc:
            inflight.error = exc
            raise
        else:
            if generation == self._generation:
                self._entries[key] = fn
            else:
                logger.debug("Cache cleared during compile, not storing: %.80s", key)
            inflight.result = fn
            return fn
        finally:
            del self._inflight[key]
            inflight.done.set()
