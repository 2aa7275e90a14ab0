"""Template engines.

All engine access goes through ``EngineManager.get_engine()``. Direct
imports of engine classes are for type hints, subclassing and testing.

Built-in engines:
- ``md`` — patitas markdown, optionally preprocessed (``trill[markdown]``)
- ``html`` — plain markup, optionally preprocessed
- ``kida`` — kida templates
- ``jinja2`` — jinja2 templates (``trill[jinja]``)

Custom engines subclass ``TemplateEngine`` and are registered with
``register_engine("name", MyEngine)``.
"""

from trill.engines.base import RenderFunction, TemplateEngine, static_render
from trill.engines.manager import EngineManager, register_engine

__all__ = [
    "EngineManager",
    "RenderFunction",
    "TemplateEngine",
    "register_engine",
    "static_render",
]
