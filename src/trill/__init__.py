"""Trill — template engine selection and compiled-template caching.

Decides which engine renders each document, applies front matter engine
overrides (``"kida,md"``: markdown preprocessed by kida), and memoizes
compiled render functions so identical templates compile once.

Basic usage::

    from trill import Renderer

    renderer = Renderer()
    tr = renderer.template("posts/hello.md")
    tr.set_engine_override("kida,md")
    html = await tr.render("# Hi {{ name }}", {"name": "A"})

Markdown (``pip install trill[markdown]``) renders with patitas; jinja2
templates (``pip install trill[jinja]``) are available as the ``jinja2``
engine.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CompiledTemplateCache",
    "ConfigurationError",
    "ConstructionError",
    "EngineManager",
    "ExtensionMap",
    "OverrideConflictError",
    "RenderConfig",
    "Renderer",
    "TemplateEngine",
    "TemplateRender",
    "TrillError",
    "UnknownEngineError",
    "parse_engine_overrides",
    "register_engine",
]

# name -> module path
_LAZY_IMPORTS: dict[str, str] = {
    "CompiledTemplateCache": "trill.cache",
    "ConfigurationError": "trill.errors",
    "ConstructionError": "trill.errors",
    "EngineManager": "trill.engines.manager",
    "ExtensionMap": "trill.extensions",
    "OverrideConflictError": "trill.errors",
    "RenderConfig": "trill.config",
    "Renderer": "trill.session",
    "TemplateEngine": "trill.engines.base",
    "TemplateRender": "trill.render",
    "TrillError": "trill.errors",
    "UnknownEngineError": "trill.errors",
    "parse_engine_overrides": "trill.overrides",
    "register_engine": "trill.engines.manager",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trill`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    module = importlib.import_module(module_path)
    return getattr(module, name)
