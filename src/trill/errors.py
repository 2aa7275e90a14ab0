"""Trill exception hierarchy.

Shared across the resolver, dispatcher, cache and engines so every module
raises and catches the same types.
"""


class TrillError(Exception):
    """Base for all trill-specific errors."""


class ConfigurationError(TrillError):
    """Raised when render configuration is invalid."""


class ConstructionError(TrillError):
    """Raised when a ``TemplateRender`` is created without a template identifier."""


class UnknownEngineError(TrillError):
    """No engine is registered for a path or engine name.

    The offending identifier is kept on ``identifier`` so callers can
    report it without parsing the message.
    """

    def __init__(self, identifier: str, detail: str = "") -> None:
        self.identifier = identifier
        super().__init__(detail or f"Unknown engine for {identifier}")


class OverrideConflictError(ConfigurationError):
    """An engine override names more than one non-markup engine.

    Only markdown plus exactly one other engine may be combined. The raw
    declaration is kept on ``declaration`` so authors can fix their
    front matter.
    """

    def __init__(self, declaration: str) -> None:
        self.declaration = declaration
        super().__init__(
            "Don't mix multiple templating engines in your front matter overrides "
            f"(exceptions for HTML and Markdown). You used: {declaration}"
        )


class EngineNotInstalledError(TrillError):
    """Raised when an optional engine dependency is not installed."""


class MarkdownNotInstalledError(EngineNotInstalledError):
    """Raised when patitas is not installed."""


class JinjaNotInstalledError(EngineNotInstalledError):
    """Raised when jinja2 is not installed."""
