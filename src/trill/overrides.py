"""Front matter engine override parsing.

An override declaration is the comma-separated engine list an author puts
in front matter, e.g. ``"kida,md"``. Markdown may be paired with exactly
one other engine; ``html`` is implied and never appears in the result.
"""

from trill.errors import OverrideConflictError

MARKDOWN = "md"
HTML = "html"


def parse_engine_overrides(declaration: str | None) -> list[str]:
    """Parse an override declaration into an ordered engine chain.

    Tokens are stripped and lowercased. Empty tokens and ``html`` are
    dropped, duplicates collapse, and ``md`` always sorts first::

        >>> parse_engine_overrides("kida, md")
        ['md', 'kida']
        >>> parse_engine_overrides("html")
        []

    Raises:
        OverrideConflictError: If more than one distinct non-markup engine
            is named.
    """
    engines: list[str] = []
    seen: set[str] = set()
    using_markdown = False
    overlapping = 0

    for token in (declaration or "").split(","):
        name = token.strip().lower()
        if not name or name == HTML:
            continue
        if name == MARKDOWN:
            using_markdown = True
            continue
        if name not in seen:
            seen.add(name)
            engines.append(name)
            overlapping += 1

    if overlapping > 1:
        raise OverrideConflictError(declaration or "")

    if using_markdown:
        engines.insert(0, MARKDOWN)

    return engines
