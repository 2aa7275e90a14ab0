"""Trill CLI — render a template file or inspect engine resolution.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = argparse.ArgumentParser(
        prog="trill",
        description="Trill — template engine selection and compiled-template caching.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (debug, info, warning, error)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill render -----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a template file to stdout")
    render_parser.add_argument("path", help="Template file to render")
    render_parser.add_argument(
        "--override",
        default=None,
        help='Engine override declaration (e.g. "kida,md")',
    )
    render_parser.add_argument(
        "--bypass-markdown",
        action="store_true",
        help="Skip the markdown pass for markdown overrides",
    )
    render_parser.add_argument(
        "--data",
        default=None,
        help="Render data as a JSON object",
    )
    render_parser.add_argument(
        "--input-dir",
        default=None,
        help="Input directory (includes are resolved relative to it)",
    )

    # -- trill resolve ----------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve", help="Show which engines render a path or engine name"
    )
    resolve_parser.add_argument("identifier", help="Template path or engine name")
    resolve_parser.add_argument(
        "--override",
        default=None,
        help='Engine override declaration (e.g. "kida,md")',
    )
    resolve_parser.add_argument(
        "--bypass-markdown",
        action="store_true",
        help="Skip the markdown pass for markdown overrides",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from trill.cli._render import run_render

        run_render(args)
    elif args.command == "resolve":
        from trill.cli._render import run_resolve

        run_resolve(args)
