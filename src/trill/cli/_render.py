"""``trill render`` and ``trill resolve`` commands.

Both build a ``Renderer`` from a default ``RenderConfig`` (with the input
directory and log level taken from the command line), print their result
to stdout, and exit with code 1 on any trill error.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import anyio

from trill.config import RenderConfig
from trill.errors import TrillError
from trill.session import Renderer


def _build_renderer(args: argparse.Namespace) -> Renderer:
    options: dict[str, Any] = {}
    if getattr(args, "input_dir", None):
        options["input_dir"] = args.input_dir
    if args.log_level:
        options["log_level"] = args.log_level.lower()
    config = RenderConfig(**options)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return Renderer(config)


def _fail(exc: Exception) -> NoReturn:
    print(f"Error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


def _load_data(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        msg = f"--data must be a JSON object, got {type(data).__name__}"
        raise TypeError(msg)
    return data


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.path`` with the engines its extension (or override) selects."""
    try:
        renderer = _build_renderer(args)
        data = _load_data(args.data)
        body = Path(args.path).read_text(encoding="utf-8")
        tr = renderer.template(
            args.path,
            args.input_dir,
            override=args.override,
            bypass_markdown=args.bypass_markdown,
        )
        engines = tr.get_engines_str()
    except (TrillError, OSError, ValueError, TypeError) as exc:
        _fail(exc)

    async def _render() -> str:
        with renderer:
            return await tr.render(body, data)

    try:
        output = anyio.run(_render)
    except Exception as exc:
        print(f"Error: Having trouble rendering {engines} template {args.path}", file=sys.stderr)
        _fail(exc)

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")


def run_resolve(args: argparse.Namespace) -> None:
    """Print the engine description for ``args.identifier``."""
    try:
        renderer = _build_renderer(args)
        tr = renderer.template(
            args.identifier, override=args.override, bypass_markdown=args.bypass_markdown
        )
        print(f"{args.identifier}: {tr.get_engines_str()}")
    except TrillError as exc:
        _fail(exc)
