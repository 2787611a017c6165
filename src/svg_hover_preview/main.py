"""Application entrypoint."""

from __future__ import annotations

import argparse
from pathlib import Path

from svg_hover_preview.app import run_app


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg-hover-preview",
        description="Preview inline <svg> markup and .svg file references on hover.",
    )
    parser.add_argument("file", nargs="?", help="File to open in the editor")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    run_app(Path(args.file) if args.file else None, debug=bool(args.debug))


if __name__ == "__main__":
    main()
