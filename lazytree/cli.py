"""Command-line front door for lazytree.

Reads an indented outline from a file or stdin, loads it into a tree list,
and prints the visible rows with collapse markers.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import config
from .outline import OutlineError, build_tree_list, parse_outline
from .tree_view import TreeView, render_tree_rows
from .ui_theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for integer values ``>= 0``."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order."""
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print an indented outline as a collapsible tree."
    )
    parser.add_argument("path", nargs="?", default=None, help="Outline file. Reads stdin when omitted or '-'.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--indent", type=_positive_int, default=None, help="Columns of indentation per tree level.")
    parser.add_argument(
        "--collapse-depth",
        type=_nonnegative_int,
        default=None,
        help="Collapse items with children at this depth or deeper.",
    )
    parser.add_argument("--expand-all", action="store_true", help="Ignore any configured collapse depth.")
    parser.add_argument("--focus", type=_nonnegative_int, default=None, help="Highlight this visual row.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Print at most this many rows.")
    parser.add_argument("--max-cols", type=_positive_int, default=None, help="Clip rows to this column width.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --theme, --indent and --collapse-depth as defaults.",
    )
    return parser


def _save_defaults(args: argparse.Namespace) -> None:
    if args.theme is not None:
        config.save_theme_name(args.theme)
    if args.indent is not None:
        config.save_indent_width(args.indent)
    if args.expand_all:
        config.save_collapse_depth(None)
    elif args.collapse_depth is not None:
        config.save_collapse_depth(args.collapse_depth)


def main() -> None:
    """Parse CLI arguments, load the outline, and print the rendered tree.

    Explicit options override persisted config values. Unreadable input and
    malformed outlines exit with a message instead of a traceback.
    """
    args = _build_parser().parse_args()

    if args.save_defaults:
        _save_defaults(args)

    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    indent_width = args.indent if args.indent is not None else config.load_indent_width()
    if args.expand_all:
        collapse_depth = None
    elif args.collapse_depth is not None:
        collapse_depth = args.collapse_depth
    else:
        collapse_depth = config.load_collapse_depth()

    if args.path is None or args.path == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.path)
        if not path.is_file():
            raise SystemExit(f"Path not found: {path}")
        text = read_text(path)

    try:
        lines = parse_outline(text)
    except OutlineError as exc:
        raise SystemExit(f"Invalid outline: {exc}") from exc

    view = TreeView(build_tree_list(lines, collapse_depth=collapse_depth))
    if args.focus is not None:
        view.set_selected_row(args.focus)

    rows = render_tree_rows(
        view,
        args.rows,
        args.max_cols,
        theme=resolve_theme(theme_name, no_color=args.no_color),
        indent_width=indent_width,
        show_focus=args.focus is not None,
    )
    for row in rows:
        sys.stdout.write(row)
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()
