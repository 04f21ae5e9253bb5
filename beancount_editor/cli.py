"""Command-line entry point for beancount-editor.

USAGE:
    beancount-editor format ledger.beancount                 # print aligned ledger
    beancount-editor format --in-place ledger.beancount      # rewrite the file
    beancount-editor format --check ledger.beancount         # exit 1 if unaligned
    beancount-editor folds ledger.beancount                  # fold expression per line
"""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import argparse
import logging
import sys
from pathlib import Path

from beancount.parser import printer

from beancount_editor.block import format_lines
from beancount_editor.config import EditorConfig, load_config
from beancount_editor.fold import compute_fold_levels

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNFORMATTED = 1
EXIT_CONFIG_ERROR = 2


def _read_lines(path: Path) -> tuple[list[str], list[str]]:
    """Split a file on "\\n" only, keeping each line's terminator apart.

    Returns the lines without terminators and the terminators ("\\r\\n",
    "\\n" or "" for a last line without one).
    """
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()

    lines: list[str] = []
    endings: list[str] = []
    pieces = text.split("\n")
    # whatever follows the last "\n" is a line without a terminator
    last = pieces.pop()
    for raw in pieces:
        if raw.endswith("\r"):
            lines.append(raw[:-1])
            endings.append("\r\n")
        else:
            lines.append(raw)
            endings.append("\n")
    if last:
        lines.append(last)
        endings.append("")
    return lines, endings


def _join_lines(lines: list[str], endings: list[str]) -> str:
    return "".join(line + ending for line, ending in zip(lines, endings))


def _write_lines(path: Path, lines: list[str], endings: list[str]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(_join_lines(lines, endings))


def _resolve_config(args: argparse.Namespace) -> EditorConfig | None:
    config, errors = load_config(args.config)
    if errors:
        printer.print_errors(errors, file=sys.stderr)
        return None

    overrides = {}
    if getattr(args, "separator_column", None) is not None:
        overrides["separator_column"] = args.separator_column
    if getattr(args, "fixed_cjk_width", False):
        overrides["fixed_cjk_width"] = True
    if overrides:
        try:
            config = config.replace(**overrides)
        except ValueError as e:
            logger.error(f"Invalid option: {e}")
            return None
    return config


def format_files(args: argparse.Namespace) -> int:
    """Align postings in each file; see module docstring for modes."""
    config = _resolve_config(args)
    if config is None:
        return EXIT_CONFIG_ERROR

    unformatted = []
    for name in args.files:
        path = Path(name)
        if not path.exists():
            logger.error(f"File not found: {path}")
            return EXIT_CONFIG_ERROR

        lines, endings = _read_lines(path)
        formatted = format_lines(lines, config)

        if args.check:
            if formatted != lines:
                unformatted.append(path)
                logger.warning(f"Would reformat {path}")
        elif args.in_place:
            if formatted != lines:
                _write_lines(path, formatted, endings)
                logger.info(f"Reformatted {path}")
        else:
            sys.stdout.write(_join_lines(formatted, endings))

    if unformatted:
        logger.warning(f"{len(unformatted)} of {len(args.files)} files need formatting")
        return EXIT_UNFORMATTED
    return EXIT_OK


def show_folds(args: argparse.Namespace) -> int:
    """Print each line prefixed by its fold expression."""
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {path}")
        return EXIT_CONFIG_ERROR

    lines, _ = _read_lines(path)
    for line, fold in zip(lines, compute_fold_levels(lines)):
        print(f"{fold.to_foldexpr():>4} | {line}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beancount-editor",
        description="Align amounts and compute folds for beancount ledgers.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser("format", help="Align posting amounts")
    format_parser.add_argument("files", nargs="+", help="Ledger files to format")
    format_parser.add_argument("--config", help="Path to beancount_editor.yaml")
    format_parser.add_argument(
        "--separator-column", type=int, help="Column to align decimal points on"
    )
    format_parser.add_argument(
        "--fixed-cjk-width", action="store_true", help="Count CJK characters as two columns"
    )
    mode = format_parser.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Only report unaligned files")
    mode.add_argument("--in-place", action="store_true", help="Rewrite files in place")
    format_parser.set_defaults(handler=format_files)

    folds_parser = subparsers.add_parser("folds", help="Show fold levels per line")
    folds_parser.add_argument("file", help="Ledger file")
    folds_parser.set_defaults(handler=show_folds)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
