"""Command line interface for the globforge matcher."""
from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from . import __version__, io
from .engine.compiler import compile
from .engine.errors import GlobError
from .engine.matcher import filter_matches, match_prefix
from .engine.models import MatchOptions, NegationMode, Pattern
from .engine.nodes import describe, node_to_json

logger = logging.getLogger(__name__)


def _parse_negation(value: str) -> NegationMode:
    """Parse negation mode string, ensuring valid values."""
    try:
        return NegationMode(value.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid negation mode: {value}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="globforge", description="Glob pattern compiler and matcher")
    parser.add_argument("-V", "--version", action="version", version=f"globforge {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common_options(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--pattern", required=True)
        cmd.add_argument("-v", "--verbose", action="store_true", default=False)

    def add_match_options(cmd: argparse.ArgumentParser) -> None:
        add_common_options(cmd)
        cmd.add_argument(
            "--anchored",
            action="store_true",
            default=False,
            help="require the pattern to consume the whole input",
        )
        cmd.add_argument(
            "--negation",
            type=_parse_negation,
            default=NegationMode.CONSUME,
            metavar="{consume,short-circuit}",
        )

    compile_cmd = sub.add_parser("compile", help="print the compiled node sequence")
    add_common_options(compile_cmd)
    compile_cmd.add_argument("--format", choices=["text", "json"], default="text")
    compile_cmd.add_argument("--out", default="-")

    match = sub.add_parser("match", help="report whether each input matches")
    add_match_options(match)
    match.add_argument("texts", nargs="*", metavar="TEXT")
    match.add_argument("--items")
    match.add_argument("--format", choices=["text", "json"], default="text")

    filt = sub.add_parser("filter", help="keep the items that match")
    add_match_options(filt)
    filt.add_argument("--items", required=True)
    filt.add_argument("--exclude", action="store_true", default=False, help="keep non-matching items instead")
    filt.add_argument("--out", default="-")
    filt.add_argument("--format", choices=["text", "json"], default="text")
    return parser


def _build_options(args: argparse.Namespace) -> MatchOptions:
    return MatchOptions(anchored=args.anchored, negation=args.negation)


def _command_compile(args: argparse.Namespace, pattern: Pattern) -> int:
    if args.format == "json":
        payload = {
            "pattern": pattern.source,
            "nodes": [node_to_json(node) for node in pattern.nodes],
        }
        io.write_json(payload, args.out)
    else:
        io.write_text(describe(pattern.nodes) + "\n", args.out)
    return 0


def _command_match(args: argparse.Namespace, pattern: Pattern, parser: argparse.ArgumentParser) -> int:
    texts = list(args.texts)
    if args.items:
        texts.extend(io.read_items(args.items))
    if not texts:
        parser.error("match needs TEXT arguments or --items")
    options = _build_options(args)
    results = [(text, match_prefix(pattern, text, options)) for text in texts]
    matched = sum(1 for _, consumed in results if consumed is not None)
    logger.debug("%d of %d input(s) matched %r", matched, len(results), pattern.source)
    if args.format == "json":
        payload = [
            {"text": text, "matched": consumed is not None, "consumed": consumed}
            for text, consumed in results
        ]
        io.write_json(payload, "-")
    else:
        lines = [f"{'match' if consumed is not None else 'no match'}\t{text}" for text, consumed in results]
        io.write_text("\n".join(lines) + "\n", "-")
    return 0 if matched else 1


def _command_filter(args: argparse.Namespace, pattern: Pattern) -> int:
    items = io.read_items(args.items)
    kept = filter_matches(items, pattern, invert=args.exclude, options=_build_options(args))
    logger.debug("kept %d of %d item(s)", len(kept), len(items))
    if args.format == "json":
        io.write_json(kept, args.out)
    else:
        io.write_text("".join(f"{item}\n" for item in kept), args.out)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        pattern = compile(args.pattern)
    except GlobError as exc:
        parser.exit(2, f"globforge: error: {exc}\n")
    with pattern:
        command = args.command
        if command == "compile":
            return _command_compile(args, pattern)
        if command == "match":
            return _command_match(args, pattern, parser)
        if command == "filter":
            return _command_filter(args, pattern)
    parser.error(f"unknown command {command}")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
