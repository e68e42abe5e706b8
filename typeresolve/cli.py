"""Command-line entry point: resolve C type spellings or whole C files."""

from __future__ import annotations

import argparse
import logging
import sys

from .api import scan_source, translate_source
from .constants import DEFAULT_MAX_DEPTH
from .registry import ProgramRegistry
from .resolve_types import ResolverConfig
from .resolver import TypeResolver

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typeresolve", description="Resolve C type spellings to Go types"
    )
    parser.add_argument("types", nargs="*", help="C type spellings to resolve")
    parser.add_argument(
        "--source",
        "-s",
        default=None,
        help="C file whose typedefs and aggregates seed the registry",
    )
    parser.add_argument(
        "--unwind-typedefs",
        action="store_true",
        help="Replace typedef names with their underlying Go types",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum type nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log resolution details"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    config = ResolverConfig(
        max_depth=args.max_depth, unwind_typedefs=args.unwind_typedefs
    )

    source = ""
    filename = ""
    if args.source:
        filename = args.source
        with open(args.source, encoding="utf-8") as f:
            source = f.read()

    if not args.types:
        if not args.source:
            build_arg_parser().print_usage(sys.stderr)
            return 2
        translated = translate_source(source, filename, config)
        for t in translated:
            print(t)
        return 1 if any(t.error for t in translated) else 0

    registry = scan_source(source, filename).registry if args.source else ProgramRegistry()
    resolver = TypeResolver(registry, config)
    failed = False
    for spelling in args.types:
        resolution = resolver.resolve(spelling)
        print(f"{spelling} -> {resolution}")
        failed = failed or not resolution.ok
    if registry.imports:
        logger.info("imports: %s", ", ".join(sorted(registry.imports)))
    return 1 if failed else 0
