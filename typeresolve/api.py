"""Composable API functions for the C type resolution pipelines.

Each function corresponds to a CLI workflow but is callable programmatically
without argparse.
"""

from __future__ import annotations

import logging

from .constants import DEFAULT_FILENAME
from .declarations import DeclarationScanner, ScanResult
from .parser import CSourceParser
from .registry import ProgramRegistry, TypeRegistry
from .resolve_types import Resolution, ResolverConfig, TranslatedDeclaration
from .resolver import TypeResolver

logger = logging.getLogger(__name__)


def resolve_type(
    spelling: str,
    registry: TypeRegistry | None = None,
    config: ResolverConfig | None = None,
) -> Resolution:
    """Resolve one C type spelling to a Go type descriptor.

    Args:
        spelling: The C type spelling, e.g. ``"int (*)(int, float)"``.
        registry: Registry snapshot to consult; an empty one by default.
        config: Resolver configuration.

    Returns:
        A Resolution carrying the descriptor and, on failure, the error.
    """
    resolver = TypeResolver(registry or ProgramRegistry(), config or ResolverConfig())
    return resolver.resolve(spelling)


def scan_source(
    source: str,
    filename: str = DEFAULT_FILENAME,
    registry: ProgramRegistry | None = None,
) -> ScanResult:
    """Parse C source and collect its declarations into a registry.

    Args:
        source: The C source text.
        filename: Name used in anonymous aggregate names and log messages.
        registry: Registry to grow; a fresh one by default.

    Returns:
        A ScanResult with the declarations in source order and the registry.
    """
    registry = registry if registry is not None else ProgramRegistry()
    logger.info("Scanning %s (%d bytes)", filename, len(source))
    parsed = CSourceParser().parse(source, filename)
    declarations = DeclarationScanner(registry, filename).scan(parsed)
    return ScanResult(declarations=declarations, registry=registry)


def translate_source(
    source: str,
    filename: str = DEFAULT_FILENAME,
    config: ResolverConfig | None = None,
) -> list[TranslatedDeclaration]:
    """Scan C source, then resolve every declaration against the full registry.

    Args:
        source: The C source text.
        filename: Name used in anonymous aggregate names and log messages.
        config: Resolver configuration.

    Returns:
        One TranslatedDeclaration per declaration, in source order.
    """
    scanned = scan_source(source, filename)
    resolver = TypeResolver(scanned.registry, config or ResolverConfig())
    translated: list[TranslatedDeclaration] = []
    for decl in scanned.declarations:
        resolution = resolver.resolve(decl.c_type)
        translated.append(
            TranslatedDeclaration(
                name=decl.name,
                kind=decl.kind,
                c_type=decl.c_type,
                descriptor=resolution.descriptor,
                error=resolution.error,
            )
        )
    failures = sum(1 for t in translated if t.error)
    logger.info(
        "Translated %d declarations from %s (%d failed)",
        len(translated),
        filename,
        failures,
    )
    return translated


def dump_translation(
    source: str,
    filename: str = DEFAULT_FILENAME,
    config: ResolverConfig | None = None,
) -> str:
    """Translate C source and return a human-readable text dump.

    Returns:
        A multi-line string with one declaration per line.
    """
    translated = translate_source(source, filename, config)
    return "\n".join(f"  {t}" for t in translated)
