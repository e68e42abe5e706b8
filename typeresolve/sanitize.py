"""Anonymous-name sanitizer: identifier-safe names for anonymous aggregates."""

from __future__ import annotations

import logging

from .constants import (
    ANONYMOUS_ANNOTATION,
    ANONYMOUS_MARKER,
    ENUM_PREFIX,
    SCOPE_SEPARATOR_REPLACEMENT,
    STRUCT_PREFIX,
    UNION_PREFIX,
)
from .normalize import normalize

logger = logging.getLogger(__name__)

_ILLEGAL_IDENTIFIER_CHARS = "() :/\\-."
_KIND_PREFIXES: tuple[str, ...] = (STRUCT_PREFIX, UNION_PREFIX, ENUM_PREFIX)


def sanitize(name: str) -> str:
    """Rewrite a compiler-synthesized anonymous aggregate name.

    ``"union (anonymous union at tests/union.c:46:3)"`` becomes
    ``"__union_at_tests_union_c_46_3_"``. A member scope such as
    ``"struct siginfo_t::(anonymous at a.h:119:2)"`` keeps its owner, with the
    ``::`` turned into letters. Names without the anonymous marker are only
    normalized.
    """
    if ANONYMOUS_MARKER not in name:
        return normalize(name)
    start = name.find(ANONYMOUS_ANNOTATION)
    if start < 0:
        return name
    name = name.replace(ANONYMOUS_MARKER, "", 1)
    end = name.find(")", start)
    if end < 0:
        end = len(name) - 1
    inside = "".join(
        "_" if ch in _ILLEGAL_IDENTIFIER_CHARS else ch
        for ch in name[start : end + 1]
    )
    out = name[:start] + inside + name[end + 1 :]
    out = out.replace(":", SCOPE_SEPARATOR_REPLACEMENT)
    out = normalize(out)
    for prefix in _KIND_PREFIXES:
        if out.startswith(prefix):
            out = out[len(prefix) :]
            break
    logger.debug("sanitized %r -> %r", name, out)
    return out
