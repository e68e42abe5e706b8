"""Normalizer: canonical, qualifier-free C type spellings."""

from __future__ import annotations

import re

from .tables import QUALIFIER_KEYWORDS

_QUALIFIER_RE = re.compile(r"\b(?:%s)\b" % "|".join(QUALIFIER_KEYWORDS))
_STAR_RUN_RE = re.compile(r"\*(?:\s*\*)+")
_SPACE_RUN_RE = re.compile(r" {2,}")
_FUNC_POINTER_MARKER_RE = re.compile(r"\(\s*\*\s*\)")

# Applied in order on every pass.
_REWRITES: tuple[tuple[str, str], ...] = (
    ("* *", "**"),
    ("*", " *"),
)
_CONTROL_CHARS: tuple[str, ...] = ("\t", "\n", "\r")


def _collapse_stars(match: re.Match) -> str:
    return "*" * match.group(0).count("*")


def _normalize_once(spelling: str) -> str:
    out = spelling
    for old, new in _REWRITES:
        out = out.replace(old, new)
    out = _QUALIFIER_RE.sub("", out)
    for ch in _CONTROL_CHARS:
        out = out.replace(ch, "")
    # Qualifiers removed between stars leave runs like "*   *".
    out = _STAR_RUN_RE.sub(_collapse_stars, out)
    out = out.replace("[", " [")
    out = _SPACE_RUN_RE.sub(" ", out)
    out = out.replace("] [", "][")
    out = _FUNC_POINTER_MARKER_RE.sub("(*)", out)
    return out.strip()


def normalize(spelling: str) -> str:
    """Canonicalize a C type spelling.

    ``const``/``volatile``/``restrict`` qualifiers and control whitespace are
    dropped, every ``*`` run and ``[`` is preceded by exactly one space
    (``"char * const *"`` becomes ``"char **"``, ``"int[2] [3]"`` becomes
    ``"int [2][3]"``), and a function-pointer marker stays ``"(*)"``.
    Passes repeat until the spelling stops changing, so the result is a
    fixed point.
    """
    current = spelling
    while True:
        out = _normalize_once(current)
        if out == current:
            return out
        current = out
