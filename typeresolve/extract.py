"""Array-size and base-type extractors."""

from __future__ import annotations

import re

from .constants import ARRAY_SIZE_PATTERN, FUNC_POINTER_MARKER, POINTER_MARKER
from .errors import MalformedTypeError
from .normalize import normalize

_ARRAY_SIZE_RE = re.compile(ARRAY_SIZE_PATTERN)


def array_size(spelling: str) -> int:
    """Size of the first ``[N]`` group: ``"char [40]"`` → 40."""
    match = _ARRAY_SIZE_RE.search(spelling)
    if match is None:
        raise MalformedTypeError(
            f"Cannot find size of array in type : {spelling}", spelling
        )
    return int(match.group(1))


def base_type(spelling: str) -> str:
    """Named type beneath every pointer, array and function-pointer decoration.

    ``"struct Point *[7]"`` → ``"struct Point"``.
    """
    s = normalize(spelling)
    if not s:
        return s
    if s.endswith("]"):
        opening = s.rfind("[")
        if opening >= 0:
            return base_type(s[:opening])
    if s.endswith(POINTER_MARKER):
        return base_type(s[:-1])
    if FUNC_POINTER_MARKER in s:
        return base_type(s.replace(FUNC_POINTER_MARKER, POINTER_MARKER))
    return s
