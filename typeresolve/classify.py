"""Classifier: independent predicates over C type spellings."""

from __future__ import annotations

from enum import Enum

from .constants import FUNC_POINTER_MARKER, POINTER_SUFFIX
from .normalize import normalize
from .registry import TypeRegistry
from .tables import C_FLOAT_TYPES, C_INTEGER_TYPES, OPAQUE_HANDLE_TYPES


class PointeeCategory(Enum):
    """How a pointer to a resolved descriptor is represented."""

    OPAQUE_HANDLE = "opaque_handle"
    VALUE = "value"


def _matches_through_typedefs(
    registry: TypeRegistry, spelling: str, table: frozenset[str]
) -> bool:
    seen: set[str] = set()
    current = normalize(spelling)
    while current not in table:
        if current in seen:
            return False
        seen.add(current)
        underlying = registry.typedef_underlying(current)
        if underlying is None:
            return False
        current = normalize(underlying)
    return True


def is_c_integer(registry: TypeRegistry, spelling: str) -> bool:
    """True for C integer spellings, directly or through a typedef chain."""
    return _matches_through_typedefs(registry, spelling, C_INTEGER_TYPES)


def is_c_float(registry: TypeRegistry, spelling: str) -> bool:
    """True for C floating point spellings, directly or through a typedef chain."""
    return _matches_through_typedefs(registry, spelling, C_FLOAT_TYPES)


def is_function(spelling: str) -> bool:
    """True if *spelling* is a function type like ``"void (*)(void)"``."""
    return "(" in spelling.replace(FUNC_POINTER_MARKER, "")


def _last_non_space(spelling: str) -> str:
    stripped = spelling.rstrip(" ")
    return stripped[-1] if stripped else ""


def is_c_pointer(spelling: str) -> bool:
    return _last_non_space(spelling) == "*"


def is_c_array(spelling: str) -> bool:
    return _last_non_space(spelling) == "]"


def is_pointer(descriptor: str) -> bool:
    """True if *descriptor* has any pointer or array marker anywhere."""
    return any(ch in descriptor for ch in "*[]")


def has_array_suffix(spelling: str) -> bool:
    """True if a ``[`` occurs before the first ``*``.

    Separates "array of pointers" (``"int [2] *"``-like framing) from
    "pointer then array".
    """
    for ch in spelling:
        if ch == "[":
            return True
        if ch == "*":
            return False
    return False


def is_typedef_function(registry: TypeRegistry, spelling: str) -> bool:
    """True if *spelling*, or *spelling* minus a trailing ``" *"``, is a
    typedef of a function type."""
    candidates = [spelling]
    if spelling.endswith(POINTER_SUFFIX):
        candidates.append(spelling[: -len(POINTER_SUFFIX)])
    for name in candidates:
        underlying = registry.typedef_underlying(name)
        if underlying is not None and is_function(underlying):
            return True
    return False


def pointee_category(descriptor: str) -> PointeeCategory:
    """Classify a resolved pointee; qualified and unqualified forms both match."""
    for handle in OPAQUE_HANDLE_TYPES:
        if descriptor == handle or handle.endswith("/" + descriptor):
            return PointeeCategory.OPAQUE_HANDLE
    return PointeeCategory.VALUE
