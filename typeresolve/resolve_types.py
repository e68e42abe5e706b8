"""Result data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from .constants import (
    DEFAULT_MAX_DEPTH,
    FUNC_KEYWORD,
    LIST_SEPARATOR,
    PLACEHOLDER_TYPE,
    POINTER_MARKER,
    SLICE_MARKER,
)
from .errors import ErrorKind


@dataclass(frozen=True)
class ResolverConfig:
    """Groups type resolution configuration."""

    placeholder: str = PLACEHOLDER_TYPE
    max_depth: int = DEFAULT_MAX_DEPTH
    unwind_typedefs: bool = False


class Resolution(BaseModel):
    """A resolved descriptor, paired with the error that produced it if any."""

    descriptor: str
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.ok:
            return self.descriptor
        return f"{self.descriptor}  # {self.error}"


class FunctionParts(BaseModel):
    """Raw pieces of a function type spelling, before resolution."""

    prefix: str = ""
    fields: list[str] = []
    returns: list[str] = []


class FunctionSignature(BaseModel):
    """Resolved pieces of a function type spelling."""

    prefix: str = ""
    params: list[str] = []
    returns: list[str] = []

    @property
    def descriptor(self) -> str:
        head = self.prefix.replace(POINTER_MARKER, SLICE_MARKER)
        params = LIST_SEPARATOR.join(self.params)
        returns = LIST_SEPARATOR.join(self.returns)
        return f"{head}{FUNC_KEYWORD}({params})({returns})"


class SourceLocation(BaseModel):
    """Where a C declaration sits in its translation unit.

    Lines are 1-based and columns 0-based, as tree-sitter reports them; an
    all-zero span marks a declaration built without source.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def is_unknown(self) -> bool:
        return not any((self.start_line, self.start_col, self.end_line, self.end_col))

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        return f"line {self.start_line}:{self.start_col}"


NO_SOURCE_LOCATION = SourceLocation(start_line=0, start_col=0, end_line=0, end_col=0)


class DeclarationKind(str, Enum):
    TYPEDEF = "typedef"
    VARIABLE = "variable"
    FUNCTION = "function"
    FIELD = "field"


class CDeclaration(BaseModel):
    name: str
    kind: DeclarationKind
    c_type: str
    location: SourceLocation = NO_SOURCE_LOCATION

    def __str__(self) -> str:
        base = f"{self.kind.value} {self.name}: {self.c_type}"
        if not self.location.is_unknown():
            return f"{base}  # {self.location}"
        return base


class TranslatedDeclaration(BaseModel):
    name: str
    kind: DeclarationKind
    c_type: str
    descriptor: str
    error: str | None = None

    def __str__(self) -> str:
        base = f"{self.kind.value} {self.name}: {self.c_type} -> {self.descriptor}"
        if self.error:
            return f"{base}  # {self.error}"
        return base
