"""Error taxonomy for type resolution."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MALFORMED = "malformed"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class TypeResolutionError(Exception):
    """Base class for every failure raised while resolving a C type spelling.

    ``spelling`` is the spelling the failure was first raised for; wrapping
    keeps it while the message accumulates the enclosing contexts.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, spelling: str = ""):
        super().__init__(message)
        self.message = message
        self.spelling = spelling

    def wrap(self, context: str) -> TypeResolutionError:
        """Return a copy of this error whose message is prefixed by *context*."""
        wrapped = type(self)(f"{context} : {self.message}", self.spelling)
        wrapped.__cause__ = self
        return wrapped


class MalformedTypeError(TypeResolutionError):
    """The spelling carries artifacts of a broken upstream extraction."""

    kind = ErrorKind.MALFORMED


class TypeCycleError(MalformedTypeError):
    """A typedef chain refers back to itself or nests beyond the depth limit."""


class FunctionGrammarError(MalformedTypeError):
    """A function type spelling could not be split into its parts."""


class UnsupportedTypeError(TypeResolutionError):
    kind = ErrorKind.UNSUPPORTED


class UnknownTypeError(TypeResolutionError):
    kind = ErrorKind.UNKNOWN
