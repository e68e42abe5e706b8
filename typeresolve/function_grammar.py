"""Function-type grammar: splits C function type spellings into their parts.

A function type spelling is ``<return chain><argument block>``::

    int (*)(int, float)
    int (int, float)
    int (*)(int (*)(int))
    void (*(*)(int *, void *, const char *))(void)

The argument block is the outermost trailing ``(...)``. When the return chain
itself ends in ``)``, its trailing parenthesized *block* describes how a
pointer or array wraps the function's result, and is split off into an
indirection *prefix* plus the remaining return type::

    void  ( *(*)(int *, void *, char *))
    -----                                 base return type
          ++++++++++++++++++++++++++++++  block
           =                              prefix
    return type : void (int *, void *, char *)

Everything here is bracket matching over raw text; no registry access.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from .classify import is_function
from .constants import FUNC_POINTER_MARKER, POINTER_MARKER
from .errors import FunctionGrammarError
from .resolve_types import FunctionParts

logger = logging.getLogger(__name__)


class BlockShape(Enum):
    """The ways a return-type block can wrap a function's result."""

    # (*)
    TRIVIAL_POINTER = "trivial_pointer"
    # ( * [2])
    ARRAY_OF_POINTERS = "array_of_pointers"
    # (*(int *, void *, const char *))
    INDIRECTION_SEQUENCE = "indirection_sequence"
    # ( *(*)(int *, void *, char *))
    NESTED_FUNCTION_POINTER = "nested_function_pointer"
    # ( *( *(*)))
    DEEP_INDIRECTION = "deep_indirection"


def _matching_open(text: str, close: int) -> int:
    """Index of the ``(`` balancing the ``)`` at *close*, or -1."""
    depth = 0
    for i in range(close, -1, -1):
        if text[i] == ")":
            depth += 1
        elif text[i] == "(":
            depth -= 1
        if depth == 0:
            return i
    return -1


def _split_top_level(arguments: str) -> list[str]:
    """Split the interior of ``(a, b (*)(c, d))`` on depth-zero commas."""
    fields: list[str] = []
    depth = 0
    start = 1
    for i in range(1, len(arguments) - 1):
        ch = arguments[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            fields.append(arguments[start:i].strip())
            start = i + 1
    fields.append(arguments[start : len(arguments) - 1].strip())
    return fields


def classify_block(block: str) -> BlockShape:
    if block == FUNC_POINTER_MARKER:
        return BlockShape.TRIVIAL_POINTER
    index = block.find(FUNC_POINTER_MARKER)
    if index < 0:
        if block.count("(") == 1:
            return BlockShape.ARRAY_OF_POINTERS
        return BlockShape.INDIRECTION_SEQUENCE
    after = index + len(FUNC_POINTER_MARKER)
    if len(block) - 1 > after and block[after] == "(":
        return BlockShape.NESTED_FUNCTION_POINTER
    return BlockShape.DEEP_INDIRECTION


def _strip_parens_and_one_star(block: str) -> str:
    flattened = block.replace("(", " ").replace(")", " ")
    return flattened.replace(POINTER_MARKER, "", 1)


# Each handler maps (block, base return type) to (prefix, return type).


def _split_trivial(block: str, base: str) -> tuple[str, str]:
    return "", base


def _split_flattened(block: str, base: str) -> tuple[str, str]:
    return _strip_parens_and_one_star(block), base


def _split_indirection_sequence(block: str, base: str) -> tuple[str, str]:
    inner = block[1:-1]
    index = inner.find("(")
    if index < 0:
        raise FunctionGrammarError(f"Cannot find '(' in block {block}", block)
    prefix = inner[:index]
    if POINTER_MARKER not in prefix:
        raise FunctionGrammarError(
            f"Block {block} wraps a function without indirection", block
        )
    return prefix.replace(POINTER_MARKER, "", 1), base + inner[index:]


def _split_nested_function_pointer(block: str, base: str) -> tuple[str, str]:
    inner = block.replace(FUNC_POINTER_MARKER, "", 1)[1:-1]
    index = inner.find("(")
    if index < 0:
        raise FunctionGrammarError(f"Cannot find '(' in block {block}", block)
    return inner[:index], base + inner[index:]


_BLOCK_HANDLERS: dict[BlockShape, Callable[[str, str], tuple[str, str]]] = {
    BlockShape.TRIVIAL_POINTER: _split_trivial,
    BlockShape.ARRAY_OF_POINTERS: _split_flattened,
    BlockShape.INDIRECTION_SEQUENCE: _split_indirection_sequence,
    BlockShape.NESTED_FUNCTION_POINTER: _split_nested_function_pointer,
    BlockShape.DEEP_INDIRECTION: _split_flattened,
}


def split_function(spelling: str) -> FunctionParts:
    """Split a function type spelling into prefix, argument fields and return.

    Fields and returns are raw C spellings, trimmed; resolving them is the
    caller's job. Raises ``FunctionGrammarError`` when the spelling is not a
    well-formed function type.
    """
    try:
        return _split_function(spelling.strip())
    except FunctionGrammarError as exc:
        raise exc.wrap(f"Cannot parse function '{spelling}'") from exc


def _split_function(s: str) -> FunctionParts:
    if not is_function(s):
        raise FunctionGrammarError(f"Is not function : {s}", s)
    if not s.endswith(")"):
        raise FunctionGrammarError(f"Function type {s} does not end with ')'", s)

    pos = _matching_open(s, len(s) - 1)
    if pos <= 0:
        raise FunctionGrammarError(f"Cannot find '(' of arguments in type : {s}", s)
    returns = s[:pos].strip()
    arguments = s[pos:].strip()
    if not returns:
        raise FunctionGrammarError(f"Missing return type in : {s}", s)

    fields = _split_top_level(arguments)

    if not returns.endswith(")"):
        return FunctionParts(prefix="", fields=fields, returns=[returns])

    position = _matching_open(returns, len(returns) - 1)
    if position < 0:
        raise FunctionGrammarError(f"Unbalanced return type : {returns}", s)
    block = returns[position:]
    base = returns[:position]

    shape = classify_block(block)
    logger.debug("function %r: block %r is %s", s, block, shape.value)
    prefix, return_type = _BLOCK_HANDLERS[shape](block, base)
    return FunctionParts(
        prefix=prefix.strip(),
        fields=fields,
        returns=[return_type.strip()],
    )
