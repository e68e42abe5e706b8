"""Tree-Sitter Parsing Layer for C translation units."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .constants import C_LANGUAGE, DEFAULT_FILENAME

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Supplies a parser for a grammar name; tests inject a fake one."""

    @abstractmethod
    def get_parser(self, language: str = C_LANGUAGE): ...


class TreeSitterParserFactory(ParserFactory):
    """Loads grammars from tree-sitter-language-pack on first use."""

    def get_parser(self, language: str = C_LANGUAGE):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


@dataclass(frozen=True)
class ParsedSource:
    """A syntax tree plus the exact bytes its node offsets index into."""

    tree: Any
    source: bytes
    filename: str = DEFAULT_FILENAME

    @property
    def root_node(self):
        return self.tree.root_node

    def has_errors(self) -> bool:
        return self.tree.root_node.has_error


class CSourceParser:
    """Parses C source text with an injectable parser factory."""

    def __init__(self, parser_factory: ParserFactory | None = None):
        self._factory = parser_factory or TreeSitterParserFactory()

    def parse(self, source: str, filename: str = DEFAULT_FILENAME) -> ParsedSource:
        source_bytes = source.encode("utf-8")
        tree = self._factory.get_parser(C_LANGUAGE).parse(source_bytes)
        parsed = ParsedSource(tree=tree, source=source_bytes, filename=filename)
        if parsed.has_errors():
            logger.warning("%s: C source parsed with syntax errors", filename)
        return parsed
