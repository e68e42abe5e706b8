"""Type registry: the growing symbol table the resolver consults."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class TypeRegistry(ABC):
    """Read-side view of the typedefs, enums and aggregates discovered so far."""

    @abstractmethod
    def typedef_underlying(self, name: str) -> str | None:
        """Underlying C spelling of typedef *name*, or None if unregistered."""
        ...

    @abstractmethod
    def base_type_of_typedef(self, name: str) -> str | None:
        """Struct/union spelling a typedef names (``"union U"``), if known."""
        ...

    @abstractmethod
    def is_enum_typedef(self, name: str) -> bool: ...

    @abstractmethod
    def is_already_declared(self, name: str) -> bool:
        """True once a struct/union/class/enum with bare *name* was emitted."""
        ...

    @abstractmethod
    def qualify(self, name: str) -> str:
        """Import-qualified form of *name*; identity if no import is needed."""
        ...


def split_import(name: str) -> tuple[str, str]:
    """Split ``"a/b/pkg.Type"`` into ``("a/b/pkg", "pkg.Type")``.

    Names without a package path, already-short ``"pkg.Type"`` included,
    yield ``("", name)``.
    """
    slash = name.rfind("/")
    if slash < 0:
        return "", name
    dot = name.rfind(".")
    if dot <= slash:
        return "", name
    path = name[:dot]
    return path, name[slash + 1 :]


@dataclass
class ProgramRegistry(TypeRegistry):
    # typedef name → underlying C spelling
    typedefs: dict[str, str] = field(default_factory=dict)
    # typedef name → struct/union spelling it aliases
    typedef_bases: dict[str, str] = field(default_factory=dict)
    enum_typedefs: set[str] = field(default_factory=set)
    declared: set[str] = field(default_factory=set)
    # import paths requested through qualify()
    imports: set[str] = field(default_factory=set)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    # ── writes ───────────────────────────────────────────────────

    def add_typedef(self, name: str, underlying: str, base: str | None = None) -> None:
        with self._lock:
            self.typedefs[name] = underlying
            if base:
                self.typedef_bases[name] = base
        logger.debug("typedef %s = %s", name, underlying)

    def add_enum_typedef(self, name: str) -> None:
        with self._lock:
            self.enum_typedefs.add(name)

    def declare(self, name: str) -> None:
        with self._lock:
            self.declared.add(name)

    # ── reads ────────────────────────────────────────────────────

    def typedef_underlying(self, name: str) -> str | None:
        return self.typedefs.get(name)

    def base_type_of_typedef(self, name: str) -> str | None:
        return self.typedef_bases.get(name)

    def is_enum_typedef(self, name: str) -> bool:
        return name in self.enum_typedefs

    def is_already_declared(self, name: str) -> bool:
        return name in self.declared

    def qualify(self, name: str) -> str:
        path, short = split_import(name)
        if not path:
            return name
        with self._lock:
            self.imports.add(path)
        return short
