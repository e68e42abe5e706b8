"""C type spelling → Go type descriptor resolution."""

from .api import (  # noqa: F401
    resolve_type,
    scan_source,
    translate_source,
    dump_translation,
)
from .classify import (  # noqa: F401
    has_array_suffix,
    is_c_array,
    is_c_float,
    is_c_integer,
    is_c_pointer,
    is_function,
    is_pointer,
    is_typedef_function,
)
from .extract import array_size, base_type  # noqa: F401
from .normalize import normalize  # noqa: F401
from .registry import ProgramRegistry, TypeRegistry  # noqa: F401
from .resolve_types import Resolution, ResolverConfig  # noqa: F401
from .resolver import TypeResolver  # noqa: F401
from .sanitize import sanitize  # noqa: F401
