"""
Threadtable IO - option records, ThreadType schema, merge and file boundary.

Example:
    >>> from threadtable.io import ThreadOptions, build_new, merge, pretty_print
    >>> from threadtable.calculator import ThreadCalculator
    >>>
    >>> calc = ThreadCalculator.with_pitch(0.9, "internal", 9.45)
    >>> options = ThreadOptions(angle=60.0)
    >>> doc = merge(build_new(options, 60.0), calc, 60.0, options)
    >>> print(pretty_print(doc))
"""

from .loaders import (
    ThreadDocument,
    ThreadOptions,
    load_options,
    parse_xml,
    read_xml,
    write_xml,
)

from .schema import (
    ROOT_TAG,
    UNIT_MM,
    DEFAULT_NAME,
    DEFAULT_SORT_ORDER,
    build_new,
    validate_existing,
    class_label_for,
    format_mm,
    format_angle,
)

from .merge import (
    merge,
    pretty_print,
    declaration_of,
    nominal_size,
    find_child,
    upsert_child,
    set_fields,
)

__all__ = [
    # Options / file boundary
    "ThreadDocument",
    "ThreadOptions",
    "load_options",
    "parse_xml",
    "read_xml",
    "write_xml",

    # Schema
    "ROOT_TAG",
    "UNIT_MM",
    "DEFAULT_NAME",
    "DEFAULT_SORT_ORDER",
    "build_new",
    "validate_existing",
    "class_label_for",
    "format_mm",
    "format_angle",

    # Merge
    "merge",
    "pretty_print",
    "declaration_of",
    "nominal_size",
    "find_child",
    "upsert_child",
    "set_fields",
]
