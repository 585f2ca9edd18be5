"""
Threadtable - machine thread calculator and CAD thread-table generator.

Computes major / pitch / minor diameters and tap-drill sizes for 60° threads
and writes them into a ThreadType XML document for a CAD thread-table importer.

Example:
    >>> from threadtable import App
    >>>
    >>> xml = App().run({
    ...     "angle": 60.0,
    ...     "pitch": 0.9,
    ...     "diameter": 9.45,
    ...     "gender": "internal",
    ...     "offsets": [0.0, 0.1],
    ... })
    >>>
    >>> from threadtable import ThreadCalculator
    >>> ThreadCalculator.with_tpi(22, "internal", 3).internal_major_diameter()
    4.25

Note: All imports are lazy-loaded. `import threadtable` alone does not
import Pydantic; the first attribute access loads the submodule it needs.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Gender"}

_ERRORS = {
    "ExitCode",
    "ThreadTableError",
    "ConfigurationError",
    "ValidationError",
    "GenderError",
    "XmlParseError",
    "AngleMismatchError",
    "IoError",
}

_CALCULATOR = {
    "ThreadCalculator",
    "ThreadResult",
    "create_with_pitch",
    "create_with_tpi",
    "tpi_to_pitch",
    "validate_required_flags",
    "derive_pitch",
    "to_json",
    "to_summary",
    "DEFAULT_OFFSETS",
}

_IO = {
    "ThreadOptions",
    "load_options",
    "read_xml",
    "write_xml",
    "build_new",
    "validate_existing",
    "merge",
    "pretty_print",
}

_APP = {"App", "run"}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _ERRORS:
        if "errors" not in _modules:
            from . import errors
            _modules["errors"] = errors
        return getattr(_modules["errors"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    if name in _APP:
        if "app" not in _modules:
            from . import app
            _modules["app"] = app
        return getattr(_modules["app"], name)

    raise AttributeError(f"module 'threadtable' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Orchestrator (lazy loaded from app)
    "App",
    "run",

    # Enums (lazy loaded from enums)
    "Gender",

    # Errors (lazy loaded from errors)
    "ExitCode",
    "ThreadTableError",
    "ConfigurationError",
    "ValidationError",
    "GenderError",
    "XmlParseError",
    "AngleMismatchError",
    "IoError",

    # Calculator (lazy loaded from calculator)
    "ThreadCalculator",
    "ThreadResult",
    "create_with_pitch",
    "create_with_tpi",
    "tpi_to_pitch",
    "validate_required_flags",
    "derive_pitch",
    "to_json",
    "to_summary",
    "DEFAULT_OFFSETS",

    # IO (lazy loaded from io)
    "ThreadOptions",
    "load_options",
    "read_xml",
    "write_xml",
    "build_new",
    "validate_existing",
    "merge",
    "pretty_print",
]
