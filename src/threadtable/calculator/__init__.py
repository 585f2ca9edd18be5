"""
Thread Calculator - dimensions of 60° machine threads.

Example:
    >>> from threadtable.calculator import ThreadCalculator
    >>>
    >>> calc = ThreadCalculator.with_tpi(22, "external", 3)
    >>> calc.add_offsets(0.1, 0.2)
    >>> for values in calc.calculate_for_offsets():
    ...     print(values["class"], values["major_dia"], values["minor_dia"])
"""

from .core import (
    # Calculator
    ThreadCalculator,
    ThreadResult,
    create_with_pitch,
    create_with_tpi,
    tpi_to_pitch,

    # Gender-specific behaviour
    ThreadProfile,
    InternalProfile,
    ExternalProfile,
    PROFILES,
)

from .constants import (
    MM_PER_INCH,
    DEFAULT_SIGNIFICANT_DIGITS,
    DEFAULT_OFFSETS,
)

from .validation import (
    validate_required_flags,
    derive_pitch,
)

from .output import (
    # Output formatters
    to_xml,
    to_json,
    to_summary,
)

from ..enums import Gender


__all__ = [
    # Constants
    "MM_PER_INCH",
    "DEFAULT_SIGNIFICANT_DIGITS",
    "DEFAULT_OFFSETS",

    # Enums
    "Gender",

    # Calculator
    "ThreadCalculator",
    "ThreadResult",
    "create_with_pitch",
    "create_with_tpi",
    "tpi_to_pitch",

    # Profiles
    "ThreadProfile",
    "InternalProfile",
    "ExternalProfile",
    "PROFILES",

    # Validation
    "validate_required_flags",
    "derive_pitch",

    # Output formatters
    "to_xml",
    "to_json",
    "to_summary",
]
