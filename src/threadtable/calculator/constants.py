"""
Constants for thread dimension calculations.

All numerical constants used by the calculator and the orchestrator live
here. Lengths are millimetres throughout.

The profile factors are the usual shop approximations for a 60° thread
form, expressed as multiples of the pitch P. They are NOT derived from the
thread angle passed on the command line: the angle is only recorded in the
generated document.
"""

from typing import Tuple

# =============================================================================
# Units
# =============================================================================

MM_PER_INCH: float = 25.4

# =============================================================================
# 60° profile factors (multiples of pitch P)
# =============================================================================

# Internal major diameter = minor diameter + 1.083 P
INTERNAL_MAJOR_FACTOR: float = 1.083

# Pitch diameter = major diameter - 0.650 P (both genders)
PITCH_DIAMETER_FACTOR: float = 0.650

# External minor diameter = major diameter - 1.227 P
EXTERNAL_MINOR_FACTOR: float = 1.227

# =============================================================================
# Rounding and defaults
# =============================================================================

# Decimal places kept on every derived diameter
DEFAULT_SIGNIFICANT_DIGITS: int = 2

# Decimal places used when converting TPI during option validation
TPI_PITCH_DIGITS: int = 2

# Offsets (diametral allowances) used when none are requested
DEFAULT_OFFSETS: Tuple[float, ...] = (0.0, 0.1, 0.2, 0.3, 0.4)
