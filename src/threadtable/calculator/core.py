"""
Thread Calculator - Core Calculations

Dimension formulas for 60° machine threads (internal and external) with an
optional diametral offset per thread class.

For a pitch P and nominal diameter D (mm):

    internal:  minor = D + offset
               major = minor + 1.083 P
               pitch = major - 0.650 P
               tap drill = minor

    external:  major = D - offset
               pitch = major - 0.650 P
               minor = major - 1.227 P

Every result is rounded to the calculator's significant digits. The internal
pitch diameter is computed from the already-rounded major diameter.
"""

from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, TypedDict, Union

from ..enums import Gender
from ..errors import GenderError
from .constants import (
    MM_PER_INCH,
    INTERNAL_MAJOR_FACTOR,
    PITCH_DIAMETER_FACTOR,
    EXTERNAL_MINOR_FACTOR,
    DEFAULT_SIGNIFICANT_DIGITS,
)

GenderInput = Union[Gender, str]

# One entry per offset from calculate_values_with_offset().
# "class" is a keyword, hence the functional form.
ThreadResult = TypedDict(
    "ThreadResult",
    {
        "gender": Gender,
        "class": float,
        "major_dia": float,
        "pitch_dia": float,
        "minor_dia": float,
        "tap_drill": float,  # internal threads only
    },
    total=False,
)

# Handed only to the factory classmethods; direct construction is rejected
_FACTORY_TOKEN = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _coerce_gender(value: Any) -> Gender:
    try:
        return Gender(value)
    except ValueError:
        allowed = [g.value for g in Gender]
        raise GenderError(f"gender must be one of {allowed}, got {value!r}") from None


def tpi_to_pitch(tpi: float, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> float:
    """Convert threads per inch to pitch in mm"""
    return round(MM_PER_INCH * (1.0 / tpi), significant_digits)


class ThreadProfile:
    """Gender-specific diameter derivation.

    The calculator delegates every gender-dependent value to its profile, so
    callers ask the profile instead of branching on gender themselves.
    """

    gender: Gender
    has_tap_drill: bool = False

    def major_diameter(self, calc: "ThreadCalculator", offset: float) -> float:
        raise NotImplementedError

    def pitch_diameter(self, calc: "ThreadCalculator", offset: float) -> float:
        raise NotImplementedError

    def minor_diameter(self, calc: "ThreadCalculator", offset: float) -> float:
        raise NotImplementedError

    def nominal_size(self, calc: "ThreadCalculator") -> float:
        """Size used to key the thread in a thread table"""
        raise NotImplementedError


class InternalProfile(ThreadProfile):
    """Nut / tapped hole: the nominal diameter is the minor diameter."""

    gender = Gender.INTERNAL
    has_tap_drill = True

    def major_diameter(self, calc, offset):
        return calc.internal_major_diameter(offset)

    def pitch_diameter(self, calc, offset):
        return calc.internal_pitch_diameter(offset)

    def minor_diameter(self, calc, offset):
        return round(calc.diameter + offset, calc.significant_digits)

    def nominal_size(self, calc):
        return calc.internal_major_diameter(0)


class ExternalProfile(ThreadProfile):
    """Bolt / screw: the nominal diameter is the major diameter."""

    gender = Gender.EXTERNAL

    def major_diameter(self, calc, offset):
        return round(calc.diameter - offset, calc.significant_digits)

    def pitch_diameter(self, calc, offset):
        return calc.external_pitch_diameter(offset)

    def minor_diameter(self, calc, offset):
        return calc.external_minor_diameter(offset)

    def nominal_size(self, calc):
        return calc.diameter


PROFILES: Dict[Gender, ThreadProfile] = {
    Gender.INTERNAL: InternalProfile(),
    Gender.EXTERNAL: ExternalProfile(),
}


class ThreadCalculator:
    """
    Thread dimensions for one pitch / gender / nominal diameter.

    Build instances through ThreadCalculator.with_pitch() or
    ThreadCalculator.with_tpi() (or the module-level create_with_pitch() /
    create_with_tpi()). Calling the class directly raises TypeError.

    The offset list always starts with 0.0; add_offsets() appends to it.

    Example:
        >>> calc = ThreadCalculator.with_tpi(22, "internal", 3)
        >>> calc.pitch
        1.15
        >>> calc.add_offsets(0.1)
        >>> [v["major_dia"] for v in calc.calculate_for_offsets()]
        [4.25, 4.35]
    """

    def __init__(
        self,
        gender: GenderInput,
        diameter: float,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS,
        *,
        _token: Optional[object] = None
    ):
        if _token is not _FACTORY_TOKEN:
            raise TypeError(
                "ThreadCalculator cannot be instantiated directly - "
                "use ThreadCalculator.with_pitch() or ThreadCalculator.with_tpi()"
            )
        self.gender = gender
        self.diameter = diameter
        self.significant_digits = significant_digits
        self.pitch: Optional[float] = None
        self.offsets: List[float] = [0.0]

    @classmethod
    def with_pitch(
        cls,
        pitch: float,
        gender: GenderInput,
        diameter: float,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    ) -> "ThreadCalculator":
        """
        Create a calculator from a pitch in mm.

        Raises:
            GenderError: If gender is not internal or external
        """
        calc = cls(gender, diameter, significant_digits, _token=_FACTORY_TOKEN)
        calc.pitch = pitch
        return calc

    @classmethod
    def with_tpi(
        cls,
        tpi: float,
        gender: GenderInput,
        diameter: float,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    ) -> "ThreadCalculator":
        """
        Create a calculator from threads per inch.

        The pitch is 25.4 / tpi, rounded to significant_digits.

        Raises:
            GenderError: If gender is not internal or external
        """
        calc = cls(gender, diameter, significant_digits, _token=_FACTORY_TOKEN)
        calc.pitch = calc.tpi_to_pitch(tpi)
        return calc

    def __repr__(self) -> str:
        return (
            f"ThreadCalculator(gender={self._gender.value!r}, diameter={self.diameter!r}, "
            f"pitch={self.pitch!r}, offsets={self.offsets!r})"
        )

    @property
    def gender(self) -> Gender:
        return self._gender

    @gender.setter
    def gender(self, value: GenderInput) -> None:
        self._gender = _coerce_gender(value)

    @property
    def profile(self) -> ThreadProfile:
        return PROFILES[self._gender]

    def add_offsets(self, *offsets: float) -> None:
        """Append one or more offsets (mm) after the existing ones"""
        self.offsets.extend(offsets)

    def is_valid(self) -> bool:
        """Check that every field holds a usable value.

        The fields are plain attributes and may be changed after
        construction, so this can be asked at any time.
        """
        if not _is_number(self.pitch):
            return False
        if not _is_number(self.diameter):
            return False
        if not all(_is_number(o) for o in self.offsets):
            return False
        if not isinstance(self.significant_digits, int) or isinstance(self.significant_digits, bool):
            return False
        return isinstance(self._gender, Gender)

    def tpi_to_pitch(self, tpi: float) -> float:
        """Convert threads per inch to pitch in mm at this calculator's precision"""
        return tpi_to_pitch(tpi, self.significant_digits)

    def thread_designation(self) -> str:
        """Designation as '<diameter>x<pitch>', e.g. '3x1.15'"""
        return f"{self.diameter:g}x{self.pitch:g}"

    def internal_major_diameter(self, offset: float = 0) -> float:
        minor_diameter = self.diameter + offset
        result = INTERNAL_MAJOR_FACTOR * self.pitch + minor_diameter
        return round(result, self.significant_digits)

    def internal_pitch_diameter(self, offset: float = 0) -> float:
        major_diameter = self.internal_major_diameter(offset)
        result = major_diameter - PITCH_DIAMETER_FACTOR * self.pitch
        return round(result, self.significant_digits)

    def external_pitch_diameter(self, offset: float = 0) -> float:
        major_diameter = self.diameter - offset
        result = major_diameter - PITCH_DIAMETER_FACTOR * self.pitch
        return round(result, self.significant_digits)

    def external_minor_diameter(self, offset: float = 0) -> float:
        major_diameter = self.diameter - offset
        result = major_diameter - EXTERNAL_MINOR_FACTOR * self.pitch
        return round(result, self.significant_digits)

    def calculate_values_with_offset(self, offset: float = 0) -> ThreadResult:
        """
        Calculate thread dimensions for one offset.

        Args:
            offset: Diametral offset in mm (default: 0)

        Returns:
            Dict with gender, class (the offset), major_dia, pitch_dia,
            minor_dia and, for internal threads, tap_drill
        """
        profile = self.profile
        values: ThreadResult = {"gender": self._gender, "class": offset}
        values["major_dia"] = profile.major_diameter(self, offset)
        values["pitch_dia"] = profile.pitch_diameter(self, offset)
        values["minor_dia"] = profile.minor_diameter(self, offset)
        if profile.has_tap_drill:
            values["tap_drill"] = values["minor_dia"]
        return values

    def calculate_for_offsets(self) -> List[ThreadResult]:
        """Calculate thread dimensions for every offset, in offset order"""
        return [self.calculate_values_with_offset(offset) for offset in self.offsets]


def create_with_pitch(
    pitch: float,
    gender: GenderInput,
    diameter: float,
    options: Optional[Mapping[str, Any]] = None
) -> ThreadCalculator:
    """
    Create a calculator from a pitch in mm.

    Args:
        pitch: Thread pitch (mm)
        gender: "internal" or "external" (or a Gender)
        diameter: Nominal diameter (mm)
        options: Optional settings; only "significant_digits" is read

    Raises:
        GenderError: If gender is not internal or external
    """
    options = options or {}
    return ThreadCalculator.with_pitch(
        pitch, gender, diameter,
        significant_digits=options.get("significant_digits", DEFAULT_SIGNIFICANT_DIGITS)
    )


def create_with_tpi(
    tpi: float,
    gender: GenderInput,
    diameter: float,
    options: Optional[Mapping[str, Any]] = None
) -> ThreadCalculator:
    """
    Create a calculator from threads per inch.

    Args:
        tpi: Threads per inch
        gender: "internal" or "external" (or a Gender)
        diameter: Nominal diameter (mm)
        options: Optional settings; only "significant_digits" is read

    Raises:
        GenderError: If gender is not internal or external
    """
    options = options or {}
    return ThreadCalculator.with_tpi(
        tpi, gender, diameter,
        significant_digits=options.get("significant_digits", DEFAULT_SIGNIFICANT_DIGITS)
    )
