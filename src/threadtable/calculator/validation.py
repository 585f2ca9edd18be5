"""
Thread Calculator - Option Validation

Pre-conditions checked on a full request before any calculation runs or
any document is touched. Checks raise on the first failure:

- ConfigurationError for missing or contradictory options
- ValidationError for present but unusable values

Both entry points accept a ThreadOptions or a plain dict of options.
"""

from typing import Any, Mapping, Union

from ..enums import Gender
from ..errors import ConfigurationError, ValidationError
from ..io.loaders import ThreadOptions, load_options
from .constants import MM_PER_INCH, TPI_PITCH_DIGITS

OptionsInput = Union[ThreadOptions, Mapping[str, Any]]

ALLOWED_GENDERS = tuple(g.value for g in Gender)

# Not allowed anywhere inside an XML comment
XML_COMMENT_FORBIDDEN = "--"


def _check_required(options: Mapping[str, Any]) -> None:
    if options.get('angle') is None:
        raise ConfigurationError('--angle is required')
    if options.get('diameter') is None:
        raise ConfigurationError('--diameter is required')
    if options.get('gender') not in ALLOWED_GENDERS:
        raise ConfigurationError('Exactly one of --internal or --external is required')


def validate_required_flags(options: OptionsInput) -> ThreadOptions:
    """
    Validate presence and ranges of the request options.

    Pitch/TPI are checked separately by derive_pitch().

    Args:
        options: ThreadOptions or dict of option values

    Returns:
        The options as ThreadOptions

    Raises:
        ConfigurationError: If angle, diameter or gender is missing, or gender
            is not "internal"/"external"
        ValidationError: If diameter <= 0, an offset is negative, name or
            custom_name is combined with an existing xml file, or xml_comment
            contains "--"
    """
    # Presence is checked on the raw mapping, before any type coercion
    if not isinstance(options, ThreadOptions):
        _check_required(options)
    opts = load_options(options)
    _check_required(opts.model_dump())

    if not opts.diameter > 0:
        raise ValidationError(f'--diameter must be > 0, got {opts.diameter}')

    if opts.offsets is not None:
        if not all(o >= 0 for o in opts.offsets):
            raise ValidationError('--offsets must be a comma-separated list of non-negative numbers')

    if opts.xml is not None and opts.xml.exists():
        # Merging must never rename an existing table
        if opts.name is not None or opts.custom_name is not None:
            raise ValidationError('--name/--custom-name not allowed when merging into existing --xml file')

    if opts.xml_comment is not None and XML_COMMENT_FORBIDDEN in opts.xml_comment:
        raise ValidationError(f'--xml-comment must not contain "{XML_COMMENT_FORBIDDEN}"')

    return opts


def derive_pitch(options: OptionsInput) -> float:
    """
    Pitch in mm from exactly one of pitch or tpi.

    TPI is converted as round(25.4 / tpi, 2).

    Raises:
        ConfigurationError: If both or neither of pitch and tpi are given
        ValidationError: If the given value is not > 0
    """
    opts = load_options(options)

    got_pitch = opts.pitch is not None
    got_tpi = opts.tpi is not None
    if got_pitch == got_tpi:
        raise ConfigurationError('Exactly one of --pitch or --tpi is required')

    if got_pitch:
        if not opts.pitch > 0:
            raise ValidationError(f'--pitch must be > 0, got {opts.pitch}')
        return opts.pitch

    if not opts.tpi > 0:
        raise ValidationError(f'--tpi must be > 0, got {opts.tpi}')

    pitch = round(MM_PER_INCH / opts.tpi, TPI_PITCH_DIGITS)
    if pitch <= 0:
        raise ValidationError(f'--tpi {opts.tpi} is too fine: pitch rounds to {pitch:.2f} mm')
    return pitch
