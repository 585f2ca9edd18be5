"""
Tests for request validation and pitch derivation.
"""

import pytest

from threadtable.calculator.validation import validate_required_flags, derive_pitch
from threadtable.enums import Gender
from threadtable.errors import ConfigurationError, ValidationError
from threadtable.io.loaders import ThreadOptions


def _options(**overrides):
    options = {"angle": 60.0, "pitch": 0.9, "diameter": 4.0, "gender": "external"}
    options.update(overrides)
    return {k: v for k, v in options.items() if v is not None}


class TestRequiredFlags:
    """Presence checks raise ConfigurationError."""

    def test_valid_options_returned_as_model(self):
        opts = validate_required_flags(_options())
        assert isinstance(opts, ThreadOptions)
        assert opts.diameter == 4.0

    def test_accepts_thread_options(self):
        opts = ThreadOptions(**_options())
        assert validate_required_flags(opts) is opts

    @pytest.mark.parametrize("missing", ["angle", "diameter", "gender"])
    def test_missing_required(self, missing):
        options = _options()
        del options[missing]
        with pytest.raises(ConfigurationError):
            validate_required_flags(options)

    def test_unknown_gender(self):
        with pytest.raises(ConfigurationError, match="--internal or --external"):
            validate_required_flags(_options(gender="both"))

    def test_gender_is_case_sensitive(self):
        with pytest.raises(ConfigurationError):
            validate_required_flags(_options(gender="Internal"))

    def test_missing_angle_reported_before_bad_offsets(self):
        options = _options(offsets=["abc"])
        del options["angle"]
        with pytest.raises(ConfigurationError, match="--angle"):
            validate_required_flags(options)

    def test_missing_gender_reported_before_bad_diameter(self):
        options = _options(diameter=float("inf"))
        del options["gender"]
        with pytest.raises(ConfigurationError):
            validate_required_flags(options)

    def test_gender_enum_accepted(self):
        opts = validate_required_flags(_options(gender=Gender.INTERNAL))
        assert opts.gender == "internal"

    def test_pitch_not_checked_here(self):
        """Pitch/TPI are left to derive_pitch()"""
        options = _options()
        del options["pitch"]
        validate_required_flags(options)


class TestValueRanges:
    """Range and content checks raise ValidationError."""

    @pytest.mark.parametrize("diameter", [0.0, -4.0, float("nan")])
    def test_diameter_must_be_positive(self, diameter):
        with pytest.raises(ValidationError, match="--diameter"):
            validate_required_flags(_options(diameter=diameter))

    def test_negative_offset(self):
        with pytest.raises(ValidationError, match="--offsets"):
            validate_required_flags(_options(offsets=[-0.1, 0.2]))

    def test_non_numeric_offset(self):
        with pytest.raises(ValidationError, match="--offsets"):
            validate_required_flags(_options(offsets=[0.1, "abc"]))

    def test_zero_offset_allowed(self):
        opts = validate_required_flags(_options(offsets=[0.0, 0.3]))
        assert opts.offsets == [0.0, 0.3]

    def test_xml_comment_with_double_dash(self):
        with pytest.raises(ValidationError, match="--xml-comment"):
            validate_required_flags(_options(xml_comment="Invalid comment with -- dash"))

    def test_xml_comment_single_dashes_allowed(self):
        opts = validate_required_flags(_options(xml_comment="PLA - 0.4 mm - fine"))
        assert opts.xml_comment == "PLA - 0.4 mm - fine"


class TestMetadataWithExistingXml:
    """Name and custom name only apply when creating a document."""

    def test_name_with_existing_xml(self, base_xml_file):
        with pytest.raises(ValidationError, match="--name"):
            validate_required_flags(_options(name="New Name", xml=str(base_xml_file)))

    def test_custom_name_with_existing_xml(self, base_xml_file):
        with pytest.raises(ValidationError):
            validate_required_flags(_options(custom_name="New Custom Name", xml=str(base_xml_file)))

    def test_name_with_missing_xml_allowed(self, tmp_path):
        opts = validate_required_flags(_options(name="Fresh", xml=str(tmp_path / "new.xml")))
        assert opts.name == "Fresh"

    def test_existing_xml_without_name_allowed(self, base_xml_file):
        opts = validate_required_flags(_options(xml=base_xml_file))
        assert opts.xml == base_xml_file


class TestDerivePitch:
    """Tests for derive_pitch()."""

    def test_pitch_passthrough(self):
        assert derive_pitch(_options(pitch=0.9)) == 0.9

    def test_tpi_converted(self):
        assert derive_pitch(_options(pitch=None, tpi=25.4)) == 1.0

    def test_tpi_rounded_to_two_digits(self):
        assert derive_pitch(_options(pitch=None, tpi=22)) == 1.15

    def test_both_pitch_and_tpi(self):
        with pytest.raises(ConfigurationError, match="--pitch or --tpi"):
            derive_pitch(_options(tpi=25.4))

    def test_neither_pitch_nor_tpi(self):
        with pytest.raises(ConfigurationError):
            derive_pitch(_options(pitch=None))

    @pytest.mark.parametrize("pitch", [0.0, -0.9])
    def test_pitch_must_be_positive(self, pitch):
        with pytest.raises(ValidationError, match="--pitch"):
            derive_pitch(_options(pitch=pitch))

    @pytest.mark.parametrize("tpi", [0.0, -25.4])
    def test_tpi_must_be_positive(self, tpi):
        with pytest.raises(ValidationError, match="--tpi"):
            derive_pitch(_options(pitch=None, tpi=tpi))

    def test_tpi_too_fine(self):
        """25.4 / 10000 rounds to 0.00"""
        with pytest.raises(ValidationError, match="too fine"):
            derive_pitch(_options(pitch=None, tpi=10000))
