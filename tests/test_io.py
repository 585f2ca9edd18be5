"""
Tests for the IO module - options loading and the XML file boundary.
"""

import pytest
from pathlib import Path

from threadtable.enums import Gender
from threadtable.errors import ConfigurationError, ValidationError, XmlParseError, IoError
from threadtable.io import ThreadOptions, load_options, parse_xml, read_xml, write_xml


class TestLoadOptions:
    """Tests for load_options()."""

    def test_from_dict(self):
        opts = load_options({"angle": 60, "pitch": "0.9", "diameter": 4, "gender": "external"})
        assert opts.angle == 60.0
        assert opts.pitch == 0.9
        assert opts.gender == "external"

    def test_thread_options_passthrough(self):
        opts = ThreadOptions(angle=60.0)
        assert load_options(opts) is opts

    def test_unknown_keys_ignored(self):
        opts = load_options({"angle": 60.0, "colour": "blue"})
        assert not hasattr(opts, "colour")

    def test_gender_enum_normalized(self):
        opts = load_options({"gender": Gender.INTERNAL})
        assert opts.gender == "internal"

    def test_offsets_from_strings(self):
        """The CLI hands offsets over as strings"""
        opts = load_options({"offsets": ["0", "0.1", "0.2"]})
        assert opts.offsets == [0.0, 0.1, 0.2]

    def test_xml_becomes_path(self):
        opts = load_options({"xml": "threads.xml"})
        assert opts.xml == Path("threads.xml")

    def test_bad_offsets_is_validation_error(self):
        with pytest.raises(ValidationError, match="--offsets"):
            load_options({"offsets": ["0.1", "x"]})

    def test_bad_field_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="--diameter"):
            load_options({"diameter": "large"})

    def test_bad_field_name_uses_flag_spelling(self):
        with pytest.raises(ConfigurationError, match="--sort-order"):
            load_options({"sort_order": "first"})

    @pytest.mark.parametrize("field,flag", [
        ("diameter", "--diameter"),
        ("pitch", "--pitch"),
        ("tpi", "--tpi"),
    ])
    def test_infinite_number_is_validation_error(self, field, flag):
        with pytest.raises(ValidationError, match=f"{flag} must be a finite number"):
            load_options({field: float("inf")})

    def test_nan_is_validation_error(self):
        with pytest.raises(ValidationError, match="--angle"):
            load_options({"angle": float("nan")})

    def test_infinite_offset(self):
        with pytest.raises(ValidationError, match="--offsets"):
            load_options({"offsets": [0.1, "inf"]})

    def test_defaults_are_none(self):
        opts = ThreadOptions()
        assert opts.offsets is None
        assert opts.xml is None
        assert opts.sort_order is None


class TestParseXml:
    """Tests for parse_xml()."""

    def test_parse(self):
        tree = parse_xml("<ThreadType><Unit>mm</Unit></ThreadType>")
        assert tree.getroot().tag == "ThreadType"

    def test_comments_kept(self):
        tree = parse_xml("<ThreadType><ThreadSize><!--note--><Size>4.00</Size></ThreadSize></ThreadType>")
        size = tree.getroot().find("ThreadSize")
        assert len(size) == 2
        assert size[0].text == "note"

    def test_no_declaration(self):
        assert parse_xml("<ThreadType/>").declaration is None

    def test_declaration_recorded(self):
        tree = parse_xml('<?xml version="1.0" encoding="UTF-8"?>\n<ThreadType/>')
        assert tree.declaration == '<?xml version="1.0" encoding="UTF-8"?>'

    def test_declaration_after_bom(self):
        tree = parse_xml(b'\xef\xbb\xbf<?xml version="1.0"?><ThreadType/>')
        assert tree.declaration == '<?xml version="1.0"?>'

    def test_declaration_relabelled_utf8(self):
        """Output is written as UTF-8, so another declared encoding is replaced"""
        tree = parse_xml(b'<?xml version="1.0" encoding="ISO-8859-1"?><ThreadType><Name>Caf\xe9</Name></ThreadType>')
        assert tree.declaration == '<?xml version="1.0" encoding="UTF-8"?>'
        assert tree.getroot().findtext("Name") == "Café"

    def test_malformed(self):
        with pytest.raises(XmlParseError, match="Malformed XML"):
            parse_xml("<ThreadType><Name>X</Name><Unit>mm</Unit><Angle>60.0</Angle>")


class TestReadXml:
    """Tests for read_xml()."""

    def test_read(self, base_xml_file):
        tree = read_xml(base_xml_file)
        assert tree.getroot().findtext("Unit") == "mm"

    def test_read_keeps_declaration(self, write_xml_file):
        path = write_xml_file('<?xml version="1.0" encoding="UTF-8"?>\n<ThreadType/>\n')
        assert read_xml(path).declaration == '<?xml version="1.0" encoding="UTF-8"?>'

    def test_read_str_path(self, base_xml_file):
        tree = read_xml(str(base_xml_file))
        assert tree.getroot().tag == "ThreadType"

    def test_missing_file(self, tmp_path):
        with pytest.raises(IoError, match="Cannot read"):
            read_xml(tmp_path / "nonexistent.xml")

    def test_malformed_file_names_path(self, write_xml_file):
        path = write_xml_file("<ThreadType><Name>X</Name>")
        with pytest.raises(XmlParseError) as exc_info:
            read_xml(path)
        assert str(path) in str(exc_info.value)


class TestWriteXml:
    """Tests for write_xml()."""

    def test_write(self, tmp_path):
        path = tmp_path / "out.xml"
        write_xml("<ThreadType/>\n", path)
        assert path.read_text(encoding="utf-8") == "<ThreadType/>\n"

    def test_write_overwrites(self, tmp_path):
        path = tmp_path / "out.xml"
        path.write_text("old contents that are longer")
        write_xml("new\n", path)
        assert path.read_text() == "new\n"

    def test_write_to_missing_directory(self, tmp_path):
        with pytest.raises(IoError, match="Cannot write"):
            write_xml("<ThreadType/>\n", tmp_path / "missing" / "out.xml")
