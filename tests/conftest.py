"""
Pytest configuration and shared fixtures for threadtable tests.
"""

import pytest

from threadtable.app import App
from threadtable.calculator.core import ThreadCalculator


# ─── Calculators ─────────────────────────────────────────────────────────


@pytest.fixture
def internal_calc():
    """Internal thread, 22 TPI (pitch 1.15), 3 mm nominal."""
    return ThreadCalculator.with_tpi(22, "internal", 3, significant_digits=2)


@pytest.fixture
def external_calc():
    """External thread, 22 TPI (pitch 1.15), 3 mm nominal."""
    return ThreadCalculator.with_tpi(22, "external", 3, significant_digits=2)


# ─── Request options ─────────────────────────────────────────────────────


@pytest.fixture
def internal_options():
    """Options for a fresh internal M9.45x0.9 document with two offsets."""
    return {
        "angle": 60.0,
        "pitch": 0.90,
        "diameter": 9.45,
        "gender": "internal",
        "offsets": [0.0, 0.1],
    }


@pytest.fixture
def external_options():
    """Options for an external 4 mm x 0.9 thread with a single offset."""
    return {
        "angle": 60.0,
        "pitch": 0.9,
        "diameter": 4.0,
        "gender": "external",
        "offsets": [0.0],
    }


# ─── Documents on disk ───────────────────────────────────────────────────


BASE_XML = """<ThreadType>
  <Name>X</Name>
  <CustomName>X</CustomName>
  <Unit>{unit}</Unit>
  <Angle>{angle}</Angle>
  <SortOrder>3</SortOrder>
{body}</ThreadType>
"""


def make_base_xml(unit="mm", angle="60.0", body=""):
    """Text of a minimal ThreadType document."""
    return BASE_XML.format(unit=unit, angle=angle, body=body)


@pytest.fixture
def write_xml_file(tmp_path):
    """Factory writing XML text to tmp_path/<name> and returning the path."""
    def _write(content=None, name="base.xml"):
        path = tmp_path / name
        path.write_text(make_base_xml() if content is None else content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def base_xml_file(write_xml_file):
    """Existing, empty 60° millimetre document."""
    return write_xml_file()


# ─── Orchestrator ────────────────────────────────────────────────────────


@pytest.fixture
def app():
    """App with the default (discarding) logger."""
    return App()
