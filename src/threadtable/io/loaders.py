"""
Option records and the XML file boundary.

ThreadOptions is the already-parsed request the orchestrator consumes; the
CLI (or any other caller) fills it in. Pydantic does the type coercion, and
load_options() translates its type errors into the threadtable error
taxonomy so callers only ever see ThreadTableError subclasses.

read_xml() / write_xml() are the only functions in the package that touch
the filesystem.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..enums import Gender
from ..errors import ConfigurationError, ValidationError, XmlParseError, IoError


class ThreadOptions(BaseModel):
    """
    All inputs for one thread-table run.

    Every field is optional here; presence and range checks belong to
    threadtable.calculator.validation so they raise the right error class.
    """
    model_config = ConfigDict(extra='ignore', allow_inf_nan=False)

    # Thread geometry
    angle: Optional[float] = None  # Thread angle in degrees (recorded, not used in formulas)
    pitch: Optional[float] = None  # mm, exclusive with tpi
    tpi: Optional[float] = None  # Threads per inch, exclusive with pitch
    diameter: Optional[float] = None  # Nominal diameter in mm
    gender: Optional[str] = None  # "internal" | "external"
    offsets: Optional[List[float]] = None  # Empty/None = DEFAULT_OFFSETS

    # Target document
    xml: Optional[Path] = None  # Existing file = merge, otherwise create

    # Document metadata (creation only)
    name: Optional[str] = None
    custom_name: Optional[str] = None
    sort_order: Optional[int] = None
    xml_comment: Optional[str] = None  # Comment for a newly created ThreadSize

    @field_validator('gender', mode='before')
    @classmethod
    def normalize_gender(cls, v):
        if isinstance(v, Gender):
            return v.value
        return v


def load_options(data: Union["ThreadOptions", Mapping[str, Any]]) -> ThreadOptions:
    """
    Build ThreadOptions from a mapping.

    Args:
        data: ThreadOptions (returned unchanged) or a dict of option values

    Returns:
        ThreadOptions

    Raises:
        ValidationError: If offsets are not a list of finite numbers, or a
            number option is infinite or NaN
        ConfigurationError: If any other option has the wrong type
    """
    if isinstance(data, ThreadOptions):
        return data

    try:
        return ThreadOptions.model_validate(dict(data))
    except PydanticValidationError as e:
        errors = [err for err in e.errors() if err['loc']]
        fields = [str(err['loc'][0]) for err in errors]
        if 'offsets' in fields:
            raise ValidationError(
                '--offsets must be a comma-separated list of non-negative numbers'
            ) from None

        non_finite = [_flag(err['loc'][0]) for err in errors if err['type'] == 'finite_number']
        if non_finite:
            raise ValidationError(f"{', '.join(non_finite)} must be a finite number") from None

        bad = ', '.join(_flag(f) for f in dict.fromkeys(fields))
        raise ConfigurationError(f"Invalid value for {bad or 'options'}") from None


def _flag(field: Any) -> str:
    return f"--{str(field).replace('_', '-')}"


class ThreadDocument(ET.ElementTree):
    """
    ElementTree that remembers the XML declaration of the file it came from.

    declaration is the declaration text (e.g. '<?xml version="1.0"?>') or
    None when the source had none. pretty_print() writes it back out.
    """

    def __init__(self, element=None, declaration: Optional[str] = None):
        super().__init__(element)
        self.declaration = declaration


_DECLARATION_RE = re.compile(rb'^\s*(<\?xml\s[^>]*?\?>)')
_ENCODING_RE = re.compile(r'''encoding\s*=\s*(["'])([^"']*)\1''')


def _read_declaration(content: Union[str, bytes]) -> Optional[str]:
    """Declaration at the start of content, re-labelled UTF-8 if it names another encoding"""
    if isinstance(content, str):
        content = content.encode('utf-8')
    if content.startswith(b'\xef\xbb\xbf'):
        content = content[3:]

    match = _DECLARATION_RE.match(content)
    if match is None:
        return None

    declaration = match.group(1).decode('ascii', errors='replace')
    # Output is always written as UTF-8
    encoding = _ENCODING_RE.search(declaration)
    if encoding and encoding.group(2).lower() not in ('utf-8', 'utf8'):
        declaration = _ENCODING_RE.sub('encoding="UTF-8"', declaration)
    return declaration


def _xml_parser() -> ET.XMLParser:
    """Parser that keeps comments, so reused ThreadSize comments survive a merge."""
    return ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))


def parse_xml(content: Union[str, bytes]) -> ThreadDocument:
    """
    Parse an XML document, keeping comments and the XML declaration.

    Raises:
        XmlParseError: If the document is not well-formed
    """
    try:
        root = ET.fromstring(content, parser=_xml_parser())
    except ET.ParseError as e:
        raise XmlParseError(f"Malformed XML: {e}") from None
    return ThreadDocument(root, declaration=_read_declaration(content))


def read_xml(filepath: Union[str, Path]) -> ThreadDocument:
    """
    Read and parse an existing thread-table document.

    Args:
        filepath: Path to the XML file

    Returns:
        Parsed ElementTree (comments preserved)

    Raises:
        IoError: If the file cannot be read
        XmlParseError: If the file is not well-formed XML
    """
    filepath = Path(filepath)

    try:
        content = filepath.read_bytes()
    except OSError as e:
        raise IoError(f"Cannot read {filepath}: {e.strerror or e}") from None

    try:
        return parse_xml(content)
    except XmlParseError as e:
        raise XmlParseError(f"{filepath}: {e}") from None


def write_xml(text: str, filepath: Union[str, Path]) -> None:
    """
    Write a finished document to disk in a single call.

    Raises:
        IoError: If the file cannot be written
    """
    filepath = Path(filepath)

    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise IoError(f"Cannot write {filepath}: {e.strerror or e}") from None
