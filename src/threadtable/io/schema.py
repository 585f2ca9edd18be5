"""
ThreadType document schema.

Defines the element layout of the custom thread-table XML consumed by the
CAD importer, plus creation of a fresh document and the compatibility
check applied to an existing one before anything is merged into it.

    <ThreadType>
      <Name/> <CustomName/> <Unit>mm</Unit> <Angle>60.0</Angle> <SortOrder/>
      <ThreadSize>                      (repeatable, keyed by Size)
        <Size>10.42</Size>
        <Designation>
          <ThreadDesignation/> <CTD/> <Pitch/>
          <Thread>                      (repeatable, keyed by Gender + Class)
            <Gender/> <Class/> <MajorDia/> <PitchDia/> <MinorDia/> <TapDrill/>
          </Thread>
        </Designation>
      </ThreadSize>
    </ThreadType>
"""

import xml.etree.ElementTree as ET
from typing import Optional, Union

from ..errors import ValidationError, XmlParseError, AngleMismatchError
from .loaders import ThreadOptions

# Root element and document metadata
ROOT_TAG = "ThreadType"
UNIT_MM = "mm"
DEFAULT_NAME = "Generated Threads"
DEFAULT_SORT_ORDER = 3

# Repeatable containers and their key fields
THREAD_SIZE_TAG = "ThreadSize"
SIZE_TAG = "Size"
DESIGNATION_TAG = "Designation"
THREAD_TAG = "Thread"

Document = Union[ET.ElementTree, ET.Element]


def format_mm(value: float) -> str:
    """Two-decimal text used for every diameter, size and pitch field"""
    return f"{float(value):.2f}"


def format_angle(value: float) -> str:
    """One-decimal text used for the Angle field"""
    return f"{float(value):.1f}"


def class_label_for(offset: float) -> str:
    """
    Class label for an offset.

    Offsets below 1 drop the leading zero ("0.1" -> "O.1"); larger offsets
    keep the whole number ("1.0" -> "O1.0").
    """
    formatted = f"{float(offset):.1f}"
    if formatted.startswith("0."):
        return f"O.{formatted[2:]}"
    return f"O{formatted}"


def get_root(document: Document) -> ET.Element:
    if isinstance(document, ET.ElementTree):
        return document.getroot()
    return document


def text_of(parent: ET.Element, tag: str) -> Optional[str]:
    """Stripped text of the first child with this tag, or None"""
    el = parent.find(tag)
    if el is None or el.text is None:
        return None
    return el.text.strip()


def build_new(options: ThreadOptions, angle: float) -> ET.ElementTree:
    """
    Create an empty ThreadType document.

    Name defaults to "Generated Threads", CustomName defaults to Name and
    SortOrder defaults to 3.
    """
    name = options.name or DEFAULT_NAME
    custom_name = options.custom_name or name
    sort_order = options.sort_order if options.sort_order is not None else DEFAULT_SORT_ORDER

    root = ET.Element(ROOT_TAG)
    ET.SubElement(root, "Name").text = name
    ET.SubElement(root, "CustomName").text = custom_name
    ET.SubElement(root, "Unit").text = UNIT_MM
    ET.SubElement(root, "Angle").text = format_angle(angle)
    ET.SubElement(root, "SortOrder").text = str(sort_order)
    return ET.ElementTree(root)


def validate_existing(document: Document, angle: float) -> None:
    """
    Check that an existing document can take the requested threads.

    Raises:
        XmlParseError: If the root element is not <ThreadType>
        ValidationError: If <Unit> is not "mm" or <Angle> is missing/non-numeric
        AngleMismatchError: If <Angle> differs from angle at one decimal
    """
    root = get_root(document)
    if root is None or root.tag != ROOT_TAG:
        raise XmlParseError(f"Root element must be <{ROOT_TAG}>")

    unit = text_of(root, "Unit")
    if unit != UNIT_MM:
        raise ValidationError(f"Existing XML must have <Unit>{UNIT_MM}</Unit>, found {unit!r}")

    existing = text_of(root, "Angle")
    try:
        existing_angle = format_angle(existing)
    except (TypeError, ValueError):
        raise ValidationError(f"Existing XML has no numeric <Angle>, found {existing!r}") from None

    if existing_angle != format_angle(angle):
        raise AngleMismatchError(
            f"Angle mismatch: file={existing_angle} vs provided={format_angle(angle)}"
        )
