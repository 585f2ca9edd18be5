"""
Merge computed thread values into a ThreadType document.

Repeatable elements are addressed by natural keys instead of position:

- ThreadSize by its Size text
- Thread by its (Gender, Class) pair

Every lookup is find-or-create, and every computed field is overwritten in
place, so merging identical inputs twice yields identical documents.
merge() works on a copy and returns it; the caller's tree is untouched.
The source file's XML declaration, if any, is carried to the result.
"""

import copy
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Callable, Mapping, Optional, Tuple

from .loaders import ThreadDocument, ThreadOptions
from .schema import (
    Document,
    THREAD_SIZE_TAG,
    SIZE_TAG,
    DESIGNATION_TAG,
    THREAD_TAG,
    class_label_for,
    format_mm,
    get_root,
    text_of,
)

if TYPE_CHECKING:
    from ..calculator.core import ThreadCalculator

INDENT = "  "


def find_child(
    parent: ET.Element,
    tag: str,
    key: Optional[Mapping[str, str]] = None
) -> Optional[ET.Element]:
    """First child with this tag whose key fields all match, or None"""
    for child in parent.findall(tag):
        if key is None or all(text_of(child, k) == v for k, v in key.items()):
            return child
    return None


def upsert_child(
    parent: ET.Element,
    tag: str,
    key: Optional[Mapping[str, str]] = None
) -> Tuple[ET.Element, bool]:
    """
    Find a keyed child or append a new, empty one.

    Returns:
        Tuple of (element, created)
    """
    child = find_child(parent, tag, key)
    if child is not None:
        return child, False
    return ET.SubElement(parent, tag), True


def set_fields(parent: ET.Element, fields: Mapping[str, str]) -> None:
    """Overwrite (or append) one text child per field, in field order"""
    for tag, text in fields.items():
        el = parent.find(tag)
        if el is None:
            el = ET.SubElement(parent, tag)
        el.text = text


def nominal_size(calculator: "ThreadCalculator") -> str:
    """Size key for a calculator: internal major at offset 0, external diameter"""
    return format_mm(round(calculator.profile.nominal_size(calculator), 2))


def merge(
    document: Document,
    calculator: "ThreadCalculator",
    angle: float,
    options: Optional[ThreadOptions] = None,
    log: Optional[Callable[[str], None]] = None
) -> ThreadDocument:
    """
    Merge a calculator's results into a copy of document.

    Args:
        document: Fresh or existing (already validated) ThreadType document
        calculator: Configured ThreadCalculator
        angle: Thread angle of the request (already checked against the document)
        options: Request options; only xml_comment is read
        log: Optional logging callback (e.g. logger.debug)

    Returns:
        New ThreadDocument with the merged ThreadSize
    """
    def _log(msg: str):
        if log:
            log(msg)

    root = copy.deepcopy(get_root(document))
    comment = options.xml_comment if options else None

    size_value = nominal_size(calculator)
    pitch_value = format_mm(calculator.pitch)
    designation_text = f"{size_value}x{pitch_value}"

    size_node = find_child(root, THREAD_SIZE_TAG, {SIZE_TAG: size_value})
    if size_node is None:
        size_node = ET.SubElement(root, THREAD_SIZE_TAG)
        # Comments mark first creation only; a reused ThreadSize never gets one
        if comment is not None:
            size_node.append(ET.Comment(comment))
        ET.SubElement(size_node, SIZE_TAG).text = size_value
        _log(f"Created ThreadSize {size_value}")
    else:
        _log(f"Reusing ThreadSize {size_value}")

    designation_node, _ = upsert_child(size_node, DESIGNATION_TAG)
    set_fields(designation_node, {
        "ThreadDesignation": designation_text,
        "CTD": designation_text,
        "Pitch": pitch_value,
    })

    profile = calculator.profile
    gender_text = profile.gender.value
    for offset in calculator.offsets:
        values = calculator.calculate_values_with_offset(offset)
        class_label = class_label_for(offset)

        thread_node, created = upsert_child(
            designation_node, THREAD_TAG, {"Gender": gender_text, "Class": class_label}
        )
        fields = {
            "Gender": gender_text,
            "Class": class_label,
            "MajorDia": format_mm(values["major_dia"]),
            "PitchDia": format_mm(values["pitch_dia"]),
            "MinorDia": format_mm(values["minor_dia"]),
        }
        if profile.has_tap_drill:
            fields["TapDrill"] = format_mm(values["tap_drill"])
        set_fields(thread_node, fields)
        _log(f"{'Added' if created else 'Updated'} {gender_text} thread {class_label} in {designation_text}")

    return ThreadDocument(root, declaration=declaration_of(document))


def declaration_of(document: Document) -> Optional[str]:
    """XML declaration carried by a parsed document, or None"""
    if isinstance(document, ThreadDocument):
        return document.declaration
    return None


def pretty_print(document: Document) -> str:
    """
    Serialize a document with two-space indentation.

    Leaf text stays on the element's line and the result ends with exactly
    one newline. An XML declaration is written only when the document was
    parsed from a file that had one.
    """
    root = copy.deepcopy(get_root(document))
    ET.indent(root, space=INDENT)
    root.tail = None
    body = ET.tostring(root, encoding="unicode") + "\n"

    declaration = declaration_of(document)
    if declaration is not None:
        return f"{declaration}\n{body}"
    return body
