"""Output formatters for thread calculations.

to_xml() renders a ThreadType document; to_summary() and to_json() render
a calculator's per-offset results without any document around them.
"""

import json

from ..io.merge import pretty_print
from ..io.schema import Document, class_label_for
from .core import ThreadCalculator


def to_xml(document: Document) -> str:
    """Pretty-printed ThreadType document (see threadtable.io.merge.pretty_print)"""
    return pretty_print(document)


def to_json(calculator: ThreadCalculator, indent: int = 2) -> str:
    """Convert a calculator's results to a JSON string.

    Args:
        calculator: Configured ThreadCalculator
        indent: JSON indentation level (default: 2)

    Returns:
        JSON object with the thread parameters and one entry per offset
    """
    threads = []
    for values in calculator.calculate_for_offsets():
        entry = dict(values)
        entry["gender"] = values["gender"].value
        entry["class_label"] = class_label_for(values["class"])
        threads.append(entry)

    data = {
        "gender": calculator.gender.value,
        "diameter_mm": calculator.diameter,
        "pitch_mm": calculator.pitch,
        "significant_digits": calculator.significant_digits,
        "designation": calculator.thread_designation(),
        "threads": threads,
    }
    return json.dumps(data, indent=indent)


def to_summary(calculator: ThreadCalculator) -> str:
    """Convert a calculator's results to a formatted text table.

    Returns:
        Multi-line summary string (no trailing newline)
    """
    has_tap_drill = calculator.profile.has_tap_drill

    lines = [
        f"═══ {calculator.gender.value.capitalize()} Thread {calculator.thread_designation()} ═══",
        f"Diameter: {calculator.diameter:.2f} mm",
        f"Pitch:    {calculator.pitch:.2f} mm",
        "",
    ]

    header = f"{'Class':<6} {'Major':>8} {'Pitch':>8} {'Minor':>8}"
    if has_tap_drill:
        header += f" {'Tap':>8}"
    lines.append(header)

    for values in calculator.calculate_for_offsets():
        row = (
            f"{class_label_for(values['class']):<6} "
            f"{values['major_dia']:>8.2f} {values['pitch_dia']:>8.2f} {values['minor_dia']:>8.2f}"
        )
        if has_tap_drill:
            row += f" {values['tap_drill']:>8.2f}"
        lines.append(row)

    return "\n".join(lines)
