"""
Module: record

Purpose:
    Provides the LabRecord dataclass - the input to the layout engine.
    Nine free-text fields collected by the web form. Every field is an
    opaque string and an empty string is always valid.

Key Functions:
    - LabRecord.from_dict(data): Build a record from a form payload
    - LabRecord.to_dict(): Serialize back to the form payload keys

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.assembler: Document assembly
    - builder.controller: Pipeline entry point
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


# Form payload key -> dataclass field name
_PAYLOAD_KEYS: dict[str, str] = {
    "studentName": "student_name",
    "rollNumber": "roll_number",
    "subject": "subject",
    "collegeName": "college_name",
    "aim": "aim",
    "theory": "theory",
    "code": "code",
    "output": "output",
    "conclusion": "conclusion",
}

RECORD_FIELDS: tuple[str, ...] = tuple(_PAYLOAD_KEYS.values())


@dataclass(frozen=True, slots=True)
class LabRecord:
    """
    One lab record submission (immutable).

    Missing or null fields are stored as empty strings so renderers
    never have to special-case absence.

    Attributes:
        student_name: Student's full name
        roll_number: Roll / registration number
        subject: Subject or course name
        college_name: Institution name for the title page
        aim: Aim of the experiment
        theory: Theory / apparatus text
        code: Program listing or procedure (rendered monospace)
        output: Output / observations (rendered monospace)
        conclusion: Conclusion text

    Example:
        >>> record = LabRecord.from_dict({"studentName": "A", "subject": "B"})
        >>> record.student_name, record.aim
        ('A', '')
    """

    student_name: str = ""
    roll_number: str = ""
    subject: str = ""
    college_name: str = ""
    aim: str = ""
    theory: str = ""
    code: str = ""
    output: str = ""
    conclusion: str = ""

    def __post_init__(self) -> None:
        """Coerce every field to a string (None -> "")."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                object.__setattr__(self, f.name, "")
            elif not isinstance(value, str):
                object.__setattr__(self, f.name, str(value))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LabRecord:
        """
        Build a record from a form payload.

        Accepts both the camelCase keys sent by the web form and the
        snake_case field names. Unknown keys are ignored.

        Args:
            data: Mapping of field name to value

        Returns:
            LabRecord with absent fields set to ""
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _PAYLOAD_KEYS.get(key, key)
            if name in RECORD_FIELDS:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the camelCase form payload."""
        return {key: getattr(self, name) for key, name in _PAYLOAD_KEYS.items()}

    @property
    def is_blank(self) -> bool:
        """True when every field is empty."""
        return not any(getattr(self, name) for name in RECORD_FIELDS)
