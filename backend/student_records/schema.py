"""Shape and validation rules for student documents."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

LEVELS: Tuple[str, ...] = ("Certificate", "Undergraduate", "Graduate")
STATUSES: Tuple[str, ...] = ("Applied", "In Progress", "Awarded", "Withdrawn")

STUDENT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "Name is required."),
    ("huid", "HUID is required."),
    ("email", "Email is required."),
)


class ValidationError(ValueError):
    """Raised when a student or academic record fails validation."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors: Dict[str, str] = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(summary or "Invalid student.")


def clean_string(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def validate_academic_record(
    payload: Mapping[str, Any] | None,
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Validate one academic program entry.

    ``level`` and ``status`` must match an allowed value exactly; nothing is
    case-folded or guessed.
    """

    if not isinstance(payload, Mapping):
        return {}, {"_global": "Academic record must be an object."}

    errors: Dict[str, str] = {}
    cleaned: Dict[str, str] = {}

    level = clean_string(payload.get("level"))
    if not level:
        errors["level"] = "Level is required."
    elif level not in LEVELS:
        errors["level"] = "Level must be one of: " + ", ".join(LEVELS) + "."
    else:
        cleaned["level"] = level

    program = clean_string(payload.get("program"))
    if not program:
        errors["program"] = "Program is required."
    else:
        cleaned["program"] = program

    status = clean_string(payload.get("status"))
    if not status:
        errors["status"] = "Status is required."
    elif status not in STATUSES:
        errors["status"] = "Status must be one of: " + ", ".join(STATUSES) + "."
    else:
        cleaned["status"] = status

    return cleaned, errors


def validate_student(
    payload: Mapping[str, Any] | None,
) -> Tuple[Dict[str, Any], Dict[str, str]]:
    if payload is None:
        return {}, {"_global": "Student data is required."}

    errors: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    for field, message in STUDENT_FIELDS:
        value = clean_string(payload.get(field))
        if value == "":
            errors[field] = message
        else:
            cleaned[field] = value

    if "academics" in payload:
        academics = payload.get("academics")
        if academics in (None, ""):
            cleaned["academics"] = []
        elif isinstance(academics, list):
            records: List[Dict[str, str]] = []
            for index, entry in enumerate(academics):
                record, record_errors = validate_academic_record(entry)
                for key, message in record_errors.items():
                    errors[f"academics[{index}].{key}"] = message
                if not record_errors:
                    records.append(record)
            cleaned["academics"] = records
        else:
            errors["academics"] = "Academics must be a list of program entries."

    return cleaned, errors


def require_valid_student(payload: Mapping[str, Any] | None) -> Dict[str, Any]:
    cleaned, errors = validate_student(payload)
    if errors:
        raise ValidationError(errors)
    return cleaned


def require_valid_academic_record(payload: Mapping[str, Any] | None) -> Dict[str, str]:
    cleaned, errors = validate_academic_record(payload)
    if errors:
        raise ValidationError(errors)
    return cleaned


__all__ = [
    "LEVELS",
    "STATUSES",
    "ValidationError",
    "clean_string",
    "validate_academic_record",
    "validate_student",
    "require_valid_student",
    "require_valid_academic_record",
]
