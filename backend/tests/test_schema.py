"""Validation rules for students and their academic records."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from student_records.schema import (
    LEVELS,
    STATUSES,
    ValidationError,
    require_valid_academic_record,
    require_valid_student,
    validate_academic_record,
    validate_student,
)


class ValidateStudentTestCase(unittest.TestCase):
    def test_strips_and_keeps_required_fields(self) -> None:
        cleaned, errors = validate_student(
            {"name": "  Ada ", "huid": "123", "email": "ada@example.edu", "extra": "x"}
        )

        self.assertEqual({}, errors)
        self.assertEqual(
            {"name": "Ada", "huid": "123", "email": "ada@example.edu"}, cleaned
        )

    def test_reports_each_missing_field(self) -> None:
        _, errors = validate_student({"name": "", "huid": "   "})

        self.assertEqual({"name", "huid", "email"}, set(errors))

    def test_none_payload(self) -> None:
        _, errors = validate_student(None)

        self.assertIn("_global", errors)

    def test_nested_academic_errors_are_indexed(self) -> None:
        _, errors = validate_student(
            {
                "name": "Ada",
                "huid": "1",
                "email": "ada@example.edu",
                "academics": [
                    {"level": "Graduate", "program": "Math", "status": "Applied"},
                    {"level": "Bootcamp", "program": "Math", "status": "Applied"},
                ],
            }
        )

        self.assertEqual(["academics[1].level"], list(errors))

    def test_academics_must_be_a_list(self) -> None:
        _, errors = validate_student(
            {"name": "Ada", "huid": "1", "email": "a@b.com", "academics": "Math"}
        )

        self.assertIn("academics", errors)

    def test_require_valid_student_raises(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            require_valid_student({"name": "", "huid": "X", "email": "a@b.com"})

        self.assertEqual(["name"], list(ctx.exception.errors))


class ValidateAcademicRecordTestCase(unittest.TestCase):
    def test_accepts_every_enumerated_value(self) -> None:
        for level in LEVELS:
            for status in STATUSES:
                with self.subTest(level=level, status=status):
                    cleaned, errors = validate_academic_record(
                        {"level": level, "program": "History", "status": status}
                    )
                    self.assertEqual({}, errors)
                    self.assertEqual(level, cleaned["level"])
                    self.assertEqual(status, cleaned["status"])

    def test_rejects_unknown_level(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            require_valid_academic_record(
                {"level": "Bootcamp", "program": "Web", "status": "Applied"}
            )

        self.assertIn("level", ctx.exception.errors)

    def test_does_not_coerce_case(self) -> None:
        _, errors = validate_academic_record(
            {"level": "graduate", "program": "Web", "status": "in progress"}
        )

        self.assertEqual({"level", "status"}, set(errors))

    def test_requires_program(self) -> None:
        _, errors = validate_academic_record(
            {"level": "Graduate", "program": " ", "status": "Applied"}
        )

        self.assertEqual(["program"], list(errors))

    def test_rejects_non_mapping(self) -> None:
        _, errors = validate_academic_record("Graduate")

        self.assertIn("_global", errors)


if __name__ == "__main__":
    unittest.main()
