"""
Unit Tests for student id validation
"""

import pytest

from c_quiz.services.identity import (
    is_valid_student_id,
    normalize_student_id,
    validate_student_id,
)


class TestValidateStudentId:

    def test_validate_when_lowercase_n_then_returned(self):
        assert validate_student_id("n200094") == "n200094"

    def test_validate_when_uppercase_n_then_accepted(self):
        assert validate_student_id("N200094") == "N200094"

    def test_validate_when_surrounding_spaces_then_stripped(self):
        assert validate_student_id("  n200094 ") == "n200094"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_validate_when_empty_then_asks_for_id(self, value):
        with pytest.raises(ValueError, match="Please enter a Student ID"):
            validate_student_id(value)

    @pytest.mark.parametrize("value", ["200094", "n20009", "n2000945", "x200094", "n20009a"])
    def test_validate_when_bad_format_then_format_message(self, value):
        with pytest.raises(ValueError, match="Invalid format"):
            validate_student_id(value)


class TestHelpers:

    def test_is_valid_when_checked_then_matches_validate(self):
        assert is_valid_student_id("n123456") is True
        assert is_valid_student_id("n12345") is False
        assert is_valid_student_id("") is False

    def test_normalize_when_uppercase_then_same_key(self):
        assert normalize_student_id(" N200094") == normalize_student_id("n200094")
