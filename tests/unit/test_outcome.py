"""Tests for validation outcome types."""

from sanitizr import FieldError, Outcome, StructureOutcome, ValidationStatus


class TestOutcome:
    """Test single-subject outcomes."""

    def test_ok(self):
        outcome = Outcome.ok()
        assert outcome
        assert outcome.is_valid
        assert outcome.error is None

    def test_fail(self):
        outcome = Outcome.fail("Length must be between 5 and 10, but was 2")
        assert not outcome
        assert outcome.error == "Length must be between 5 and 10, but was 2"


class TestStructureOutcome:
    """Test aggregated structure outcomes."""

    def test_initial_status(self):
        result = StructureOutcome()
        assert result.status == ValidationStatus.PASS
        assert result.exit_code == 0
        assert result.messages == []

    def test_add_error_updates_status(self):
        result = StructureOutcome()
        result.add_error("username", "too short")
        result.add_error("age", "too young")

        assert result.status == ValidationStatus.FAIL
        assert result.exit_code == 1
        assert result.errors[0] == FieldError("username", "too short")
        assert result.messages == ["username: too short", "age: too young"]
