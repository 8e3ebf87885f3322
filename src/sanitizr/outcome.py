"""Validation outcomes for single values and whole structures."""

from dataclasses import dataclass, field
from enum import Enum

from .errors import StructureValidationError


class ValidationStatus(str, Enum):
    """Overall status of a validation run."""
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class Outcome:
    """Result of validating one subject against one rule set.

    Truthy on success. On failure ``error`` holds a single human-readable
    message naming the failed bound or pattern.
    """
    error: str | None = None

    @classmethod
    def ok(cls) -> "Outcome":
        return cls()

    @classmethod
    def fail(cls, message: str) -> "Outcome":
        return cls(error=message)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass(frozen=True)
class FieldError:
    """A failure of one structure field."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class StructureOutcome:
    """Aggregated result of validating every annotated field of a structure.

    Errors appear in field declaration order. An empty error list means
    the structure is valid.
    """
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def status(self) -> ValidationStatus:
        return ValidationStatus.PASS if self.is_valid else ValidationStatus.FAIL

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = pass, 1 = fail."""
        return 0 if self.is_valid else 1

    @property
    def messages(self) -> list[str]:
        """Field failures rendered as ``"<field>: <message>"``."""
        return [str(error) for error in self.errors]

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))

    def raise_for_errors(self) -> None:
        """Raise StructureValidationError if any field failed."""
        if self.errors:
            raise StructureValidationError(self.messages)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "errors": [
                {"field": error.field, "message": error.message}
                for error in self.errors
            ]
        }

    def __bool__(self) -> bool:
        return self.is_valid
