"""Exceptions raised by sanitizr.

Validation failures are never raised: they are returned as outcomes. The
exceptions below signal programming or configuration mistakes instead.
"""


class SanitizrError(Exception):
    """Base class for all sanitizr exceptions."""


class UnsupportedSubjectError(SanitizrError, TypeError):
    """Raised when a value has no validator for its type."""

    def __init__(self, subject: object):
        self.subject = subject
        super().__init__(f"Cannot validate values of type {type(subject).__name__}")


class RuleExpressionError(SanitizrError, ValueError):
    """Raised when a rule expression cannot be parsed."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid rule expression {expression!r}: {reason}")


class StructureDefinitionError(SanitizrError, TypeError):
    """Raised when a structure's field annotations cannot be compiled."""


class StructureValidationError(SanitizrError):
    """Raised by StructureOutcome.raise_for_errors() when validation failed."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("; ".join(messages))
