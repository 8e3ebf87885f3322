"""Validation of numeric values."""

import math

from ..outcome import Outcome
from ..rules import RuleSet, format_number
from .base import SubjectKind, SubjectValidator


def widen(value) -> float:
    """Convert any real number to float.

    Integers too large to fit saturate to infinity; signaling NaN decimals
    become NaN.
    """
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    except ValueError:
        return math.nan


class NumberValidator(SubjectValidator):
    """Checks a numeric value against the inclusive numeric range.

    Lengths and patterns never apply to numbers. NaN lies outside every range.
    """

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.NUMBER

    def validate(self, subject, rules: RuleSet) -> Outcome:
        bound = rules.numeric_range
        if bound is None:
            return Outcome.ok()

        value = widen(subject)
        if not bound.contains(value):
            shown = subject if isinstance(subject, int) else value
            return Outcome.fail(
                f"Value must be between {format_number(bound.min)} and {format_number(bound.max)}, "
                f"but was {format_number(shown)}"
            )
        return Outcome.ok()
