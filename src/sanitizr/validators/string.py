"""Validation of string-like values (str, bytes, bytearray)."""

import logging
import re

from ..outcome import Outcome
from ..patterns import compile_pattern
from ..rules import RuleSet
from .base import SubjectKind, SubjectValidator

logger = logging.getLogger(__name__)


class StringValidator(SubjectValidator):
    """Checks length, then pattern; stops at the first failure.

    Length counts characters for str and bytes for bytes/bytearray. The
    pattern uses search semantics, so it is unanchored unless it says
    otherwise. Numeric ranges never apply to strings.
    """

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.STRING

    def validate(self, subject: str | bytes | bytearray, rules: RuleSet) -> Outcome:
        if rules.length is not None:
            length = len(subject)
            if not rules.length.contains(length):
                return Outcome.fail(
                    f"Length must be between {rules.length.min} and {rules.length.max}, "
                    f"but was {length}"
                )

        if rules.pattern is not None:
            binary = not isinstance(subject, str)
            try:
                regex = compile_pattern(rules.pattern, binary=binary)
            except (re.error, OverflowError, UnicodeEncodeError) as e:
                logger.debug(f"Pattern {rules.pattern!r} failed to compile: {e}")
                return Outcome.fail(f"Invalid regex pattern: {e}")
            if regex.search(subject) is None:
                return Outcome.fail(f"Value does not match the pattern: {rules.pattern}")

        return Outcome.ok()
