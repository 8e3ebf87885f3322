"""Validation of sequences, sets and mappings.

A container is checked against the same RuleSet twice over: its element
count against the length bound, then every element (and every mapping key)
recursively. Element checks are fail-fast, so only the first offending
element is reported.

A container that (directly or indirectly) contains itself is checked once:
re-entering a container already being validated on this thread passes,
since the enclosing check covers its count and elements.
"""

import threading
from collections.abc import Collection, Mapping
from contextlib import contextmanager

from ..outcome import Outcome
from ..rules import RuleSet
from .base import SubjectKind, SubjectValidator, validate

_visiting = threading.local()


@contextmanager
def _enter(container: Collection):
    """Yield False if ``container`` is already being validated, else True."""
    active = getattr(_visiting, "ids", None)
    if active is None:
        active = _visiting.ids = set()
    key = id(container)
    if key in active:
        yield False
        return
    active.add(key)
    try:
        yield True
    finally:
        active.discard(key)


def _check_count(noun: str, container: Collection, rules: RuleSet) -> Outcome:
    if rules.length is not None:
        count = len(container)
        if not rules.length.contains(count):
            return Outcome.fail(
                f"{noun} length must be between {rules.length.min} and {rules.length.max}, "
                f"but was {count}"
            )
    return Outcome.ok()


class SequenceValidator(SubjectValidator):
    """Lists, tuples, deques and other non-string sequences."""

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.SEQUENCE

    def validate(self, subject: Collection, rules: RuleSet) -> Outcome:
        with _enter(subject) as first_visit:
            if not first_visit:
                return Outcome.ok()

            outcome = _check_count("Collection", subject, rules)
            if not outcome:
                return outcome

            for index, item in enumerate(subject):
                item_outcome = validate(item, rules)
                if not item_outcome:
                    return Outcome.fail(f"Invalid item at index {index}: {item_outcome.error}")

        return Outcome.ok()


class SetValidator(SequenceValidator):
    """Sets and frozensets; indexes follow iteration order."""

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.SET


class MappingValidator(SubjectValidator):
    """Mappings: each key is checked before its value."""

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.MAPPING

    def validate(self, subject: Mapping, rules: RuleSet) -> Outcome:
        with _enter(subject) as first_visit:
            if not first_visit:
                return Outcome.ok()

            outcome = _check_count("Mapping", subject, rules)
            if not outcome:
                return outcome

            for key, value in subject.items():
                key_outcome = validate(key, rules)
                if not key_outcome:
                    return Outcome.fail(f"Invalid key {key!r}: {key_outcome.error}")
                value_outcome = validate(value, rules)
                if not value_outcome:
                    return Outcome.fail(f"Invalid value for key {key!r}: {value_outcome.error}")

        return Outcome.ok()
