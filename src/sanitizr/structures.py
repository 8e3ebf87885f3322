"""Structure validation: per-field rule sets aggregated into one outcome.

Fields declare their rules either through ``typing.Annotated``::

    @struct_validator
    @dataclass
    class User:
        username: Annotated[str, RuleSet.new().with_length(5, 10)]
        age: Annotated[int, rule("range(18, 120)")]

or through dataclass field metadata under the ``"validate"`` key, which also
accepts a rule expression string::

    @struct_validator
    @dataclass
    class User:
        username: str = validated_field("length(5, 10)")

The field list is compiled once per class. Validation then runs every
field, even after an earlier failure, and reports failures in declaration
order.
"""

import dataclasses
import logging
import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Annotated, Any

from .errors import StructureDefinitionError
from .expressions import parse_rule_expression
from .outcome import Outcome, StructureOutcome
from .rules import RuleSet
from .validators.base import FIELDS_ATTR, SubjectKind, SubjectValidator, validate

logger = logging.getLogger(__name__)

FIELD_METADATA_KEY = "validate"


@dataclass(frozen=True)
class FieldRule:
    """A field name paired with the rule set that governs it."""
    name: str
    rules: RuleSet

    def __str__(self) -> str:
        return f"{self.name}: {self.rules}"


def _coerce_rules(owner: type, name: str, declared) -> RuleSet:
    if isinstance(declared, RuleSet):
        return declared
    if isinstance(declared, str):
        return parse_rule_expression(declared)
    raise StructureDefinitionError(
        f"{owner.__name__}.{name}: '{FIELD_METADATA_KEY}' must be a RuleSet or rule expression, "
        f"got {type(declared).__name__}"
    )


def _annotated_rules(hint) -> RuleSet | None:
    if typing.get_origin(hint) is not Annotated:
        return None
    for extra in hint.__metadata__:
        if isinstance(extra, RuleSet):
            return extra
    return None


def collect_field_rules(cls: type) -> list[FieldRule]:
    """Walk a class's annotated fields and collect their rule sets.

    Fields are returned in declaration order, base classes first. When a
    field declares rules both ways, the Annotated form wins.

    Raises:
        StructureDefinitionError: If ``cls`` is not a class, its annotations
            cannot be resolved, or a field declares rules of the wrong type
        RuleExpressionError: If a rule expression is malformed
    """
    if not isinstance(cls, type):
        raise StructureDefinitionError(f"Expected a class, got {type(cls).__name__}")

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise StructureDefinitionError(f"Cannot resolve annotations of {cls.__name__}: {e}") from e

    metadata = {}
    if dataclasses.is_dataclass(cls):
        metadata = {f.name: f.metadata for f in dataclasses.fields(cls)}
    else:
        pending = [name for name, value in vars(cls).items() if isinstance(value, dataclasses.Field)]
        if pending:
            raise StructureDefinitionError(
                f"{cls.__name__} declares dataclass fields ({', '.join(pending)}) but is not "
                f"a dataclass yet; apply @dataclass before @struct_validator"
            )

    field_rules = []
    for name, hint in hints.items():
        rules = _annotated_rules(hint)
        if rules is None and FIELD_METADATA_KEY in metadata.get(name, {}):
            rules = _coerce_rules(cls, name, metadata[name][FIELD_METADATA_KEY])
        if rules is not None:
            field_rules.append(FieldRule(name, rules))

    logger.debug(f"Compiled {len(field_rules)} validated field(s) for {cls.__name__}")
    return field_rules


def get_field_rules(cls: type) -> tuple[FieldRule, ...]:
    """Return the field rules of ``cls``.

    Classes decorated with :func:`struct_validator` use the list compiled at
    decoration time; anything else, subclasses included, is walked on each call.
    """
    compiled = cls.__dict__.get(FIELDS_ATTR)
    if compiled is not None:
        return compiled
    return tuple(collect_field_rules(cls))


def validate_fields(
    field_rules: Iterable[FieldRule],
    get_value: Callable[[str], Any],
    check: Callable[[Any, RuleSet], Outcome] = validate,
) -> StructureOutcome:
    """Validate each field and accumulate failures without stopping early.

    Args:
        field_rules: Fields to validate, in reporting order
        get_value: Returns the value of a field given its name
        check: Validates one value against its rule set

    Returns:
        StructureOutcome listing every failed field
    """
    outcome = StructureOutcome()
    for field_rule in field_rules:
        result = check(get_value(field_rule.name), field_rule.rules)
        if not result:
            outcome.add_error(field_rule.name, result.error)
    return outcome


def validate_structure(obj) -> StructureOutcome:
    """Validate every annotated field of ``obj``."""
    field_rules = get_field_rules(type(obj))
    return validate_fields(field_rules, lambda name: getattr(obj, name))


def _validate_method(self) -> StructureOutcome:
    """Validate every annotated field of this structure."""
    return validate_structure(self)


def struct_validator(cls: type) -> type:
    """Class decorator that compiles field rules and adds ``validate()``.

    Decorated classes are also valid subjects for :func:`sanitizr.validate`,
    for instance as elements of a validated list.

    Raises:
        StructureDefinitionError: If the class already defines ``validate``
    """
    if not isinstance(cls, type):
        raise StructureDefinitionError(f"Expected a class, got {type(cls).__name__}")
    if "validate" in cls.__dict__:
        raise StructureDefinitionError(f"{cls.__name__} already defines validate()")

    setattr(cls, FIELDS_ATTR, tuple(collect_field_rules(cls)))
    cls.validate = _validate_method
    return cls


def validated_field(rules: RuleSet | str, **kwargs):
    """dataclasses.field() with rules stored under the ``"validate"`` metadata key."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[FIELD_METADATA_KEY] = rules
    return dataclasses.field(metadata=metadata, **kwargs)


class StructureValidator(SubjectValidator):
    """Validates a nested structure by its own field rules.

    An empty rule set passes any structure. A non-empty one is not applied
    itself; it only triggers the structure's own field rules, whose
    failures are joined into a single message.
    """

    @property
    def kind(self) -> SubjectKind:
        return SubjectKind.STRUCTURE

    def validate(self, subject, rules: RuleSet) -> Outcome:
        if rules.is_empty:
            return Outcome.ok()
        outcome = validate_structure(subject)
        if outcome:
            return Outcome.ok()
        return Outcome.fail("; ".join(outcome.messages))
