"""Subject classification and validator dispatch.

Every supported value is tagged with an explicit SubjectKind, and a registry
maps each kind to the validator that interprets a RuleSet against it.
Mappings are tagged before sequences and sets so they never take the generic
collection path.
"""

import logging
import numbers
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum

from ..errors import UnsupportedSubjectError
from ..outcome import Outcome
from ..rules import RuleSet

logger = logging.getLogger(__name__)

# Set on classes compiled by @struct_validator
FIELDS_ATTR = "__sanitizr_fields__"

STRING_TYPES = (str, bytes, bytearray)


class SubjectKind(str, Enum):
    """Category of a value being validated."""
    STRING = "string"
    NUMBER = "number"
    SEQUENCE = "sequence"
    SET = "set"
    MAPPING = "mapping"
    STRUCTURE = "structure"


def classify(subject: object) -> SubjectKind:
    """Tag a subject with its kind.

    Raises:
        UnsupportedSubjectError: For None, bool and any other untagged type
    """
    if hasattr(type(subject), FIELDS_ATTR):
        return SubjectKind.STRUCTURE
    if isinstance(subject, STRING_TYPES):
        return SubjectKind.STRING
    if isinstance(subject, bool):
        raise UnsupportedSubjectError(subject)
    if isinstance(subject, (numbers.Real, Decimal)):
        return SubjectKind.NUMBER
    if isinstance(subject, Mapping):
        return SubjectKind.MAPPING
    if isinstance(subject, Set):
        return SubjectKind.SET
    if isinstance(subject, Sequence):
        return SubjectKind.SEQUENCE
    raise UnsupportedSubjectError(subject)


class SubjectValidator(ABC):
    """Base class for per-kind validators."""

    @property
    @abstractmethod
    def kind(self) -> SubjectKind:
        """Kind of subject this validator handles."""
        pass

    @abstractmethod
    def validate(self, subject, rules: RuleSet) -> Outcome:
        """Check ``subject`` against ``rules``.

        Failures are returned, never raised.
        """
        pass


class ValidatorRegistry:
    """Maps subject kinds to validators."""

    def __init__(self):
        self.validators: dict[SubjectKind, SubjectValidator] = {}

    def add_validator(self, validator: SubjectValidator) -> None:
        """Register a validator, replacing any previous one for its kind."""
        self.validators[validator.kind] = validator

    def get(self, kind: SubjectKind) -> SubjectValidator:
        try:
            return self.validators[kind]
        except KeyError:
            raise LookupError(f"No validator registered for {kind.value} subjects") from None

    def validate(self, subject, rules: RuleSet) -> Outcome:
        return self.get(classify(subject)).validate(subject, rules)

    def create_default_validators(self) -> None:
        """Register the built-in validators for every subject kind."""
        from ..structures import StructureValidator
        from .collection import MappingValidator, SequenceValidator, SetValidator
        from .number import NumberValidator
        from .string import StringValidator

        self.add_validator(StringValidator())
        self.add_validator(NumberValidator())
        self.add_validator(SequenceValidator())
        self.add_validator(SetValidator())
        self.add_validator(MappingValidator())
        self.add_validator(StructureValidator())


_registry: ValidatorRegistry | None = None


def get_registry() -> ValidatorRegistry:
    """Return the shared registry, building it on first use."""
    global _registry
    if _registry is None:
        registry = ValidatorRegistry()
        registry.create_default_validators()
        logger.debug(f"Registered validators: {', '.join(kind.value for kind in registry.validators)}")
        _registry = registry
    return _registry


def validate(subject, rules: RuleSet) -> Outcome:
    """Validate any supported value against a rule set.

    Args:
        subject: String, number, sequence, set, mapping or decorated structure
        rules: Constraints to apply

    Returns:
        Outcome that is truthy on success and carries a message on failure

    Raises:
        UnsupportedSubjectError: If the value's type cannot be validated
    """
    return get_registry().validate(subject, rules)
