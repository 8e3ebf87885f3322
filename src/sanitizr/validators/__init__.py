"""Per-kind validators and the dispatch that selects between them."""

from .base import (
    SubjectKind,
    SubjectValidator,
    ValidatorRegistry,
    classify,
    get_registry,
    validate,
)
from .collection import MappingValidator, SequenceValidator, SetValidator
from .number import NumberValidator
from .string import StringValidator

__all__ = [
    "SubjectKind",
    "SubjectValidator",
    "ValidatorRegistry",
    "classify",
    "get_registry",
    "validate",
    "StringValidator",
    "NumberValidator",
    "SequenceValidator",
    "SetValidator",
    "MappingValidator",
]
