"""sanitizr - Declarative validation for values, collections and structures.

Rule sets (length, numeric range, regex pattern) are built once and applied
uniformly to strings, numbers, nested collections and annotated structure
fields.

Basic usage:
    from sanitizr import RuleSet, validate

    rules = RuleSet.new().with_length(5, 10)
    outcome = validate("hello", rules)
    if not outcome:
        print(outcome.error)
"""

__version__ = "0.1.0"
__author__ = "sanitizr contributors"
__description__ = "Declarative validation for values, collections and structures"

from sanitizr.config import SanitizrConfig, configure, load_config
from sanitizr.errors import (
    RuleExpressionError,
    SanitizrError,
    StructureDefinitionError,
    StructureValidationError,
    UnsupportedSubjectError,
)
from sanitizr.expressions import parse_rule_expression, rule
from sanitizr.outcome import FieldError, Outcome, StructureOutcome, ValidationStatus
from sanitizr.rules import LengthBound, NumericBound, RuleSet
from sanitizr.structures import (
    FieldRule,
    collect_field_rules,
    struct_validator,
    validate_fields,
    validate_structure,
    validated_field,
)
from sanitizr.validators import SubjectKind, classify, validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "RuleSet",
    "LengthBound",
    "NumericBound",
    "Outcome",
    "FieldError",
    "StructureOutcome",
    "ValidationStatus",
    "SubjectKind",
    "classify",
    "validate",
    "FieldRule",
    "collect_field_rules",
    "struct_validator",
    "validate_fields",
    "validate_structure",
    "validated_field",
    "parse_rule_expression",
    "rule",
    "SanitizrConfig",
    "configure",
    "load_config",
    "SanitizrError",
    "UnsupportedSubjectError",
    "RuleExpressionError",
    "StructureDefinitionError",
    "StructureValidationError",
]
