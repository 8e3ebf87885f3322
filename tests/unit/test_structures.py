"""Tests for structure validation and field rule compilation."""

from dataclasses import dataclass, field
from typing import Annotated, ClassVar

import pytest

from sanitizr import (
    FieldRule,
    Outcome,
    RuleExpressionError,
    RuleSet,
    StructureDefinitionError,
    StructureValidationError,
    collect_field_rules,
    rule,
    struct_validator,
    validate,
    validate_fields,
    validate_structure,
    validated_field,
)


@struct_validator
@dataclass
class User:
    username: Annotated[str, RuleSet.new().with_length(5, 10)]
    age: Annotated[int, RuleSet.new().with_numeric_range(18, 120)]
    nickname: str = ""


@struct_validator
@dataclass
class Account:
    email: str = validated_field(r"pattern('^[^@]+@[^@]+$')")
    tags: list = validated_field(RuleSet.new().with_length(0, 2), default_factory=list)
    notes: str = field(default="", metadata={"owner": "ops"})


@struct_validator
@dataclass
class Team:
    name: Annotated[str, rule("length(1, 20)")]
    members: Annotated[list, rule("length(1, 3)")]


@dataclass
class Base:
    id: Annotated[str, rule("length(3, 3)")]


@struct_validator
@dataclass
class Derived(Base):
    label: Annotated[str, rule("length(1, 5)")]


class Point:
    """Plain annotated class, not decorated."""
    x: Annotated[float, rule("range(-1, 1)")]
    y: Annotated[float, rule("range(-1, 1)")]
    scale: ClassVar[int] = 1

    def __init__(self, x, y):
        self.x = x
        self.y = y


class TestStructureValidation:
    """Test fail-accumulate validation of structure fields."""

    def test_valid_structure(self):
        outcome = User(username="James", age=25).validate()
        assert outcome
        assert outcome.is_valid
        assert outcome.errors == []

    def test_all_failing_fields_reported_in_order(self):
        outcome = User(username="Jo", age=15).validate()
        assert not outcome
        assert outcome.messages == [
            "username: Length must be between 5 and 10, but was 2",
            "age: Value must be between 18 and 120, but was 15",
        ]

    def test_later_field_still_checked(self):
        outcome = User(username="James", age=200).validate()
        assert [error.field for error in outcome.errors] == ["age"]

    def test_unannotated_field_ignored(self):
        outcome = User(username="James", age=25, nickname="x" * 100).validate()
        assert outcome

    def test_dataclass_metadata_rules(self):
        assert Account(email="a@b.c").validate()

        outcome = Account(email="nope", tags=["a", "b", "c"]).validate()
        assert [error.field for error in outcome.errors] == ["email", "tags"]
        assert outcome.errors[1].message == "Collection length must be between 0 and 2, but was 3"

    def test_base_class_fields_first(self):
        outcome = Derived(id="toolong", label="waytoolong").validate()
        assert [error.field for error in outcome.errors] == ["id", "label"]

    def test_plain_class_via_validate_structure(self):
        assert validate_structure(Point(0.5, -0.5))

        outcome = validate_structure(Point(2, 0))
        assert outcome.messages == ["x: Value must be between -1 and 1, but was 2"]


class TestNestedStructures:
    """Test structures used as subjects of other validations."""

    def test_structure_is_validatable(self, no_rules):
        assert validate(User(username="James", age=25), no_rules)

    def test_empty_rules_pass_invalid_structure(self, no_rules):
        assert validate(User(username="Jo", age=15), no_rules)
        assert validate([User(username="Jo", age=15)], no_rules)

    def test_non_empty_rules_check_structure_fields(self):
        outcome = validate(User(username="Jo", age=25), RuleSet.new().with_length(0, 100))
        assert outcome.error == "username: Length must be between 5 and 10, but was 2"

    def test_list_of_structures(self):
        team = Team(name="core", members=[User("James", 25), User("Jo", 15)])
        outcome = team.validate()
        assert outcome.messages == [
            "members: Invalid item at index 1: "
            "username: Length must be between 5 and 10, but was 2; "
            "age: Value must be between 18 and 120, but was 15"
        ]

    def test_container_length_still_applies(self):
        team = Team(name="core", members=[])
        assert team.validate().messages == [
            "members: Collection length must be between 1 and 3, but was 0"
        ]


class TestStructureOutcome:
    """Test the aggregated outcome object."""

    def test_to_dict(self):
        result = User(username="Jo", age=25).validate().to_dict()
        assert result == {
            "status": "fail",
            "exit_code": 1,
            "errors": [
                {"field": "username", "message": "Length must be between 5 and 10, but was 2"}
            ]
        }

    def test_raise_for_errors(self):
        User(username="James", age=25).validate().raise_for_errors()

        with pytest.raises(StructureValidationError) as exc_info:
            User(username="Jo", age=15).validate().raise_for_errors()
        assert len(exc_info.value.messages) == 2
        assert str(exc_info.value).startswith("username: ")


class TestFieldCollection:
    """Test compiling field rules from class definitions."""

    def test_collect_field_rules(self):
        field_rules = collect_field_rules(User)
        assert field_rules == [
            FieldRule("username", RuleSet.new().with_length(5, 10)),
            FieldRule("age", RuleSet.new().with_numeric_range(18, 120)),
        ]

    def test_class_var_ignored(self):
        assert [f.name for f in collect_field_rules(Point)] == ["x", "y"]

    def test_not_a_class(self):
        with pytest.raises(StructureDefinitionError):
            collect_field_rules(User(username="James", age=25))

    def test_wrong_metadata_type(self):
        with pytest.raises(StructureDefinitionError):
            @struct_validator
            @dataclass
            class Broken:
                value: int = field(default=0, metadata={"validate": 42})

    def test_bad_expression_fails_at_definition(self):
        with pytest.raises(RuleExpressionError):
            @struct_validator
            @dataclass
            class Broken:
                value: str = validated_field("length(5)")

    def test_dataclass_applied_after_decorator(self):
        with pytest.raises(StructureDefinitionError, match="apply @dataclass before @struct_validator"):
            @dataclass
            @struct_validator
            class Reversed:
                value: str = validated_field("length(1, 2)")

    def test_existing_validate_method(self):
        with pytest.raises(StructureDefinitionError):
            @struct_validator
            class Broken:
                value: Annotated[str, rule("length(1, 2)")]

                def validate(self):
                    return True

    def test_decorator_requires_class(self):
        with pytest.raises(StructureDefinitionError):
            struct_validator(lambda: None)


class TestValidateFields:
    """Test the fail-accumulate loop over arbitrary field sources."""

    def test_mapping_source(self):
        field_rules = collect_field_rules(User)
        outcome = validate_fields(field_rules, {"username": "Jo", "age": 15}.get)
        assert [error.field for error in outcome.errors] == ["username", "age"]

    def test_custom_check(self):
        field_rules = collect_field_rules(User)

        def check(value, rules):
            return Outcome.fail("Field is missing") if value is None else validate(value, rules)

        outcome = validate_fields(field_rules, {"age": 30}.get, check=check)
        assert outcome.messages == ["username: Field is missing"]
