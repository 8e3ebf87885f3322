"""Rule sets: the declarative constraints applied during validation.

A RuleSet is built once through its fluent builder and is immutable afterwards,
so a single instance can be shared freely between call sites and threads.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_number(value) -> str:
    """Render a number for messages, dropping the fraction of integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class LengthBound(BaseModel):
    """Inclusive bound over a string length or a container element count."""
    min: int = Field(ge=0)
    max: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def contains(self, length: int) -> bool:
        return self.min <= length <= self.max

    def __str__(self) -> str:
        return f"length({self.min}, {self.max})"


class NumericBound(BaseModel):
    """Inclusive bound over real numbers."""
    min: float
    max: float

    model_config = ConfigDict(frozen=True)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def __str__(self) -> str:
        return f"range({format_number(self.min)}, {format_number(self.max)})"


class RuleSet(BaseModel):
    """Optional length, numeric and pattern constraints.

    With no constraint set, every subject passes. Bound consistency
    (min <= max) is left to the caller: an inverted bound is simply never
    satisfied.

    Example:
        >>> rules = RuleSet.new().with_length(5, 10).with_pattern("^[a-z]+$")
        >>> rules.describe()
        "length(5, 10).pattern('^[a-z]+$')"
    """
    length: LengthBound | None = None
    pattern: str | None = None
    numeric_range: NumericBound | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new(cls) -> "RuleSet":
        """Create a rule set with no constraints."""
        return cls()

    def with_length(self, min: int, max: int) -> "RuleSet":
        """Return a copy constrained to lengths within [min, max]."""
        return self.model_copy(update={"length": LengthBound(min=min, max=max)})

    def with_numeric_range(self, min: float, max: float) -> "RuleSet":
        """Return a copy constrained to numeric values within [min, max]."""
        return self.model_copy(update={"numeric_range": NumericBound(min=min, max=max)})

    def with_pattern(self, source: str) -> "RuleSet":
        """Return a copy that requires a regex match.

        The pattern is compiled at validation time; an invalid pattern is
        reported as a validation failure, not here.
        """
        return self.model_copy(update={"pattern": source})

    @property
    def is_empty(self) -> bool:
        return self.length is None and self.pattern is None and self.numeric_range is None

    def describe(self) -> str:
        """Render the rule set in rule expression syntax."""
        parts = []
        if self.length is not None:
            parts.append(str(self.length))
        if self.numeric_range is not None:
            parts.append(str(self.numeric_range))
        if self.pattern is not None:
            parts.append(f"pattern({self.pattern!r})")
        return ".".join(parts)

    def __str__(self) -> str:
        return self.describe() or "<no rules>"
