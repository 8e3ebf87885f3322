"""Rule expressions: a textual form of RuleSet builder chains.

An expression is a dot-separated chain of builder calls with literal
arguments, for example::

    length(5, 10).pattern(r"^\\w+$")
    range(18, 120)

Expressions are parsed with :mod:`ast` and never evaluated.
"""

import ast
import logging
import numbers

from .errors import RuleExpressionError
from .rules import RuleSet

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


# name -> (builder method, argument checks)
BUILDERS = {
    "length": ("with_length", (_is_int, _is_int)),
    "range": ("with_numeric_range", (_is_real, _is_real)),
    "numeric_range": ("with_numeric_range", (_is_real, _is_real)),
    "pattern": ("with_pattern", (lambda value: isinstance(value, str),)),
}


def _unwind_chain(expression: str, node: ast.expr) -> list[ast.Call]:
    """Return the calls of a chain, innermost first."""
    calls = []
    while True:
        if not isinstance(node, ast.Call):
            raise RuleExpressionError(expression, "expected a chain of rule calls")
        calls.append(node)
        if isinstance(node.func, ast.Name):
            break
        if not isinstance(node.func, ast.Attribute):
            raise RuleExpressionError(expression, "expected a chain of rule calls")
        node = node.func.value
    calls.reverse()
    return calls


def _call_name(call: ast.Call) -> str:
    if isinstance(call.func, ast.Name):
        return call.func.id
    return call.func.attr


def parse_rule_expression(expression: str) -> RuleSet:
    """Parse a rule expression into a RuleSet.

    An empty expression yields a rule set with no constraints.

    Raises:
        RuleExpressionError: If the expression is malformed, names an unknown
            rule, or passes arguments of the wrong number or type
    """
    text = expression.strip()
    rules = RuleSet.new()
    if not text:
        return rules

    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as e:
        raise RuleExpressionError(expression, e.msg) from e

    for call in _unwind_chain(expression, tree.body):
        name = _call_name(call)
        if name not in BUILDERS:
            raise RuleExpressionError(expression, f"unknown rule '{name}'")
        if call.keywords:
            raise RuleExpressionError(expression, f"'{name}' takes positional arguments only")

        method, checks = BUILDERS[name]
        if len(call.args) != len(checks):
            raise RuleExpressionError(
                expression, f"'{name}' expects {len(checks)} argument(s), got {len(call.args)}"
            )

        try:
            args = [ast.literal_eval(arg) for arg in call.args]
        except (ValueError, TypeError) as e:
            raise RuleExpressionError(expression, f"arguments of '{name}' must be literals") from e

        for arg, check in zip(args, checks):
            if not check(arg):
                raise RuleExpressionError(expression, f"invalid argument {arg!r} for '{name}'")

        try:
            rules = getattr(rules, method)(*args)
        except ValueError as e:
            raise RuleExpressionError(expression, str(e)) from e

    logger.debug(f"Parsed rule expression {expression!r} -> {rules.describe()!r}")
    return rules


def rule(expression: str) -> RuleSet:
    """Shorthand for field annotations: ``Annotated[str, rule("length(5, 10)")]``."""
    return parse_rule_expression(expression)
