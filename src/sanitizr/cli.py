"""CLI interface for sanitizr using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sanitizr import __description__, __version__
from sanitizr.config import LogLevel, OutputFormat, configure, load_config
from sanitizr.errors import RuleExpressionError, UnsupportedSubjectError
from sanitizr.expressions import parse_rule_expression
from sanitizr.outcome import Outcome, StructureOutcome
from sanitizr.rules import RuleSet
from sanitizr.structures import FieldRule, validate_fields
from sanitizr.validators import validate as validate_value

app = typer.Typer(
    name="sanitizr",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_MISSING = object()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"sanitizr version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .sanitizr.json)")
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    """sanitizr - Declarative validation for values, collections and structures."""
    try:
        settings = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    level = log_level or settings.logging.level
    logging.basicConfig(level=level.to_logging(), format="%(levelname)s %(name)s: %(message)s")
    configure(settings)
    ctx.obj = settings


def _parse_rules_or_exit(expression: str):
    try:
        return parse_rule_expression(expression)
    except RuleExpressionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)


def _parse_number(value: str) -> int | float:
    try:
        return int(value)
    except ValueError:
        return float(value)


@app.command()
def check(
    value: Annotated[str, typer.Argument(help="Value to validate")],
    rules: Annotated[str, typer.Option("--rules", "-r", help="Rule expression, e.g. 'length(5, 10)'")],
    number: Annotated[bool, typer.Option("--number", "-n", help="Treat the value as a number")] = False,
) -> None:
    """Validate a single value against a rule expression."""
    rule_set = _parse_rules_or_exit(rules)

    subject: str | int | float = value
    if number:
        try:
            subject = _parse_number(value)
        except ValueError:
            console.print(f"[red]Error:[/red] '{escape(value)}' is not a number")
            raise typer.Exit(2)

    outcome = validate_value(subject, rule_set)
    if outcome:
        console.print("[green]✓ Valid[/green]")
        raise typer.Exit(0)

    console.print(f"[red]✗ Invalid:[/red] {escape(outcome.error)}")
    raise typer.Exit(1)


@app.command()
def rules(
    expression: Annotated[str, typer.Argument(help="Rule expression to parse")],
) -> None:
    """Parse a rule expression and show the resulting rule set."""
    rule_set = _parse_rules_or_exit(expression)
    console.print(f"[cyan]Expression:[/cyan] {escape(rule_set.describe() or '<no rules>')}")
    console.print_json(data=rule_set.model_dump())


def _load_json(path: Path, what: str) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = jsonlib.load(f)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] {what} file not found: {escape(str(path))}")
        raise typer.Exit(2)
    except jsonlib.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {what} file {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(2)

    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] {what} file must contain a JSON object")
        raise typer.Exit(2)
    return data


def _check_json_value(value, rule_set: RuleSet) -> Outcome:
    """Validate a JSON value, turning missing or unsupported values into failures."""
    if value is _MISSING:
        return Outcome.fail("Field is missing")
    try:
        return validate_value(value, rule_set)
    except UnsupportedSubjectError as e:
        return Outcome.fail(str(e))


def _validate_document(data: dict, field_rules: list[FieldRule]) -> StructureOutcome:
    return validate_fields(field_rules, lambda name: data.get(name, _MISSING), check=_check_json_value)


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    data_file: Annotated[Path, typer.Argument(help="JSON object to validate")],
    rules_file: Annotated[
        Path,
        typer.Option("--rules", "-r", help="JSON object mapping field names to rule expressions")
    ],
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
) -> None:
    """Validate the fields of a JSON document, reporting every failing field."""
    data = _load_json(data_file, "data")
    rule_map = _load_json(rules_file, "rules")

    field_rules = []
    for name, expression in rule_map.items():
        if not isinstance(expression, str):
            console.print(f"[red]Error:[/red] Rule for '{escape(name)}' must be a string expression")
            raise typer.Exit(2)
        field_rules.append(FieldRule(name, _parse_rules_or_exit(expression)))

    result = _validate_document(data, field_rules)
    output_format = format or ctx.obj.output.format

    if output_format == OutputFormat.JSON:
        console.print_json(jsonlib.dumps(result.to_dict()))
    else:
        status_color = "green" if result.is_valid else "red"
        console.print(f"[{status_color}]Validation Status: {result.status.value.upper()}[/{status_color}]")

        if result.errors:
            table = Table()
            table.add_column("Field", style="cyan")
            table.add_column("Message", style="white")
            for error in result.errors:
                table.add_row(escape(error.field), escape(error.message))
            console.print(table)
        else:
            console.print(f"[green]All {len(field_rules)} field(s) valid[/green]")

    raise typer.Exit(result.exit_code)
