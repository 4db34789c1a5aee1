#!/usr/bin/env python3
"""
CLI for validating JSON documents against schemas.

Usage:
    schema-validator validate schema.json data.json
    schema-validator validate schema.json data.json --format json
    schema-validator check schema.json --mode loose
"""
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Load .env into os.environ for SCHEMA_VALIDATOR_* overrides
load_dotenv()

from schema_validator.errors import SchemaValidatorError  # noqa: E402
from schema_validator.runtime.formatting import format_errors  # noqa: E402
from schema_validator.runtime.validator import Validator  # noqa: E402
from schema_validator.schema.models import ErrorFormat, ValidationMode  # noqa: E402

console = Console()

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

# Global verbose flag
VERBOSE = False

MODE_CHOICE = click.Choice([mode.value for mode in ValidationMode])


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if VERBOSE:
        console.print_exception()
    sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(version="0.1.0", prog_name="schema-validator")
@click.option('--verbose', '-v', is_flag=True, help='Show full error tracebacks for debugging')
def cli(verbose: bool):
    """
    Validate JSON documents against JSON-Schema-style schemas.

    \b
    Commands:
      validate  - Validate a JSON data file against a schema file
      check     - Compile a schema file and report problems
    """
    global VERBOSE
    VERBOSE = verbose


@cli.command()
@click.argument('schema_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--mode', '-m', type=MODE_CHOICE, default=None, help='Validation mode (defaults to settings)')
@click.option(
    '--format', '-f', 'fmt',
    type=click.Choice(['table', 'simple', 'detailed', 'json']),
    default='table',
    help='Output format',
)
@click.option('--stop-on-first-error', is_flag=True, help='Report only the first error')
def validate(schema_file: str, data_file: str, mode: str, fmt: str, stop_on_first_error: bool):
    """
    Validate DATA_FILE against SCHEMA_FILE.

    Exits with 0 when the data is valid, 1 when it is invalid and 2 when the
    schema or data cannot be processed.
    """
    overrides = {"stop_on_first_error": stop_on_first_error}
    if mode:
        overrides["validation_mode"] = mode

    try:
        validator = Validator(**overrides)
        result = validator.validate_json(_read(data_file), _read(schema_file))
    except (SchemaValidatorError, OSError) as exc:
        _fail(exc)
        return

    if fmt == 'table':
        if result.valid:
            console.print(Panel.fit("[bold green]✓ Valid[/bold green]", border_style="green"))
        else:
            table = Table(title="Validation errors", box=box.ROUNDED)
            table.add_column("Path", style="cyan")
            table.add_column("Keyword", style="magenta")
            table.add_column("Message")
            for error in result.errors:
                table.add_row(escape(error.path), escape(error.tag), escape(error.message))
            console.print(table)
    elif result.valid:
        click.echo("[]" if fmt == 'json' else "valid")
    else:
        click.echo(format_errors(result.errors, ErrorFormat(fmt)))

    sys.exit(EXIT_VALID if result.valid else EXIT_INVALID)


@cli.command()
@click.argument('schema_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--mode', '-m', type=MODE_CHOICE, default=None, help='Validation mode (defaults to settings)')
def check(schema_file: str, mode: str):
    """
    Compile SCHEMA_FILE and report whether it is usable.
    """
    overrides = {"validation_mode": mode} if mode else {}
    try:
        compiled = Validator(**overrides).compile(_read(schema_file))
    except (SchemaValidatorError, OSError) as exc:
        _fail(exc)
        return

    title = compiled.title or Path(schema_file).name
    console.print(f"[green]✓[/green] {escape(title)}: {len(compiled.bindings)} top-level keyword(s) compiled")


def main():
    cli()


if __name__ == "__main__":
    main()
