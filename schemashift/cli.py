import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from schemashift.config import get_config
from schemashift.exceptions import (
    DocumentLoadError,
    DocumentValidationError,
    OutputError,
    SchemaShiftError,
)
from schemashift.openapi import UniversalOpenAPI

console = Console(stderr=True)
app = typer.Typer(
    name='schemashift',
    help='Convert Swagger 2.0 documents to OpenAPI 3.0',
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    JSON = 'json'
    YAML = 'yaml'


def load_document(source: str) -> UniversalOpenAPI:
    """Read a JSON or YAML document from ``source`` and validate it."""
    try:
        content = yaml.safe_load(Path(source).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise DocumentLoadError(source, cause=e) from e

    if not isinstance(content, dict):
        raise DocumentLoadError(source, cause=ValueError('document is not a mapping'))

    try:
        return UniversalOpenAPI.model_validate(content)
    except ValidationError as e:
        errors = [
            f'{".".join(str(p) for p in error["loc"])}: {error["msg"]}'
            for error in e.errors()
        ]
        raise DocumentValidationError(source, errors) from e


def render_document(data: dict, output_format: OutputFormat) -> str:
    if output_format is OutputFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + '\n'


@app.command()
def convert(
    source: Annotated[
        str, typer.Argument(help='Path to a Swagger 2.0 document (YAML or JSON)')
    ],
    output: Annotated[
        str | None,
        typer.Option('--output', '-o', help='Write the result here instead of stdout'),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option('--format', '-f', help='Output format', case_sensitive=False),
    ] = OutputFormat.JSON,
    config: Annotated[
        str | None,
        typer.Option('--config', '-c', help='Path to configuration file (YAML)'),
    ] = None,
) -> None:
    """Convert a Swagger 2.0 document to OpenAPI 3.0.

    Documents that already are OpenAPI 3.0 are written back unchanged.

    Examples:
        schemashift convert swagger.yaml
        schemashift convert swagger.json -o openapi.yaml --format yaml
        schemashift convert swagger.yaml -c schemashift.yaml
    """
    try:
        settings = get_config(config)
        document = load_document(source)

        if document.is_swagger:
            openapi, warnings = document.root.upgrade(settings)
        else:
            console.print(f'[dim]{source} is already OpenAPI 3.0[/dim]')
            openapi, warnings = document.root, []

        for warning in warnings:
            console.print(f'[yellow]Warning:[/yellow] {escape(warning)}', highlight=False)

        text = render_document(openapi.dump(), output_format)

        if output is None:
            typer.echo(text, nl=False)
            return

        try:
            Path(output).write_text(text)
        except OSError as e:
            raise OutputError(output, cause=e) from e

        console.print(
            f'[green]Converted[/green] {source} -> {output} '
            f'({len(warnings)} warning{"" if len(warnings) == 1 else "s"})'
        )

    except SchemaShiftError as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}', highlight=False)
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of schemashift."""
    from schemashift import __version__

    console.print(f'schemashift version: {__version__}')


if __name__ == '__main__':
    app()
