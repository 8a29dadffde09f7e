"""Noun Catalog CLI - browse, check and export the noun catalog.

Usage:
    nouns categories
    nouns list finance
    nouns show finance.Invoice
    nouns lint --min-severity warning
    nouns export --format jsonschema --category form --output form.schema.json
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from dotenv import load_dotenv

# Load .env early so NOUNS_* variables apply to the config
load_dotenv()
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nouns.analysis.graph import build_graph
from nouns.analysis.lint import Severity, lint_registry
from nouns.app.config import LOG_LEVELS, NounsConfig, set_config
from nouns.catalog.loader import create_registry
from nouns.catalog.registry import NounRegistry
from nouns.core.exceptions import AmbiguousNounError, CatalogError
from nouns.schema.json_schema import catalog_json_schema, to_json_schema
from nouns.schema.markdown import render_markdown
from nouns.utils.logging import get_logger, log_error, log_operation

logger = get_logger("app.cli")

app = typer.Typer(
    name="nouns",
    help="Noun catalog: business-domain entity definitions",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


class ExportFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    JSONSCHEMA = "jsonschema"
    MARKDOWN = "markdown"


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass
class _State:
    config: NounsConfig = field(default_factory=NounsConfig)
    registry: NounRegistry | None = None


_state = _State()


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(1)


def _registry() -> NounRegistry:
    """Build the registry for this invocation on first use."""
    if _state.registry is None:
        config = _state.config
        try:
            _state.registry = create_registry(
                extra_dirs=config.catalog_dirs,
                include_defaults=config.include_defaults,
                strict=config.strict,
            )
        except CatalogError as e:
            _fail(str(e))
    return _state.registry


def _get_noun(ref: str):
    try:
        return _registry().get(ref)
    except AmbiguousNounError as e:
        _fail(f"'{ref}' is ambiguous, use one of: {', '.join(e.candidates)}")
    except CatalogError as e:
        _fail(str(e))


# --- Global Options ---
@app.callback()
def main_callback(
    catalog_dir: Annotated[Optional[list[Path]], typer.Option("--catalog-dir", "-d", help="Extra catalog directory (repeatable)")] = None,
    config: Annotated[Optional[Path], typer.Option("--config", help="Path to a JSON config file")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    no_defaults: Annotated[bool, typer.Option("--no-defaults", help="Do not load the shipped catalogs")] = False,
) -> None:
    """Noun catalog: business-domain entity definitions."""
    try:
        cfg = NounsConfig.load(config)
    except (OSError, ValueError) as e:
        _fail(f"Could not load config: {e}")

    if log_level:
        if log_level.upper() not in LOG_LEVELS:
            _fail(f"Invalid log level: {log_level}")
        cfg.log_level = log_level.upper()
    if catalog_dir:
        cfg.catalog_dirs = cfg.catalog_dirs + list(catalog_dir)
    if no_defaults:
        cfg.include_defaults = False

    cfg.configure_logging()
    set_config(cfg)
    _state.config = cfg
    _state.registry = None


# --- Browsing Commands ---
@app.command("categories")
def list_categories() -> None:
    """List categories with their noun counts."""
    registry = _registry()

    table = Table(title="Categories")
    table.add_column("Key", style="cyan")
    table.add_column("Title")
    table.add_column("Collection", style="dim")
    table.add_column("Nouns", justify="right")

    for catalog in registry.catalogs():
        table.add_row(catalog.key, catalog.title, catalog.collection, str(len(catalog)))

    console.print(table)
    stats = registry.stats()
    console.print(f"{stats['nouns']} nouns in {stats['categories']} categories")


@app.command("list")
def list_nouns(
    category: Annotated[Optional[str], typer.Argument(help="Category key or collection name")] = None,
) -> None:
    """List nouns, optionally for one category."""
    registry = _registry()

    if category is not None:
        try:
            catalogs = [registry.category(category)]
        except CatalogError as e:
            _fail(str(e))
    else:
        catalogs = registry.catalogs()

    table = Table(title="Nouns")
    table.add_column("Noun", style="cyan")
    table.add_column("Category", style="dim")
    table.add_column("Description")

    for catalog in catalogs:
        for noun in catalog:
            table.add_row(noun.name, catalog.key, escape(noun.description))

    console.print(table)


@app.command("show")
def show_noun(
    ref: Annotated[str, typer.Argument(help="Noun reference, e.g. finance.Invoice or Invoice")],
) -> None:
    """Show the definition of a noun."""
    noun = _get_noun(ref)

    console.print(Panel(
        f"[bold]{escape(noun.description)}[/bold]\n\n"
        f"[bold]Singular:[/bold] {noun.singular}\n"
        f"[bold]Plural:[/bold] {noun.plural}",
        title=noun.ref,
        border_style="blue",
    ))

    if noun.properties:
        table = Table(title="Properties")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Optional")
        table.add_column("Description")
        for name, prop in noun.properties.items():
            type_name = f"{prop.type}[]" if prop.array else prop.type
            table.add_row(name, type_name, "yes" if prop.optional else "", escape(prop.description or ""))
        console.print(table)

    if noun.relationships:
        table = Table(title="Relationships")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Cardinality")
        table.add_column("Backref")
        for name, rel in noun.relationships.items():
            table.add_row(name, rel.type, rel.cardinality.value, rel.backref or "")
        console.print(table)

    console.print(f"[bold]Actions:[/bold] {', '.join(noun.action_names()) or '-'}", highlight=False)
    console.print(f"[bold]Events:[/bold] {', '.join(noun.events) or '-'}", highlight=False)


@app.command("find")
def find_nouns(
    text: Annotated[str, typer.Argument(help="Text to search for in names and descriptions")],
) -> None:
    """Search nouns by name or description."""
    matches = _registry().search(text)

    if not matches:
        console.print(f"[yellow]No nouns match '{escape(text)}'[/yellow]")
        return

    table = Table(title=f"Nouns matching '{escape(text)}'")
    table.add_column("Reference", style="cyan")
    table.add_column("Description")
    for noun in matches:
        table.add_row(noun.ref, escape(noun.description))
    console.print(table)


@app.command("graph")
def show_graph(
    ref: Annotated[str, typer.Argument(help="Noun reference")],
) -> None:
    """Show outgoing and incoming relationships of a noun."""
    noun = _get_noun(ref)
    graph = build_graph(_registry())

    table = Table(title=f"{noun.ref} relationships")
    table.add_column("Direction")
    table.add_column("Field", style="cyan")
    table.add_column("Noun")
    table.add_column("Cardinality")

    for field_name, target, data in graph.neighbors(noun.ref):
        table.add_row("out", field_name, target, data["cardinality"])
    for source, field_name, data in graph.incoming(noun.ref):
        table.add_row("in", field_name, source, data["cardinality"])

    console.print(table)


# --- Checking and Export ---
@app.command("lint")
def lint_catalog(
    min_severity: Annotated[Severity, typer.Option("--min-severity", "-s", help="Lowest severity to report")] = Severity.WARNING,
    format: Annotated[ReportFormat, typer.Option("--format", "-f", help="Report format")] = ReportFormat.TEXT,
) -> None:
    """Check the catalog for consistency problems."""
    full_report = lint_registry(_registry())
    report = full_report.filter(min_severity)

    if format == ReportFormat.JSON:
        typer.echo(report.to_json())
    else:
        for issue in report:
            color = {"error": "red", "warning": "yellow", "info": "dim"}[issue.severity.value]
            console.print(f"[{color}]{issue}[/{color}]", highlight=False)
        console.print(report.summary())

    if full_report.has_errors:
        raise typer.Exit(1)


@app.command("export")
def export_catalog(
    format: Annotated[ExportFormat, typer.Option("--format", "-f", help="Output format")] = ExportFormat.JSON,
    category: Annotated[Optional[str], typer.Option("--category", "-c", help="Export a single category")] = None,
    noun: Annotated[Optional[str], typer.Option("--noun", "-n", help="Export a single noun (jsonschema only)")] = None,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file (stdout if omitted)")] = None,
) -> None:
    """Export the catalog as JSON, YAML, JSON Schema or Markdown."""
    registry = _registry()

    try:
        if noun is not None:
            if format != ExportFormat.JSONSCHEMA:
                _fail("--noun is only supported with --format jsonschema")
            text = json.dumps(to_json_schema(_get_noun(noun), registry=registry), indent=2)
        elif format == ExportFormat.JSONSCHEMA:
            text = json.dumps(catalog_json_schema(registry, category), indent=2)
        elif format == ExportFormat.MARKDOWN:
            text = render_markdown(registry, category)
        else:
            if category is not None:
                data = registry.category(category).to_dict()
            else:
                data = registry.to_dict()
            if format == ExportFormat.YAML:
                text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=100)
            else:
                text = json.dumps(data, indent=2, ensure_ascii=False)
    except CatalogError as e:
        _fail(str(e))

    if output is None:
        typer.echo(text)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        log_error(logger, "Export", e, path=output)
        _fail(f"Could not write {output}: {e}")

    log_operation(logger, "Exported catalog", category=category, path=output, format=format.value)
    console.print(f"[green]Wrote {format.value} export to {output}[/green]")


# Module entry point
def main() -> None:
    """Entry point for the nouns console script."""
    app()


if __name__ == "__main__":
    main()
