"""Typer CLI application."""

from pathlib import Path
from typing import List, Optional, Tuple

import typer

from prisma_modeler.config.logging import get_logger, setup_logging
from prisma_modeler.config.settings import get_settings
from prisma_modeler.generator.prisma import generate_schema
from prisma_modeler.schema.state import SchemaState
from prisma_modeler.schema.validators import (
    Diagnostic,
    has_errors,
    validate_model,
    validate_relationship,
)
from prisma_modeler.schema.vocabulary import (
    SCALAR_TYPE_DESCRIPTIONS,
    ReferentialAction,
    RelationType,
)
from prisma_modeler.utils.state_io import dump_state_json, load_state_from_json

app = typer.Typer(help="prisma-modeler: design relational models and emit Prisma schemas")

logger = get_logger(__name__)


def _load(state_json: Path) -> SchemaState:
    try:
        return load_state_from_json(state_json)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def collect_diagnostics(state: SchemaState) -> List[Tuple[str, Diagnostic]]:
    """Validate every model and relationship; pairs each diagnostic with its owner."""
    found: List[Tuple[str, Diagnostic]] = []
    names = {m.id: m.name for m in state.models}
    for model in state.models:
        owner = f"model {model.name or model.id}"
        found.extend((owner, d) for d in validate_model(model))
    for rel in state.relationships:
        source = names.get(rel.from_model, rel.from_model)
        target = names.get(rel.to_model, rel.to_model)
        owner = f"relationship {source} -> {target}"
        found.extend((owner, d) for d in validate_relationship(rel, state.models))
    return found


@app.command()
def generate(
    state_json: Path,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write schema to this file"),
):
    """
    Generate a Prisma schema from a saved schema state.

    Args:
        state_json: Path to the schema state JSON file
        out: Optional output path; the schema is printed when omitted
    """
    setup_logging()
    settings = get_settings()
    state = _load(state_json)

    schema = generate_schema(
        state.models,
        state.relationships,
        provider=settings.datasource_provider,
        url_env=settings.database_url_env,
        client_provider=settings.generator_provider,
    )

    if out is None:
        typer.echo(schema, nl=False)
        return

    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(schema, encoding="utf-8")
    typer.echo(f"✓ Schema written to {out}")


@app.command()
def validate(state_json: Path):
    """
    Validate every model and relationship of a saved schema state.

    Exits with status 1 when any error is found; warnings are reported only.
    """
    setup_logging()
    state = _load(state_json)

    found = collect_diagnostics(state)
    for owner, diag in found:
        where = f" ({diag.location})" if diag.location else ""
        typer.echo(f"{diag.severity.value.upper()}: {owner}{where}: {diag.message}")

    if has_errors(d for _, d in found):
        typer.echo("✗ Schema has errors", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Schema is valid ({len(found)} warning(s))")


@app.command()
def inspect(state_json: Path):
    """Print model and relationship counts followed by the raw state."""
    setup_logging()
    state = _load(state_json)
    typer.echo(f"Models ({len(state.models)})")
    typer.echo(f"Relationships ({len(state.relationships)})")
    typer.echo(dump_state_json(state))


@app.command()
def vocabulary():
    """List scalar types, relation types and referential actions."""
    typer.echo("Scalar types:")
    for name, description in SCALAR_TYPE_DESCRIPTIONS.items():
        typer.echo(f"  {name:<10} {description}")
    typer.echo("Relation types:")
    for rel_type in RelationType:
        typer.echo(f"  {rel_type.value:<13} {rel_type.description}")
    typer.echo("Referential actions:")
    for action in ReferentialAction:
        typer.echo(f"  {action.value:<12} {action.description}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
