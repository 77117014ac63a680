"""CLI entry point for openapi-tree-shake."""

import logging
from pathlib import Path

import click
import httpx

from openapi_tree_shake.parser.detect import detect_version, load_document
from openapi_tree_shake.parser.swagger import list_endpoints, path_to_pattern
from openapi_tree_shake.shaker.output import OUTPUT_FORMATS, dump_document
from openapi_tree_shake.shaker.projector import tree_shake
from openapi_tree_shake.shaker.validator import validate_document

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _load(source: str) -> dict:
    """Load a document, turning load failures into CLI errors."""
    try:
        return load_document(source)
    except (OSError, ValueError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e


def _validate(doc: dict, what: str) -> None:
    try:
        validate_document(doc)
    except ValueError as e:
        raise click.ClickException(f"{what} document: {e}") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """OpenAPI Tree Shake: keep selected paths and only the components they use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@main.command()
@click.argument("source")
@click.option("-p", "--pattern", "patterns", multiple=True, help="Regex searched in each path key (repeatable).")
@click.option("-e", "--endpoint", "endpoints", multiple=True, help="Exact path template to keep, e.g. /users/{id} (repeatable).")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Output file (default: stdout).")
@click.option("--format", "fmt", default="json", type=click.Choice(OUTPUT_FORMATS), help="Output format.")
@click.option("--validate/--no-validate", default=True, help="Validate the input and the reduced document.")
@click.option("--with-summary", is_flag=True, help="Write {document, summary} instead of the document alone.")
def shake(
    source: str,
    patterns: tuple[str, ...],
    endpoints: tuple[str, ...],
    output: Path | None,
    fmt: str,
    validate: bool,
    with_summary: bool,
):
    """Reduce SOURCE (file or URL) to the matching paths and their components."""
    doc = _load(source)
    if validate:
        _validate(doc, "Input")

    all_patterns = list(patterns) + [path_to_pattern(e) for e in endpoints]
    try:
        result = tree_shake(doc, all_patterns)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if validate:
        _validate(result.document, "Reduced")

    rendered = dump_document(result.to_dict() if with_summary else result.document, fmt)
    if output is None:
        click.echo(rendered, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        click.echo(f"Reduced document saved to {output}", err=True)

    summary = result.summary
    click.echo(
        f"Removed {len(summary.removed_paths)} paths, {len(summary.removed_schemas)} schemas, "
        f"{len(summary.removed_parameters)} parameters, {len(summary.removed_responses)} responses, "
        f"{len(summary.removed_request_bodies)} request bodies, "
        f"{len(summary.removed_security_schemes)} security schemes.",
        err=True,
    )


@main.command()
@click.argument("source")
def endpoints(source: str):
    """List the operations in SOURCE."""
    doc = _load(source)
    found = list_endpoints(doc)
    for ep in found:
        line = f"{ep.method:<7} {ep.path}"
        if ep.summary:
            line += f"  {ep.summary}"
        click.echo(line)
    click.echo(f"Found {len(found)} endpoints.", err=True)


@main.command()
@click.argument("source")
def validate(source: str):
    """Validate SOURCE against the OpenAPI schema for its version."""
    doc = _load(source)
    _validate(doc, "Input")
    title = doc["info"].get("title", "")
    click.echo(f"OK: {title} ({detect_version(doc).value})")
