"""
WebKit — CLI entrypoint.

Usage:
    webkit --help
    webkit update
    webkit drift
    webkit scaffold
    python -m webkit.main validate
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from webkit import __version__
from webkit.core.errors import ManifestNotFoundError, TemplateNotFoundError
from webkit.core.manifest.drift import DriftReason
from webkit.core.observability.logging_config import setup_from_environment
from webkit.core.pipeline import EXIT_DRIFT, EXIT_ERROR, CommandInput
from webkit.ui.cli import fail, handle_errors, resolve_base_dir
from webkit.ui.cli.scaffold import scaffold

# Headline per drift reason, in display order
_DRIFT_HEADINGS: list[tuple[DriftReason, str, str]] = [
    (DriftReason.MODIFIED, "Manual modifications detected", "These files were edited by hand."),
    (DriftReason.OUTDATED, "Outdated files detected", "app.json changed since these were generated."),
    (DriftReason.NEW, "Missing files detected", "These files should exist but don't."),
    (DriftReason.DELETED, "Orphaned files detected", "These files are no longer generated."),
]


@click.group()
@click.version_option(version=__version__, prog_name="webkit")
@click.option(
    "--dir",
    "-C",
    "base_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: nearest directory with app.json).",
)
@click.option("--silent", is_flag=True, help="Discard all command output.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(
    ctx: click.Context,
    base_dir: Path | None,
    silent: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """WebKit — generate project files and keep them in sync with app.json."""
    ctx.ensure_object(dict)
    ctx.obj["base_dir"] = base_dir
    ctx.obj["silent"] = silent
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_environment(debug=debug, verbose=verbose, quiet=quiet)

    # ── Embedded bundle must be complete ────────────────────────
    from webkit.core.templates import validate_bundle

    try:
        validate_bundle()
    except TemplateNotFoundError as e:
        fail(str(e))


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def drift(ctx: click.Context, as_json: bool) -> None:
    """Report files that differ from what app.json would generate.

    Exits 1 when any drift is found.
    """
    from webkit.core.use_cases.drift import check_drift

    input = CommandInput.for_directory(resolve_base_dir(ctx), silent=ctx.obj.get("silent", False))
    printer = input.printer()

    try:
        result = check_drift(input)
    except ManifestNotFoundError:
        printer.warn("No manifest found, nothing to compare against.")
        printer.println("   Run 'webkit update' to generate files and create .webkit/manifest.json")
        sys.exit(EXIT_ERROR)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(EXIT_DRIFT if result.has_drift else 0)

    if not result.has_drift:
        printer.success("No drift detected, all files are up to date")
        return

    for reason, heading, hint in _DRIFT_HEADINGS:
        entries = result.by_reason(reason)
        if not entries:
            continue
        printer.line_break()
        printer.warn(heading)
        printer.println(f"   {hint}")
        for entry in entries:
            source = f"  ({entry.source})" if entry.source else ""
            printer.println(f"     {reason.value:<9} {entry.path}{source}")

    printer.line_break()
    printer.info("Run 'webkit update' to sync all files")
    sys.exit(EXIT_DRIFT)


@cli.command()
@click.option("--prune", is_flag=True, help="Delete files that are no longer generated.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def update(ctx: click.Context, prune: bool, as_json: bool) -> None:
    """Regenerate every managed file in place."""
    from webkit.core.services.generators import update_pipeline
    from webkit.core.use_cases.update import run_pipeline

    silent = ctx.obj.get("silent", False) or as_json
    input = CommandInput.for_directory(resolve_base_dir(ctx), silent=silent)
    printer = input.printer()

    if not ctx.obj.get("quiet"):
        printer.println(click.style("\n🔄 Updating project files", fg="cyan", bold=True))

    result = run_pipeline(input, update_pipeline(), prune=prune)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    printer.line_break()
    printer.success(f"Update complete, {len(result.tracked)} file(s) tracked")
    if result.pruned:
        printer.info("Removed files that are no longer generated:")
        printer.list(result.pruned)
    if result.orphans:
        printer.warn("No longer generated (left on disk, delete them or run 'webkit update --prune'):")
        printer.list(result.orphans)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def validate(ctx: click.Context, as_json: bool) -> None:
    """Validate app.json."""
    from webkit.adapters.filesystem.local import LocalFilesystem
    from webkit.core.use_cases.validate import validate_definition

    input = CommandInput(LocalFilesystem(resolve_base_dir(ctx)), silent=ctx.obj.get("silent", False))
    result = validate_definition(input)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else EXIT_DRIFT)

    printer = input.printer()
    if result.ok:
        printer.success("Validation passed! No errors found.")
        return

    printer.error(f"Validation failed with {len(result.errors)} error(s):")
    for i, err in enumerate(result.errors, start=1):
        printer.println(f"   {i}. {err}")
    sys.exit(EXIT_DRIFT)


@cli.command()
def version() -> None:
    """Print the WebKit version."""
    click.echo(f"WebKit {__version__}")


cli.add_command(scaffold)


if __name__ == "__main__":
    cli()
