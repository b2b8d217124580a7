"""
CLI commands for project scaffolding.

``webkit scaffold`` runs the starter producers and then every update
producer; ``webkit scaffold <target>`` runs a single group of producers.
Thin wrappers over ``webkit.core.use_cases.update``.
"""

from __future__ import annotations

import json

import click

from webkit.core.pipeline import CommandInput, Pipeline
from webkit.core.services.generators import SCAFFOLD_TARGETS, scaffold_pipeline, target_pipeline
from webkit.core.use_cases.update import run_pipeline
from webkit.ui.cli import handle_errors, resolve_base_dir


@click.group(invoke_without_command=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def scaffold(ctx: click.Context, as_json: bool) -> None:
    """Create project files. Existing user-owned files are left alone."""
    if ctx.invoked_subcommand is not None:
        return
    _run(ctx, scaffold_pipeline(), as_json)


def _run(ctx: click.Context, pipeline: Pipeline, as_json: bool) -> None:
    silent = ctx.obj.get("silent", False) or as_json
    input = CommandInput.for_directory(resolve_base_dir(ctx), silent=silent)
    printer = input.printer()

    if not ctx.obj.get("quiet"):
        printer.println(click.style(f"\n🏗️  Scaffolding ({pipeline.name})", fg="cyan", bold=True))

    result = run_pipeline(input, pipeline)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    printer.line_break()
    printer.success(f"Scaffolding complete, {len(result.tracked)} file(s) tracked")
    if result.orphans:
        printer.warn("No longer generated (left on disk):")
        printer.list(result.orphans)


def _target_command(name: str) -> click.Command:
    producers = ", ".join(p.label for p in SCAFFOLD_TARGETS[name])

    @click.command(name, help=f"Run only {producers}.")
    @click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
    @click.pass_context
    @handle_errors
    def command(ctx: click.Context, as_json: bool) -> None:
        _run(ctx, target_pipeline(name), as_json)

    return command


for _name in SCAFFOLD_TARGETS:
    scaffold.add_command(_target_command(_name))
