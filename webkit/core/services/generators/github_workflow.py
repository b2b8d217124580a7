"""
GitHub workflow producers — pull-request checks and resource backups.

``pr.yaml`` holds a drift job plus one job per app. Every resource with
backups enabled gets its own scheduled ``backup-<name>.yaml``.
"""

from __future__ import annotations

from webkit.core.manifest.source import source_project, source_resource
from webkit.core.models.definition import Resource
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_tracking
from webkit.core.templates import must_load_template

WORKFLOWS_DIR = ".github/workflows"
BACKUP_TYPES = ("postgres", "s3", "sqlite")


def secret_prefix(resource: Resource) -> str:
    """Prefix for the resource's secrets: ``main-db`` → ``MAIN_DB``."""
    return resource.name.upper().replace("-", "_")


def pr_workflow(input: CommandInput) -> None:
    input.engine.write_template(
        f"{WORKFLOWS_DIR}/pr.yaml",
        must_load_template("github/workflows/pr.yaml.j2"),
        {"definition": input.definition()},
        with_tracking(source_project()),
    )


def backup_workflows(input: CommandInput) -> None:
    definition = input.definition()
    template = must_load_template("github/workflows/backup.yaml.j2")
    for resource in definition.resources:
        if not resource.backup.enabled or resource.type not in BACKUP_TYPES:
            continue
        input.engine.write_template(
            f"{WORKFLOWS_DIR}/backup-{resource.name}.yaml",
            template,
            {
                "definition": definition,
                "resource": resource,
                "secret_prefix": secret_prefix(resource),
            },
            with_tracking(source_resource(resource.name)),
        )
