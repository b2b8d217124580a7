"""
Producers — functions that emit files through the scaffolding engine.

Each producer takes a ``CommandInput`` and returns nothing; failures
raise. They are grouped into the pipelines the CLI runs:

    UPDATE    every generated file (``webkit update`` and drift's dry run)
    STARTER   one-time files that become user-owned (``webkit scaffold``)
"""

from __future__ import annotations

from webkit.core.pipeline import Pipeline, Producer
from webkit.core.services.generators.code_style import code_style
from webkit.core.services.generators.dockerignore import docker_ignore
from webkit.core.services.generators.git_settings import git_settings
from webkit.core.services.generators.github_workflow import backup_workflows, pr_workflow
from webkit.core.services.generators.package_json import package_json, pnpm_workspace, turbo_json
from webkit.core.services.generators.payload import migration_check, public_folder
from webkit.core.services.generators.readme import readme

CODE_STYLE = Producer("files.code_style", code_style)
GIT_SETTINGS = Producer("files.git_settings", git_settings)
PACKAGE_JSON = Producer("files.package_json", package_json)
PNPM_WORKSPACE = Producer("files.pnpm_workspace", pnpm_workspace)
TURBO_JSON = Producer("files.turbo_json", turbo_json)
DOCKER_IGNORE = Producer("files.docker_ignore", docker_ignore)
PUBLIC_FOLDER = Producer("files.public_folder", public_folder)
MIGRATION_CHECK = Producer("files.migration_check", migration_check)
PR_WORKFLOW = Producer("cicd.pr_workflow", pr_workflow)
BACKUP_WORKFLOWS = Producer("cicd.backup_workflows", backup_workflows)
README = Producer("files.readme", readme)


def update_pipeline() -> Pipeline:
    return Pipeline(
        "update",
        [
            CODE_STYLE,
            GIT_SETTINGS,
            PACKAGE_JSON,
            PNPM_WORKSPACE,
            TURBO_JSON,
            DOCKER_IGNORE,
            PUBLIC_FOLDER,
            MIGRATION_CHECK,
            PR_WORKFLOW,
            BACKUP_WORKFLOWS,
        ],
    )


def starter_pipeline() -> Pipeline:
    return Pipeline("starter", [README])


def scaffold_pipeline() -> Pipeline:
    return Pipeline("scaffold", starter_pipeline().producers + update_pipeline().producers)


# ``webkit scaffold <name>`` → the producers it runs
SCAFFOLD_TARGETS: dict[str, list[Producer]] = {
    "code-style": [CODE_STYLE],
    "git": [GIT_SETTINGS],
    "package-json": [PACKAGE_JSON],
    "pnpm-workspace": [PNPM_WORKSPACE],
    "turbo": [TURBO_JSON],
    "docker-ignore": [DOCKER_IGNORE],
    "payload": [PUBLIC_FOLDER, MIGRATION_CHECK],
    "cicd": [PR_WORKFLOW, BACKUP_WORKFLOWS],
    "readme": [README],
}


def target_pipeline(name: str) -> Pipeline:
    return Pipeline(f"scaffold:{name}", SCAFFOLD_TARGETS[name])
