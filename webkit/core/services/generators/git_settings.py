"""
Git settings producer — .gitignore, dependabot and repository settings.

``.github/settings.yaml`` follows the schema of the GitHub "settings"
app: repository flags, teams and main-branch protection.
"""

from __future__ import annotations

from typing import Any

from webkit.core.manifest.source import source_project
from webkit.core.models.definition import Definition
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_tracking
from webkit.core.templates import must_load_template

GIT_SETTINGS_TEMPLATES: dict[str, str] = {
    ".gitignore": "gitignore.j2",
    ".github/dependabot.yaml": "github/dependabot.yaml.j2",
}

SETTINGS_PATH = ".github/settings.yaml"


def repo_settings(definition: Definition) -> dict[str, Any]:
    """Repository settings derived from the project definition."""
    project = definition.project
    repository: dict[str, Any] = {
        "name": project.repo.name or project.name,
        "topics": ", ".join(definition.github_labels()),
        "private": True,
        "has_wiki": False,
        "has_downloads": False,
        "allow_merge_commit": False,
        "delete_branch_on_merge": True,
    }
    return {
        "repository": repository,
        "teams": [{"name": "core", "permission": "admin"}],
        "branches": [
            {
                "name": "main",
                "protection": {
                    "required_pull_request_reviews": None,
                    "required_status_checks": None,
                    "enforce_admins": False,
                    "restrictions": {"teams": ["core"], "users": [], "apps": []},
                    "allow_force_pushes": False,
                    "allow_deletions": False,
                },
            }
        ],
    }


def git_settings(input: CommandInput) -> None:
    definition = input.definition()

    for path, name in GIT_SETTINGS_TEMPLATES.items():
        input.engine.write_template(
            path,
            must_load_template(name),
            {"definition": definition},
            with_tracking(source_project()),
        )

    input.engine.write_yaml(
        SETTINGS_PATH,
        repo_settings(definition),
        with_tracking(source_project()),
    )
