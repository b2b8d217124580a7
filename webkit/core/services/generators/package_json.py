"""
Node workspace producers — package.json, pnpm-workspace.yaml, turbo.json.

The root package.json is always written; the workspace and turbo files
only when at least one app uses npm.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from webkit.core.manifest.source import source_project
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_tracking

PNPM_VERSION = "pnpm@10.15.0"
TURBO_SCHEMA = "https://turborepo.com/schema.json"


class PackageJSON(BaseModel):
    """Root package.json. Field order here is the order on disk."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    license: str | None = None
    private: bool | None = None
    type: str | None = None
    version: str | None = None
    scripts: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    package_manager: str | None = Field(default=None, alias="packageManager")
    engines: dict[str, str] = Field(default_factory=dict)


DEV_DEPENDENCIES: dict[str, str] = {
    "@eslint/js": "^9.37.0",
    "eslint": "^9.37.0",
    "eslint-plugin-svelte": "^3.12.0",
    "globals": "^16.0.0",
    "prettier": "^3.6.0",
    "prettier-plugin-svelte": "^3.4.0",
    "turbo": "^2.5.8",
    "typescript": "5.8.2",
    "typescript-eslint": "^8.46.0",
}


def build_package_json(input: CommandInput) -> PackageJSON:
    project = input.definition().project
    return PackageJSON(
        name=project.name,
        description=project.description or None,
        license="BSD-3-Clause",
        private=True,
        type="module",
        version="1.0.0",
        scripts={
            "preinstall": "npx only-allow pnpm",
            "build": "turbo build",
            "test": "turbo test",
            "lint": "eslint .",
            "lint:fix": "eslint . --fix",
            "format": "prettier --write .",
        },
        dev_dependencies=DEV_DEPENDENCIES,
        package_manager=PNPM_VERSION,
        engines={"node": ">=22"},
    )


def package_json(input: CommandInput) -> None:
    input.engine.write_json(
        "package.json",
        build_package_json(input),
        with_tracking(source_project()),
    )


def pnpm_workspace(input: CommandInput) -> None:
    apps = input.definition().npm_apps()
    if not apps:
        return
    input.engine.write_yaml(
        "pnpm-workspace.yaml",
        {"packages": [app.path for app in apps]},
        with_tracking(source_project()),
    )


def turbo_config() -> dict[str, Any]:
    return {
        "$schema": TURBO_SCHEMA,
        "ui": "stream",
        "tasks": {
            "build": {
                "dependsOn": ["^build"],
                "outputs": ["dist/**", "build/**", ".next/**", "!.next/cache/**", ".svelte-kit/**"],
            },
            "lint": {"dependsOn": ["^lint"]},
            "test": {"dependsOn": ["^build"], "outputs": ["coverage/**"]},
            "format": {"cache": False},
            "dev": {"cache": False, "persistent": True},
        },
    }


def turbo_json(input: CommandInput) -> None:
    if not input.definition().npm_apps():
        return
    input.engine.write_json(
        "turbo.json",
        turbo_config(),
        with_tracking(source_project()),
    )
