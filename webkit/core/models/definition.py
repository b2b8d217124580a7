"""
Project definition — the declarative description of a WebKit project.

Loaded from app.json, this is the single input every producer reads.
It is parsed once per command and never mutated by the core.
"""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from webkit.adapters.base import escapes_root

if TYPE_CHECKING:
    from webkit.adapters.base import Filesystem

APP_TYPES = ("payload", "svelte-kit", "golang")
RESOURCE_TYPES = ("postgres", "s3", "sqlite")

# Spellings people actually write in app.json.
_APP_TYPE_ALIASES = {
    "payload-cms": "payload",
    "payloadcms": "payload",
    "sveltekit": "svelte-kit",
    "go": "golang",
}

_LANGUAGES = {
    "payload": "js",
    "svelte-kit": "js",
    "golang": "go",
}

_DEFAULT_PORTS = {
    "payload": 3000,
    "svelte-kit": 3001,
    "golang": 8080,
}

_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")


class GitHubRepo(BaseModel):
    """Where the project lives on GitHub."""

    owner: str = ""
    name: str = ""


class Project(BaseModel):
    """Root project metadata."""

    name: str
    title: str = ""
    description: str = ""
    repo: GitHubRepo = Field(default_factory=GitHubRepo)

    @field_validator("repo", mode="before")
    @classmethod
    def _repo_from_string(cls, value: Any) -> Any:
        # "owner/name" shorthand
        if isinstance(value, str):
            owner, _, name = value.partition("/")
            return {"owner": owner, "name": name}
        return value


class Build(BaseModel):
    """Container build settings for an app."""

    dockerfile: str = "Dockerfile"
    port: int = 0
    release: bool | None = None


class Domain(BaseModel):
    name: str
    type: str = "primary"  # primary, alias, unmanaged
    zone: str = ""
    wildcard: bool = False


class App(BaseModel):
    """A deployable application inside the project.

    ``uses_npm`` and ``terraform_managed`` are tri-state: ``None`` means
    "not set", and the accessor methods resolve the default.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    title: str = ""
    type: str
    description: str = ""
    path: str
    build: Build = Field(default_factory=Build)
    uses_npm: bool | None = Field(default=None, alias="usesNPM")
    terraform_managed: bool | None = Field(default=None, alias="terraformManaged")
    domains: list[Domain] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _APP_TYPE_ALIASES.get(lowered, lowered)
        return value

    @model_validator(mode="after")
    def _apply_defaults(self) -> App:
        if self.path:
            self.path = posixpath.normpath(self.path.replace("\\", "/"))
        if not self.build.port:
            self.build.port = _DEFAULT_PORTS.get(self.type, 3000)
        if not self.title:
            self.title = self.name
        return self

    def language(self) -> str:
        """Either "js" or "go" ("" for an unknown type)."""
        return _LANGUAGES.get(self.type, "")

    def should_use_npm(self) -> bool:
        if self.uses_npm is not None:
            return self.uses_npm
        return self.language() == "js"

    def is_terraform_managed(self) -> bool:
        return True if self.terraform_managed is None else self.terraform_managed

    def should_release(self) -> bool:
        return True if self.build.release is None else self.build.release

    def primary_domain(self) -> str:
        for domain in self.domains:
            if domain.type == "primary":
                return domain.name
        return self.domains[0].name if self.domains else ""


class ResourceBackup(BaseModel):
    enabled: bool = True


class Resource(BaseModel):
    """A piece of infrastructure (database, bucket) the apps depend on."""

    name: str
    title: str = ""
    type: str
    description: str = ""
    provider: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    backup: ResourceBackup = Field(default_factory=ResourceBackup)


class Definition(BaseModel):
    """Root model — loaded from app.json.

    If something isn't declared here, no producer will emit it.
    """

    webkit_version: str = ""
    project: Project
    resources: list[Resource] = Field(default_factory=list)
    apps: list[App] = Field(default_factory=list)

    # ── Queries ──────────────────────────────────────────────────

    def get_app(self, name: str) -> App | None:
        for app in self.apps:
            if app.name == name:
                return app
        return None

    def get_resource(self, name: str) -> Resource | None:
        for res in self.resources:
            if res.name == name:
                return res
        return None

    def contains_go(self) -> bool:
        return any(app.language() == "go" for app in self.apps)

    def contains_js(self) -> bool:
        return any(app.language() == "js" for app in self.apps)

    def npm_apps(self) -> list[App]:
        return [app for app in self.apps if app.should_use_npm()]

    def github_labels(self) -> list[str]:
        labels = ["webkit"]
        for app in self.apps:
            if app.type not in labels:
                labels.append(app.type)
        return labels

    # ── Validation ───────────────────────────────────────────────

    def validation_errors(self, fs: Filesystem | None = None) -> list[str]:
        """Check the rules a schema cannot express.

        Returns a list of human-readable errors (empty when valid).
        App paths are only checked when a filesystem is given.
        """
        errors: list[str] = []

        errors.extend(_check_names("app", [a.name for a in self.apps]))
        errors.extend(_check_names("resource", [r.name for r in self.resources]))

        if not _NAME_PATTERN.match(self.project.name or ""):
            errors.append(
                f"project name {self.project.name!r} must be lowercase "
                "alphanumeric with dashes, starting with a letter"
            )

        for app in self.apps:
            if app.type not in APP_TYPES:
                errors.append(
                    f"app {app.name!r}: unknown type {app.type!r} "
                    f"(expected one of {', '.join(APP_TYPES)})"
                )
            for domain in app.domains:
                if "://" in domain.name:
                    errors.append(
                        f"app {app.name!r}: domain {domain.name!r} should not "
                        "contain protocol prefix (e.g., 'https://')"
                    )
            if app.path and (posixpath.isabs(app.path) or escapes_root(app.path)):
                errors.append(f"app {app.name!r}: path {app.path!r} must stay inside the project")
            elif fs is not None and app.path and not fs.is_dir(app.path):
                errors.append(f"app {app.name!r}: path {app.path!r} does not exist")

        for res in self.resources:
            if res.type not in RESOURCE_TYPES:
                errors.append(
                    f"resource {res.name!r}: unknown type {res.type!r} "
                    f"(expected one of {', '.join(RESOURCE_TYPES)})"
                )

        return errors


def _check_names(kind: str, names: list[str]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for name in names:
        if not _NAME_PATTERN.match(name):
            errors.append(
                f"{kind} name {name!r} must be lowercase alphanumeric "
                "with dashes, starting with a letter"
            )
        if name in seen:
            errors.append(f"duplicate {kind} name {name!r}")
        seen.add(name)
    return errors
