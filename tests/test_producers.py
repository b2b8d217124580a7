"""
Tests for producers — the files each one emits for a project definition.
"""

import json

import yaml

from webkit.adapters.filesystem.memory import MemoryFilesystem
from webkit.core.models.definition import Definition
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold import NOTICE
from webkit.core.services.generators import (
    BACKUP_WORKFLOWS,
    CODE_STYLE,
    DOCKER_IGNORE,
    GIT_SETTINGS,
    MIGRATION_CHECK,
    PACKAGE_JSON,
    PNPM_WORKSPACE,
    PR_WORKFLOW,
    PUBLIC_FOLDER,
    README,
    TURBO_JSON,
)
from webkit.core.services.generators.github_workflow import secret_prefix
from webkit.core.services.generators.package_json import TURBO_SCHEMA
from webkit.core.templates import embed_fs


def _input(data: dict, fs=None) -> CommandInput:
    return CommandInput(
        fs if fs is not None else MemoryFilesystem(),
        definition=Definition.model_validate(data),
        silent=True,
    )


def _go_project() -> dict:
    return {
        "project": {"name": "api-only"},
        "apps": [{"name": "api", "type": "golang", "path": "services/api"}],
    }


# ── Code Style Tests ─────────────────────────────────────────────────


class TestCodeStyle:
    def test_emits_config_files(self, command_input):
        CODE_STYLE(command_input)
        fs = command_input.fs
        for path in [".editorconfig", ".prettierrc", ".prettierignore", "eslint.config.js"]:
            assert fs.exists(path), path
            entry = command_input.tracker.get(path)
            assert entry.generator == "files.code_style"
            assert entry.source == "project"
        assert not fs.exists(".golangci.yaml")

    def test_payload_paths_ignored(self, command_input):
        CODE_STYLE(command_input)
        text = command_input.fs.read_file(".prettierignore").decode()
        assert text.startswith(f"# {NOTICE}")
        assert "apps/cms/.next" in text
        assert "apps/cms/src/migrations/**" in command_input.fs.read_file("eslint.config.js").decode()

    def test_prettierrc_is_plain_json(self, command_input):
        CODE_STYLE(command_input)
        config = json.loads(command_input.fs.read_file(".prettierrc"))
        assert config["useTabs"] is True
        assert "plugins" not in config

    def test_go_project_gets_golangci(self):
        input = _input(_go_project())
        CODE_STYLE(input)
        assert input.fs.read_file(".golangci.yaml") == embed_fs().read_file("golangci.yaml")
        assert "[*.go]" in input.fs.read_file(".editorconfig").decode()


# ── Git Settings Tests ───────────────────────────────────────────────


class TestGitSettings:
    def test_gitignore(self, command_input):
        GIT_SETTINGS(command_input)
        text = command_input.fs.read_file(".gitignore").decode()
        assert "node_modules/" in text
        assert "apps/cms/.next/" in text

    def test_dependabot(self, command_input):
        GIT_SETTINGS(command_input)
        doc = yaml.safe_load(command_input.fs.read_file(".github/dependabot.yaml"))
        ecosystems = [u["package-ecosystem"] for u in doc["updates"]]
        assert ecosystems == ["github-actions", "npm"]

    def test_repo_settings(self, command_input):
        GIT_SETTINGS(command_input)
        doc = yaml.safe_load(command_input.fs.read_file(".github/settings.yaml"))
        assert doc["repository"]["name"] == "my-site"
        assert doc["repository"]["topics"] == "webkit, payload"
        assert doc["branches"][0]["name"] == "main"
        assert command_input.tracker.get(".github/settings.yaml").generator == "files.git_settings"


# ── Node Workspace Tests ─────────────────────────────────────────────


class TestPackageJSON:
    def test_root_package_json(self, command_input):
        PACKAGE_JSON(command_input)
        raw = command_input.fs.read_file("package.json")
        doc = json.loads(raw)
        assert list(doc)[:3] == ["name", "description", "license"]
        assert doc["name"] == "my-site"
        assert doc["description"] == "A test site"
        assert doc["private"] is True
        assert "devDependencies" in doc
        assert doc["packageManager"].startswith("pnpm@")
        assert raw.startswith(b"{\n\t")

    def test_empty_description_omitted(self, definition_data):
        definition_data["project"]["description"] = ""
        input = _input(definition_data)
        PACKAGE_JSON(input)
        assert "description" not in json.loads(input.fs.read_file("package.json"))

    def test_pnpm_workspace(self, command_input):
        PNPM_WORKSPACE(command_input)
        doc = yaml.safe_load(command_input.fs.read_file("pnpm-workspace.yaml"))
        assert doc == {"packages": ["apps/cms"]}

    def test_turbo(self, command_input):
        TURBO_JSON(command_input)
        doc = json.loads(command_input.fs.read_file("turbo.json"))
        assert doc["$schema"] == TURBO_SCHEMA
        assert "build" in doc["tasks"]

    def test_no_workspace_without_npm_apps(self):
        input = _input(_go_project())
        PNPM_WORKSPACE(input)
        TURBO_JSON(input)
        assert not input.fs.exists("pnpm-workspace.yaml")
        assert not input.fs.exists("turbo.json")
        assert len(input.tracker) == 0


# ── Per-app Tests ────────────────────────────────────────────────────


class TestDockerIgnore:
    def test_written_inside_app(self, command_input):
        DOCKER_IGNORE(command_input)
        entry = command_input.tracker.get("apps/cms/.dockerignore")
        assert entry.source == "app:cms"
        assert entry.generator == "files.docker_ignore"
        assert "node_modules" in command_input.fs.read_file("apps/cms/.dockerignore").decode()

    def test_go_app(self):
        input = _input(_go_project())
        DOCKER_IGNORE(input)
        text = input.fs.read_file("services/api/.dockerignore").decode()
        assert "vendor" in text
        assert "node_modules" not in text


class TestPayload:
    def test_public_folder_placeholder(self, command_input):
        PUBLIC_FOLDER(command_input)
        assert command_input.fs.read_file("apps/cms/public/.gitkeep") == b""
        assert "apps/cms/public/.gitkeep" not in command_input.tracker

    def test_public_folder_with_content(self, definition):
        fs = MemoryFilesystem({"apps/cms/public/logo.svg": b"<svg/>"})
        input = CommandInput(fs, definition=definition, silent=True)
        PUBLIC_FOLDER(input)
        assert not fs.exists("apps/cms/public/.gitkeep")

    def test_migration_check(self, command_input):
        MIGRATION_CHECK(command_input)
        path = "apps/cms/scripts/check-deps.cjs"
        assert command_input.fs.read_file(path) == embed_fs().read_file("scripts/check-deps.cjs")
        entry = command_input.tracker.get(path)
        assert entry.scaffold_mode is True
        assert entry.source == "app:cms"

    def test_migration_check_keeps_user_edits(self, definition):
        path = "apps/cms/scripts/check-deps.cjs"
        fs = MemoryFilesystem({path: b"// mine"})
        MIGRATION_CHECK(CommandInput(fs, definition=definition, silent=True))
        assert fs.read_file(path) == b"// mine"

    def test_non_payload_apps_skipped(self):
        input = _input(_go_project())
        PUBLIC_FOLDER(input)
        MIGRATION_CHECK(input)
        assert len(input.fs) == 0


# ── Workflow Tests ───────────────────────────────────────────────────


class TestWorkflows:
    def test_pr_workflow(self, command_input):
        PR_WORKFLOW(command_input)
        text = command_input.fs.read_file(".github/workflows/pr.yaml").decode()
        assert "${{ github.sha }}" in text
        assert "node scripts/check-deps.cjs" in text
        doc = yaml.safe_load(text)
        assert set(doc["jobs"]) == {"drift", "cms"}
        assert doc["jobs"]["cms"]["defaults"]["run"]["working-directory"] == "apps/cms"

    def test_backup_workflows(self, definition_data):
        definition_data["resources"] = [
            {"name": "main-db", "type": "postgres"},
            {"name": "media", "type": "s3", "backup": {"enabled": False}},
        ]
        input = _input(definition_data)
        BACKUP_WORKFLOWS(input)

        path = ".github/workflows/backup-main-db.yaml"
        text = input.fs.read_file(path).decode()
        assert "${{ secrets.MAIN_DB_DATABASE_URL }}" in text
        assert "pg_dump" in text
        assert input.tracker.get(path).source == "resource:main-db"
        assert not input.fs.exists(".github/workflows/backup-media.yaml")

    def test_no_resources_no_backups(self, command_input):
        BACKUP_WORKFLOWS(command_input)
        assert len(command_input.fs) == 0

    def test_secret_prefix(self, definition_data):
        definition_data["resources"] = [{"name": "main-db", "type": "postgres"}]
        resource = Definition.model_validate(definition_data).resources[0]
        assert secret_prefix(resource) == "MAIN_DB"


# ── README Tests ─────────────────────────────────────────────────────


class TestReadme:
    def test_written_once(self, command_input):
        README(command_input)
        text = command_input.fs.read_file("README.md").decode()
        assert text.startswith(f"<!-- {NOTICE} -->")
        assert "# My Site" in text
        assert command_input.tracker.get("README.md").scaffold_mode is True

    def test_existing_readme_kept(self, definition):
        fs = MemoryFilesystem({"README.md": b"# Mine\n"})
        README(CommandInput(fs, definition=definition, silent=True))
        assert fs.read_file("README.md") == b"# Mine\n"
