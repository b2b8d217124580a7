"""
Tests for CLI commands — scaffold, update, drift, validate and version.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from webkit import __version__
from webkit.main import cli

# ── Global Tests ─────────────────────────────────────────────────────


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ["scaffold", "update", "drift", "validate", "version"]:
            assert command in result.output

    def test_version_flag(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_command(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"WebKit {__version__}"

    def test_scaffold_help_lists_targets(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["scaffold", "--help"])
        assert result.exit_code == 0
        for target in ["code-style", "git", "package-json", "cicd", "readme"]:
            assert target in result.output


# ── Validate Tests ───────────────────────────────────────────────────


class TestValidateCommand:
    def test_valid(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "validate"])
        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_missing_app_path(self, project_dir: Path):
        (project_dir / "apps" / "cms").rmdir()
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "validate"])
        assert result.exit_code == 1
        assert "Validation failed with 1 error(s)" in result.output
        assert "1. app 'cms'" in result.output

    def test_json(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "validate", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"valid": True, "errors": []}

    def test_no_definition(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(tmp_path), "validate"])
        assert result.exit_code == 1
        assert "app.json" in result.output


# ── Scaffold & Update Tests ──────────────────────────────────────────


class TestScaffoldCommand:
    def test_scaffold_creates_project_files(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        assert result.exit_code == 0, result.output
        assert "Scaffolding complete" in result.output
        assert "created package.json" in result.output
        for path in ["README.md", "package.json", ".gitignore", "apps/cms/.dockerignore", ".webkit/manifest.json"]:
            assert (project_dir / path).is_file(), path

    def test_scaffold_keeps_existing_readme(self, project_dir: Path):
        (project_dir / "README.md").write_text("# Mine\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        assert result.exit_code == 0
        assert (project_dir / "README.md").read_text() == "# Mine\n"
        assert "skipped README.md" in result.output

    def test_single_target(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "scaffold", "git"])
        assert result.exit_code == 0, result.output
        assert (project_dir / ".gitignore").is_file()
        assert not (project_dir / "package.json").exists()

    def test_silent(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "--silent", "scaffold"])
        assert result.exit_code == 0
        assert result.output == ""
        assert (project_dir / "package.json").is_file()

    def test_missing_definition_fails(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(tmp_path), "scaffold"])
        assert result.exit_code == 2
        assert "Could not find app.json" in result.output
        assert not (tmp_path / ".webkit").exists()


class TestUpdateCommand:
    def test_update_restores_edited_file(self, project_dir: Path):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        target = project_dir / "apps" / "cms" / ".dockerignore"
        original = target.read_text()
        target.write_text("user modified")

        result = runner.invoke(cli, ["-C", str(project_dir), "update"])
        assert result.exit_code == 0, result.output
        assert "Update complete" in result.output
        assert target.read_text() == original

    def test_update_json(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "update", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["pipeline"] == "update"
        assert "package.json" in data["tracked"]
        assert data["orphans"] == []

    def test_update_reports_orphans(self, project_dir: Path, definition_data: dict):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "update"])
        definition_data["apps"] = []
        (project_dir / "app.json").write_text(json.dumps(definition_data))

        result = runner.invoke(cli, ["-C", str(project_dir), "update"])
        assert result.exit_code == 0
        assert "No longer generated" in result.output
        assert "apps/cms/.dockerignore" in result.output
        assert (project_dir / "apps" / "cms" / ".dockerignore").exists()

    def test_update_prune(self, project_dir: Path, definition_data: dict):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "update"])
        definition_data["apps"] = []
        (project_dir / "app.json").write_text(json.dumps(definition_data))

        result = runner.invoke(cli, ["-C", str(project_dir), "update", "--prune", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert "apps/cms/.dockerignore" in data["pruned"]
        assert data["orphans"] == []
        assert not (project_dir / "apps" / "cms" / ".dockerignore").exists()

        result = runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert result.exit_code == 0, result.output


# ── Drift Tests ──────────────────────────────────────────────────────


class TestDriftCommand:
    def test_clean_project(self, project_dir: Path):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        result = runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert result.exit_code == 0, result.output
        assert "No drift detected" in result.output

    def test_manual_modification(self, project_dir: Path):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        (project_dir / "apps" / "cms" / ".dockerignore").write_text("user modified")

        result = runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert result.exit_code == 1
        assert "Manual modifications detected" in result.output
        assert "apps/cms/.dockerignore" in result.output
        assert "(app:cms)" in result.output
        assert "webkit update" in result.output

    def test_outdated_and_missing(self, project_dir: Path, definition_data: dict):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        definition_data["project"]["description"] = "Changed"
        (project_dir / "app.json").write_text(json.dumps(definition_data))
        (project_dir / ".gitignore").unlink()

        result = runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert result.exit_code == 1
        assert "Outdated files detected" in result.output
        assert "Missing files detected" in result.output

    def test_json(self, project_dir: Path):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        (project_dir / "package.json").unlink()

        result = runner.invoke(cli, ["-C", str(project_dir), "drift", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["drift"] is True
        assert data["entries"] == [
            {"path": "package.json", "reason": "new", "source": "project", "generator": "files.package_json"}
        ]

    def test_no_manifest(self, project_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert result.exit_code == 2
        assert "No manifest found" in result.output

    def test_drift_leaves_disk_alone(self, project_dir: Path):
        runner = CliRunner()
        runner.invoke(cli, ["-C", str(project_dir), "scaffold"])
        target = project_dir / "apps" / "cms" / ".dockerignore"
        target.write_text("user modified")
        manifest = (project_dir / ".webkit" / "manifest.json").read_bytes()

        runner.invoke(cli, ["-C", str(project_dir), "drift"])
        assert target.read_text() == "user modified"
        assert (project_dir / ".webkit" / "manifest.json").read_bytes() == manifest
