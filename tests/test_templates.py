"""
Tests for the template bundle — helper functions, lookup and startup validation.
"""

from pathlib import Path

import pytest

from webkit.core.errors import TemplateNotFoundError
from webkit.core.templates import (
    REQUIRED_TEMPLATES,
    TemplateRegistry,
    embed_fs,
    load_template,
    must_load_template,
    validate_bundle,
)
from webkit.core.templates.funcs import (
    camelcase,
    gh_env,
    gh_expression,
    gh_input,
    gh_secret,
    gh_var,
    kebabcase,
    pretty_key,
    snakecase,
    template_funcs,
    trim_prefix,
    trim_suffix,
)

# ── GitHub Expression Tests ──────────────────────────────────────────


class TestGitHubFuncs:
    def test_expression(self):
        assert gh_expression("github.sha") == "${{ github.sha }}"

    def test_var(self):
        assert gh_var("PROD_URL") == "${{ vars.PROD_URL }}"

    def test_secret(self):
        assert gh_secret("API_TOKEN") == "${{ secrets.API_TOKEN }}"

    def test_input(self):
        assert gh_input("ref") == "${{ inputs.ref }}"

    def test_env(self):
        assert gh_env("NODE_ENV") == "${{ env.NODE_ENV }}"

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("server_type", "Server Type"),
            ("location", "Location"),
            ("ssh_keys", "Ssh Keys"),
            ("SSH_KEYS", "SSH KEYS"),
            ("nbg1", "Nbg1"),
            ("a__b", "A B"),
            ("__a__b__", "A B"),
            ("émile_ñu", "Émile Ñu"),
            ("straße_ß", "Straße ß"),
            ("", ""),
        ],
    )
    def test_pretty_key(self, key, expected):
        assert pretty_key(key) == expected


class TestStringFuncs:
    def test_case_conversions(self):
        assert snakecase("MainDatabase") == "main_database"
        assert kebabcase("mainDatabase") == "main-database"
        assert camelcase("main_database") == "MainDatabase"

    def test_trim(self):
        assert trim_prefix("apps/cms", "apps/") == "cms"
        assert trim_prefix("cms", "apps/") == "cms"
        assert trim_suffix("pr.yaml", ".yaml") == "pr"

    def test_bundle_has_expected_names(self):
        funcs = template_funcs()
        for name in ["upper", "lower", "trim", "snakecase", "gh_var", "gh_secret", "pretty_key"]:
            assert name in funcs


# ── Registry Tests ───────────────────────────────────────────────────


class TestRegistry:
    def test_load_known_template(self):
        tpl = load_template("dockerignore.j2")
        assert tpl.name == "dockerignore.j2"

    def test_unknown_template(self):
        with pytest.raises(TemplateNotFoundError) as exc:
            load_template("does-not-exist.j2")
        assert exc.value.name == "does-not-exist.j2"

    def test_must_load_unknown(self):
        with pytest.raises(TemplateNotFoundError):
            must_load_template("missing/also-missing.j2")

    def test_validate_bundle(self):
        validate_bundle()

    def test_validate_reports_missing(self, tmp_path: Path):
        (tmp_path / "only.j2").write_text("x")
        registry = TemplateRegistry(tmp_path)
        with pytest.raises(TemplateNotFoundError) as exc:
            registry.validate(("only.j2", "gone.j2"))
        assert exc.value.name == "gone.j2"

    def test_names_cover_required(self):
        names = TemplateRegistry().names()
        assert set(REQUIRED_TEMPLATES) <= set(names)

    def test_helpers_available_in_templates(self, tmp_path: Path):
        (tmp_path / "t.j2").write_text('{{ gh_var("X") }} {{ "main_db" | snakecase | upper }}\n')
        registry = TemplateRegistry(tmp_path)
        assert registry.load("t.j2").render() == "${{ vars.X }} MAIN_DB\n"

    def test_builtin_filters_not_shadowed(self, tmp_path: Path):
        (tmp_path / "t.j2").write_text("{{ 'a b' | title }}|{{ ['x', 'y'] | join(',') }}")
        registry = TemplateRegistry(tmp_path)
        assert registry.load("t.j2").render() == "A B|x,y"

    def test_embed_is_read_only(self):
        embed = embed_fs()
        assert embed.read_file("scripts/check-deps.cjs")
        with pytest.raises(PermissionError):
            embed.write_file("scripts/new.cjs", b"")
