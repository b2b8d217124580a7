"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from webkit.adapters.filesystem.memory import MemoryFilesystem
from webkit.core.models.definition import Definition
from webkit.core.pipeline import CommandInput


def sample_definition_data() -> dict:
    """A one-app project: Payload CMS under apps/cms."""
    return {
        "webkit_version": "0.1.0",
        "project": {
            "name": "my-site",
            "title": "My Site",
            "description": "A test site",
            "repo": "acme/my-site",
        },
        "apps": [
            {
                "name": "cms",
                "title": "CMS",
                "type": "payload-cms",
                "path": "./apps/cms",
            }
        ],
    }


@pytest.fixture
def definition_data() -> dict:
    return sample_definition_data()


@pytest.fixture
def definition(definition_data: dict) -> Definition:
    return Definition.model_validate(definition_data)


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    return MemoryFilesystem()


@pytest.fixture
def command_input(memory_fs: MemoryFilesystem, definition: Definition) -> CommandInput:
    """Silent input over an empty in-memory project."""
    return CommandInput(memory_fs, definition=definition, silent=True)


@pytest.fixture
def project_dir(tmp_path: Path, definition_data: dict) -> Path:
    """A project on disk with app.json and the cms app directory."""
    (tmp_path / "app.json").write_text(json.dumps(definition_data, indent=2))
    (tmp_path / "apps" / "cms").mkdir(parents=True)
    return tmp_path
