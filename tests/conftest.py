"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_project_json():
    """Sample JSON describing a small source project."""
    return {
        "src": {
            "index.js": "console.log(1)",
            "utils": {
                "math.js": "export const add = (a, b) => a + b"
            }
        },
        "README.md": "# Demo",
        "package.json": {
            "content": {"name": "demo", "version": "1.0.0"}
        },
        "LICENSE": {"type": "file", "data": "MIT"},
        "empty": {},
        "config": {
            "debug": True,
            "retries": 3,
            "proxy": None
        }
    }


@pytest.fixture
def sample_project_text(sample_project_json):
    """Sample project JSON as text."""
    return json.dumps(sample_project_json)


@pytest.fixture
def deep_json_text():
    """JSON text nested 40 objects deep."""
    return '{"a":' * 40 + '"leaf"' + '}' * 40
