"""Shared fixtures."""

from pathlib import Path

import pytest


def write_files(root: Path, files: dict[str, str | bytes]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def todo_repo(tmp_path):
    """A small project with TODO/FIXME/WIP markers in some files."""
    return write_files(
        tmp_path,
        {
            "src/auth.js": "function login() {\n  // TODO fix\n  return true;\n}\n",
            "src/api.js": "// WIP: endpoints\n// todo: pagination\n// TODO: auth\n",
            "src/clean.js": "export const ok = 1;\n",
            "README.md": "# Project\n",
        },
    )


@pytest.fixture
def clean_repo(tmp_path):
    return write_files(
        tmp_path,
        {
            "src/index.js": "console.log('hello');\n",
            "README.md": "# Clean\n",
        },
    )
