"""
Shared pytest fixtures and configuration.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict

import pytest

from codedigest.core.config import build_config
from codedigest.core.diagnostics import DiagnosticsCollector
from codedigest.core.models import FileRecord


def write_tree(base_dir: Path, files: Dict[str, str]) -> None:
    """Create files (and parent directories) from a ``{relative_path: content}`` mapping."""
    for relative_path, content in files.items():
        path = base_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def diagnostics():
    return DiagnosticsCollector()


@pytest.fixture
def sample_project(temp_dir):
    """The example scenario: one kept source file next to ignored and unsupported files."""
    write_tree(
        temp_dir,
        {
            "src/a.ts": "x\n y\n z",
            "node_modules/dep.js": "module.exports = 1;\n",
            "build/out.js": "console.log('built');\n",
            "README.md": "# readme\n",
        },
    )
    return temp_dir


@pytest.fixture
def mock_config(temp_dir):
    """Config rooted at temp_dir that does not persist the artifact."""
    return build_config(temp_dir, {"output_file_name": None})


@pytest.fixture
def sample_records():
    return [
        FileRecord(path="src/app.ts", content="a\nb", language="typescript", line_count=2, size=3),
        FileRecord(path="src/util.py", content="x", language="python", line_count=1, size=1),
        FileRecord(path="lib/main.ts", content="one\ntwo\nthree\n", language="typescript", line_count=4, size=14),
    ]


@pytest.fixture
def make_tree(temp_dir):
    """Return a helper that writes ``{relative_path: content}`` under temp_dir."""

    def _make(files: Dict[str, str]) -> Path:
        write_tree(temp_dir, files)
        return temp_dir

    return _make
