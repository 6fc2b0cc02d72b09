from pathlib import Path
from typing import Dict

import pytest


def build_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``; a trailing ``/`` makes a directory."""
    for rel, content in files.items():
        target = root / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def tree(tmp_path):
    def _make(files: Dict[str, str]) -> Path:
        return build_tree(tmp_path, files)
    return _make
