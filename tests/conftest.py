# File: tests/conftest.py

import os
import sys
import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())

from compdb.core.config.settings import settings


@pytest.fixture
def make_fragment():
    """
    Writes a compile_commands.json with raw bytes into `directory`.
    """
    def _make(directory, content: bytes):
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / settings.TARGET_FILE_NAME
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def module_tree(tmp_path, make_fragment):
    """
    A multi-module source tree:
    /src
      /core/build/compile_commands.json   -> [{"a":1}]
      /net/build/compile_commands.json    -> [{"b":2}]
      /docs/readme.txt
      /empty/build/compile_commands.json  -> []
    """
    root = tmp_path / "src"
    make_fragment(root / "core" / "build", b'[{"a":1}]')
    make_fragment(root / "net" / "build", b'[{"b":2}]')
    make_fragment(root / "empty" / "build", b"[]")
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "readme.txt").write_text("not a fragment")
    return root
