from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for rename logs and configuration dictionaries.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def yguard_log() -> str:
    """Path to the sample yGuard rename log."""
    return str(FIXTURES_DIR / "renamelog.xml")


@pytest.fixture
def proguard_log() -> str:
    """Path to the sample ProGuard mapping file."""
    return str(FIXTURES_DIR / "mapping.txt")


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """
    Create a small Java source tree matching the sample yGuard log.

    Structure:
    /project
      /.backup/com/hvilela/drawer/Columns.java   (hidden, never searched)
      /src/main/java/com/hvilela/Wallpaperer.java
      /src/main/java/com/hvilela/drawer/Columns.java
      /src/main/java/com/hvilela/drawer/Drawer.java
      /lib/com/hvilela/drawer/Drawer.jar
    """
    root = tmp_path / "project"
    for rel in (
        ".backup/com/hvilela/drawer/Columns.java",
        "src/main/java/com/hvilela/Wallpaperer.java",
        "src/main/java/com/hvilela/drawer/Columns.java",
        "src/main/java/com/hvilela/drawer/Drawer.java",
        "lib/com/hvilela/drawer/Drawer.jar",
    ):
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("// source", encoding="utf-8")
    return root


@pytest.fixture
def mock_config_dict(yguard_log: str, java_project: Path) -> Dict[str, Any]:
    """
    Return a valid, complete release configuration for testing.

    Mirrors the keys of 'deobfuscator4j.domain.config.get_default_config'.
    """
    return {
        "api_host": "https://squash.example.com",
        "api_key": "a1b2c3",
        "timeout": 5,
        "skip_verification": False,
        "environment": "production",
        "build": "1.2.3",
        "renamelog": yguard_log,
        "project_dir": str(java_project),
    }
