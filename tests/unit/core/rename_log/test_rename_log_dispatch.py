from __future__ import annotations

"""
Unit tests for rename log format selection.
"""

import logging
from pathlib import Path

import pytest

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.core.rename_log import parse_rename_log


def test_xml_selects_yguard(yguard_log: str) -> None:
    """TC-01: Verify .xml logs are read as yGuard."""
    ns = parse_rename_log(yguard_log)
    assert isinstance(ns, Namespace)
    assert ns.obfuscated_package("com.hvilela.A") is not None


def test_txt_selects_proguard(proguard_log: str) -> None:
    """TC-02: Verify .txt logs are read as ProGuard."""
    ns = parse_rename_log(proguard_log)
    assert ns.obfuscated_class("com.example.account.manager.client.d") is not None


def test_unknown_extension_returns_none(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """TC-03: Verify unsupported formats yield None and a warning."""
    log = tmp_path / "mapping.json"
    log.write_text("{}", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert parse_rename_log(str(log)) is None
    assert "Unsupported rename log format" in caplog.text
