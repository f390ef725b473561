"""Shared fixtures for the mdpreview test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdpreview.engine import MarkdownRenderer


@pytest.fixture
def renderer() -> MarkdownRenderer:
    """Return a fresh renderer; instances hold no state between calls."""
    return MarkdownRenderer()


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``MDPREVIEW_CONFIG`` at a minimal config inside ``tmp_path``."""
    path = tmp_path / "mdpreview.yaml"
    path.write_text("large_file_threshold: 5000000\n", encoding="utf-8")
    monkeypatch.setenv("MDPREVIEW_CONFIG", str(path))
    return path
