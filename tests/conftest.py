"""Pytest configuration and fixtures for shellactions tests."""

import stat
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from shellactions.config import EngineSettings
from shellactions.editor import EditorBridge
from shellactions.execution import ContextPaths


@pytest.fixture
def engine_settings():
    """Provide test engine settings."""
    return EngineSettings(
        log_level="DEBUG",
        log_format="plain",
        scripts_directory="Scripts",
    )


@pytest.fixture
def sugar_path(tmp_path):
    """Provide a sugar folder with an empty Scripts directory."""
    sugar = tmp_path / "Test.sugar"
    (sugar / "Scripts").mkdir(parents=True)
    return sugar


@pytest.fixture
def make_script(sugar_path):
    """Provide a factory writing executable shell scripts into the sugar."""

    def _make(name: str, body: str, executable: bool = True) -> Path:
        path = sugar_path / "Scripts" / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        mode = path.stat().st_mode
        if executable:
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        else:
            path.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
        return path

    return _make


@pytest.fixture
def context_paths(sugar_path, tmp_path):
    """Provide editor paths pointing at the test sugar."""
    return ContextPaths(
        sugar_path=str(sugar_path),
        project_path=str(tmp_path),
        file_paths=(str(tmp_path / "src" / "main.txt"),),
    )


@pytest.fixture
def mock_bridge():
    """Provide a mocked editor bridge."""
    bridge = MagicMock(spec=EditorBridge)

    bridge.apply_replacements = AsyncMock()
    bridge.insert_snippet = AsyncMock()
    bridge.replace_document = AsyncMock()
    bridge.select_ranges = AsyncMock()
    bridge.show_tooltip = AsyncMock()
    bridge.show_console = AsyncMock()
    bridge.show_html = AsyncMock()
    bridge.show_sheet = AsyncMock()

    return bridge


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the command line entry point."""
    yield
    structlog.reset_defaults()
