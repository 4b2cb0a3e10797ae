"""Shared pytest fixtures for bento.cli tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in ("BENTO_NAME", "BENTO_PREFIX", "BENTO_EVIL", "BENTO_PROTESTING",
                "BENTO_ANTHROPIC_KEY", "BENTO_MODEL", "BENTO_MAX_TOKENS", "API_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    return dotenv


@pytest.fixture()
def dotenv_path(_isolate_env: Path) -> Path:
    return _isolate_env
