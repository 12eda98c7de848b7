from __future__ import annotations

from pathlib import Path

import pytest

from mcpline.config import Settings, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.engine == "echo"
    assert settings.model is None
    assert settings.config_file == Path("mcphost.json")
    assert settings.strict_approval is False
    assert settings.emit_errors is False
    assert settings.effective_log_level == "INFO"


def test_env_prefix_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MCPLINE_MODEL", "ollama:qwen2.5:3b")
    monkeypatch.setenv("MCPLINE_STRICT_APPROVAL", "true")
    monkeypatch.setenv("MCPLINE_LOG_LEVEL", "warning")

    settings = Settings()

    assert settings.model == "ollama:qwen2.5:3b"
    assert settings.strict_approval is True
    assert settings.effective_log_level == "WARNING"


def test_dotenv_file_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("MCPLINE_ENGINE=custom\n", encoding="utf-8")

    assert Settings().engine == "custom"


def test_overrides_skip_none(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MCPLINE_MODEL", "from-env")

    settings = load_settings(model=None, debug=True, engine="echo")

    assert settings.model == "from-env"
    assert settings.debug is True
    assert settings.effective_log_level == "DEBUG"
