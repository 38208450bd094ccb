from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from plastic_detection_client.crosscutting.config import ClientSettings, load_settings


def test_defaults_point_at_local_service() -> None:
    settings = load_settings()

    assert settings.detect_url == "http://127.0.0.1:5000/detect"
    assert settings.upload_field == "image"
    assert settings.request_timeout == 30.0
    assert settings.preview_dir is None


def test_environment_variables_use_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDC_SERVICE_URL", "http://detector:9000/")
    monkeypatch.setenv("PDC_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("PDC_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.detect_url == "http://detector:9000/detect"
    assert settings.request_timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDC_SERVICE_URL", "http://from-env:1")

    settings = load_settings(service_url="http://from-cli:2", request_timeout=None)

    assert settings.service_url == "http://from-cli:2"
    assert settings.request_timeout == 30.0


def test_env_file_is_read_from_working_directory(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("PDC_DETECT_PATH=predict\n")

    assert load_settings().detect_url == "http://127.0.0.1:5000/predict"


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ClientSettings(request_timeout=0)
