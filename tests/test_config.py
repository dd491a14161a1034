"""Tests for settings loading."""

from food_detection.config import Settings, is_debug_environment


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("ROBOFLOW_API_KEY", raising=False)
    monkeypatch.delenv("ROBOFLOW_MODEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.roboflow_api_key is None
    assert settings.roboflow_model == "food-detection-ysgqf/2"
    assert settings.roboflow_base_url == "https://detect.roboflow.com"
    assert settings.detection_timeout_seconds == 30.0
    assert settings.max_upload_bytes == 10 * 1024 * 1024


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("ROBOFLOW_API_KEY", "env-key")
    monkeypatch.setenv("ROBOFLOW_MODEL", "custom-model/7")

    settings = Settings(_env_file=None)

    assert settings.roboflow_api_key == "env-key"
    assert settings.roboflow_model == "custom-model/7"


def test_is_debug_environment() -> None:
    assert is_debug_environment("local")
    assert is_debug_environment("Development")
    assert not is_debug_environment("production")
