"""
Unit tests for settings loading and inference provider resolution.
"""

import pytest

from symptom_checker.core.config import Settings, load_settings

_ENV_VARS = (
    "SERPER_API_KEY",
    "INFERENCE_PROVIDER",
    "OPENAI_API_KEY",
    "HF_API_KEY",
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "LOG_STORE_ENABLED",
    "LOG_DB_PATH",
    "HEALTH_PROBE_ENABLED",
    "HEALTH_PROBE_INTERVAL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.serper_api_key == ""
    assert settings.log_store_enabled is False
    assert settings.health_probe_enabled is True
    assert settings.health_probe_interval == 60
    assert settings.resolved_provider() == "huggingface"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERPER_API_KEY", "  serper  ")
    monkeypatch.setenv("LOG_STORE_ENABLED", "true")
    monkeypatch.setenv("LOG_DB_PATH", "/tmp/x.db")
    monkeypatch.setenv("HEALTH_PROBE_ENABLED", "0")
    monkeypatch.setenv("HEALTH_PROBE_INTERVAL", "30")
    settings = load_settings()
    assert settings.serper_api_key == "serper"
    assert settings.log_store_enabled is True
    assert settings.log_db_path == "/tmp/x.db"
    assert settings.health_probe_enabled is False
    assert settings.health_probe_interval == 30


def test_invalid_provider_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INFERENCE_PROVIDER", "bard")
    with pytest.raises(ValueError):
        load_settings()


@pytest.mark.parametrize(
    "settings, expected",
    [
        (Settings(openai_api_key="sk", cloudflare_account_id="a", cloudflare_api_token="t"), "openai"),
        (Settings(cloudflare_account_id="a", cloudflare_api_token="t"), "cloudflare"),
        (Settings(cloudflare_account_id="a"), "huggingface"),
        (Settings(inference_provider="cloudflare", openai_api_key="sk"), "cloudflare"),
    ],
)
def test_resolved_provider(settings: Settings, expected: str) -> None:
    assert settings.resolved_provider() == expected
