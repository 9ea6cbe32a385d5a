"""Environment-driven settings."""

from research_assistant.config import Settings


def test_defaults_without_environment(monkeypatch):
    for name in ("AI_GATEWAY_API_KEY", "LOVABLE_API_KEY", "AI_GATEWAY_MODEL", "API_PORT", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    config = Settings.from_env()
    assert config.api_key is None
    assert config.model == "google/gemini-2.5-flash"
    assert config.api_port == 8000
    assert config.cors_allow_origins == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "secret")
    monkeypatch.setenv("AI_GATEWAY_MODEL", "openai/gpt-5-mini")
    monkeypatch.setenv("AI_GATEWAY_TIMEOUT", "12.5")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = Settings.from_env()
    assert config.api_key == "secret"
    assert config.model == "openai/gpt-5-mini"
    assert config.request_timeout == 12.5
    assert config.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert config.log_level == "DEBUG"


def test_legacy_key_name_is_accepted(monkeypatch):
    monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
    monkeypatch.setenv("LOVABLE_API_KEY", "legacy")
    assert Settings.from_env().api_key == "legacy"


def test_bad_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("API_PORT", "eighty")
    monkeypatch.setenv("AI_GATEWAY_TIMEOUT", "")
    config = Settings.from_env()
    assert config.api_port == 8000
    assert config.request_timeout == 60.0
