"""Tests for environment-driven settings."""

import pytest

from pydantic import ValidationError

from app.config import Settings


CREDENTIAL_VARS = ["GEMINI_API_KEY", "COHERE_API_KEY", "TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "CORS_ORIGINS"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestDefaults:
    def test_runs_without_configuration(self):
        settings = make_settings()

        assert settings.port == 5000
        assert settings.max_pinned_bookmarks == 3
        assert settings.default_page_size == 9
        assert settings.max_page_size == 50
        assert settings.get_available_ai_providers() == ["keyword"]
        assert settings.has_twilio_configured is False


class TestValidators:
    def test_cors_origins_from_string(self):
        settings = make_settings(cors_origins="http://localhost:3000, https://saver.example.com,")

        assert settings.cors_origins == ["http://localhost:3000", "https://saver.example.com"]

    def test_log_level_normalized(self):
        assert make_settings(log_level="WARNING").log_level == "warning"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            make_settings(log_level="verbose")

    def test_invalid_app_env(self):
        with pytest.raises(ValidationError):
            make_settings(app_env="qa")

    def test_blank_keys_are_unset(self):
        settings = make_settings(gemini_api_key="   ", cohere_api_key="", twilio_auth_token=" ")

        assert settings.gemini_api_key is None
        assert settings.cohere_api_key is None
        assert settings.twilio_auth_token is None

    def test_keys_are_stripped(self):
        assert make_settings(gemini_api_key=" abc ").gemini_api_key == "abc"


class TestProviders:
    def test_priority_order(self):
        settings = make_settings(gemini_api_key="g", cohere_api_key="c")

        assert settings.get_available_ai_providers() == ["gemini", "cohere", "keyword"]

    def test_cohere_only(self):
        assert make_settings(cohere_api_key="c").get_available_ai_providers() == ["cohere", "keyword"]

    def test_twilio_needs_both_values(self):
        assert make_settings(twilio_account_sid="AC1").has_twilio_configured is False
        assert make_settings(twilio_account_sid="AC1", twilio_auth_token="t").has_twilio_configured is True

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")

        assert make_settings().has_gemini_configured is True
