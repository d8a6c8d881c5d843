"""Testes das settings carregadas do ambiente."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    DedupeSettings,
    NeynarSettings,
    TelegramSettings,
    get_base_settings,
    get_dedupe_settings,
    get_neynar_settings,
    get_telegram_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    for getter in (get_base_settings, get_dedupe_settings, get_neynar_settings, get_telegram_settings):
        getter.cache_clear()
    yield
    for getter in (get_base_settings, get_dedupe_settings, get_neynar_settings, get_telegram_settings):
        getter.cache_clear()


class TestNeynarSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("NEYNAR_WEBHOOK_SECRET", "NEYNAR_API_KEY", "NEYNAR_WEBHOOK_PATH"):
            monkeypatch.delenv(name, raising=False)

        settings = get_neynar_settings()

        assert settings.webhook_path == "/webhooks/neynar"
        assert settings.profile_cache_ttl_seconds == 600
        assert settings.signature_required is False
        assert settings.bulk_users_endpoint == "https://api.neynar.com/v2/farcaster/user/bulk/"

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEYNAR_WEBHOOK_SECRET", "s")
        monkeypatch.setenv("NEYNAR_API_KEY", "k")
        monkeypatch.setenv("PROFILE_CACHE_TTL_SECONDS", "30")
        monkeypatch.setenv("NEYNAR_WEBHOOK_PATH", "/hooks/fc")

        settings = get_neynar_settings()

        assert settings.signature_required is True
        assert settings.api_key == "k"
        assert settings.profile_cache_ttl_seconds == 30
        assert settings.webhook_path == "/hooks/fc"
        assert settings.validate() == []

    def test_validate_reports_problems(self) -> None:
        errors = NeynarSettings(webhook_path="hooks", profile_cache_ttl_seconds=0).validate()
        assert any("NEYNAR_WEBHOOK_SECRET" in error for error in errors)
        assert any("NEYNAR_WEBHOOK_PATH" in error for error in errors)
        assert any("PROFILE_CACHE_TTL_SECONDS" in error for error in errors)


class TestTelegramSettings:
    def test_chat_fallbacks(self) -> None:
        settings = TelegramSettings(bot_token="t", follow_chat_id="f", trade_chat_id="tr")
        assert settings.resolved_activity_chat_id == "f"
        assert settings.resolved_trade_chat_id == "tr"

    def test_send_message_endpoint_requires_token(self) -> None:
        with pytest.raises(ValueError):
            _ = TelegramSettings().send_message_endpoint

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "abc")
        monkeypatch.setenv("TELEGRAM_CHAT_ID", "-100")
        monkeypatch.setenv("TELEGRAM_ACTIVITY_CHAT_ID", "-200")
        monkeypatch.delenv("TELEGRAM_TRADE_CHAT_ID", raising=False)

        settings = get_telegram_settings()

        assert settings.enabled is True
        assert settings.resolved_activity_chat_id == "-200"
        assert settings.resolved_trade_chat_id == "-100"
        assert settings.send_message_endpoint == "https://api.telegram.org/botabc/sendMessage"

    def test_validate_without_token(self) -> None:
        assert "TELEGRAM_BOT_TOKEN não configurado" in TelegramSettings().validate()


class TestBaseAndDedupe:
    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        assert get_base_settings().is_production is True

    def test_fails_fast_outside_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "stage")
        assert get_base_settings().fails_fast is True
        assert BaseSettings().fails_fast is False

    def test_dedupe_capacity_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEDUPE_CAPACITY", "10")
        assert get_dedupe_settings().capacity == 10

    def test_invalid_values(self) -> None:
        assert DedupeSettings(capacity=0).validate()
        assert BaseSettings(port=0).validate()
