"""Tests for finch.config — frozen AppConfig and environment loading."""

import dataclasses

import pytest

from finch.config import AppConfig


class TestDefaults:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.port == 8080
        assert config.debug is False
        assert config.secret_key == ""
        assert config.signature_digest == "sha256"
        assert config.auth_cookie_name == "X_AUTH"
        assert config.auth_verify_message == "verified"
        assert config.auth_login_url == "/login"
        assert config.auth_exempt_prefixes == ("/login", "/public/")
        assert config.auth_cookie_secure is None

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000  # type: ignore[misc]


class TestFromEnv:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINCH_HOST", "0.0.0.0")
        monkeypatch.setenv("FINCH_PORT", "9000")
        monkeypatch.setenv("FINCH_DEBUG", "true")
        monkeypatch.setenv("FINCH_SECRET_KEY", "from-env")
        monkeypatch.setenv("FINCH_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("FINCH_SHUTDOWN_TIMEOUT", "3")

        config = AppConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.debug is True
        assert config.secret_key == "from-env"
        assert config.request_timeout == 2.5
        assert config.shutdown_timeout == 3.0

    def test_empty_timeout_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINCH_REQUEST_TIMEOUT", "")
        assert AppConfig.from_env().request_timeout is None

    def test_debug_falsy_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINCH_DEBUG", "0")
        assert AppConfig.from_env().debug is False

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINCH_PORT", "9000")
        assert AppConfig.from_env(port=7000).port == 7000

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEMO_PORT", "1234")
        assert AppConfig.from_env(prefix="DEMO_").port == 1234

    def test_unset_uses_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "HOST",
            "PORT",
            "DEBUG",
            "SECRET_KEY",
            "TEMPLATE_DIR",
            "REQUEST_TIMEOUT",
            "SHUTDOWN_TIMEOUT",
        ):
            monkeypatch.delenv(f"FINCH_{name}", raising=False)
        assert AppConfig.from_env() == AppConfig()
