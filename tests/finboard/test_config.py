# ruff: noqa: S101,S105,S106
"""Tests for settings loading and Plaid credential handling."""

import pytest
from pydantic import ValidationError

from finboard.config import (
    FinboardSettings,
    PlaidConfig,
    clear_settings_cache,
    get_settings,
    load_settings,
)
from finboard.errors import ConfigurationWarning


class TestFinboardSettings:
    """Environment mapping into FinboardSettings."""

    @pytest.mark.unit
    def test_plaid_variables_fold_into_plaid_section(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "cid")
        monkeypatch.setenv("PLAID_SECRET", "sec")
        monkeypatch.setenv("PLAID_ENV", "Production")

        settings = FinboardSettings()

        assert settings.plaid.client_id == "cid"
        assert settings.plaid.secret == "sec"
        assert settings.plaid.environment == "production"
        assert settings.plaid.has_credentials

    @pytest.mark.unit
    def test_defaults_without_environment(self) -> None:
        settings = FinboardSettings()

        assert settings.plaid.environment == "sandbox"
        assert settings.plaid.client_name == "Finance Tracker"
        assert settings.plaid.products == ("transactions",)
        assert settings.plaid.country_codes == ("US",)
        assert settings.plaid.days_lookback == 30
        assert settings.plaid.page_size == 500
        assert settings.server.port == 5000
        assert not settings.plaid.has_credentials

    @pytest.mark.unit
    def test_unknown_plaid_env_falls_back_to_sandbox(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "cid")
        monkeypatch.setenv("PLAID_ENV", "staging")

        assert FinboardSettings().plaid.environment == "sandbox"

    @pytest.mark.unit
    def test_nested_server_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINBOARD_SERVER__PORT", "8080")

        assert FinboardSettings().server.port == 8080

    @pytest.mark.unit
    def test_explicit_plaid_section_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "from-env")

        settings = FinboardSettings(plaid=PlaidConfig(client_id="explicit"))

        assert settings.plaid.client_id == "explicit"

    @pytest.mark.unit
    def test_page_size_is_capped_at_500(self) -> None:
        with pytest.raises(ValidationError):
            PlaidConfig(page_size=501)

    @pytest.mark.unit
    def test_settings_are_immutable(self) -> None:
        settings = FinboardSettings()

        with pytest.raises(ValidationError):
            settings.debug = True  # type: ignore[misc]


class TestMissingCredentials:
    """Missing credentials warn at startup without failing."""

    @pytest.mark.unit
    def test_load_settings_warns_and_succeeds(self) -> None:
        with pytest.warns(ConfigurationWarning, match="PLAID_CLIENT_ID, PLAID_SECRET"):
            settings = load_settings()

        assert settings.plaid.missing_credentials() == ["PLAID_CLIENT_ID", "PLAID_SECRET"]

    @pytest.mark.unit
    def test_only_missing_secret_is_reported(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "cid")

        with pytest.warns(ConfigurationWarning) as record:
            load_settings()

        assert "PLAID_SECRET" in str(record[0].message)
        assert "PLAID_CLIENT_ID" not in str(record[0].message)

    @pytest.mark.unit
    def test_no_warning_with_credentials(
        self, monkeypatch: pytest.MonkeyPatch, recwarn: pytest.WarningsRecorder
    ) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "cid")
        monkeypatch.setenv("PLAID_SECRET", "sec")

        settings = load_settings()

        assert settings.plaid.has_credentials
        assert not [w for w in recwarn if issubclass(w.category, ConfigurationWarning)]


class TestSettingsCache:
    """Process-wide settings are loaded once until the cache is cleared."""

    @pytest.mark.unit
    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAID_CLIENT_ID", "first")
        monkeypatch.setenv("PLAID_SECRET", "sec")
        first = get_settings()

        monkeypatch.setenv("PLAID_CLIENT_ID", "second")
        assert get_settings() is first

        clear_settings_cache()
        assert get_settings().plaid.client_id == "second"
