import pytest
from pydantic import ValidationError

from docfill.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_layout_engine(self) -> None:
        s = Settings()
        assert s.layout_engine == "pdfplumber"

    def test_default_template_source(self) -> None:
        s = Settings()
        assert s.template_source == "filesystem"
        assert s.template_fetch_timeout_seconds == 10.0

    def test_default_collection_dirs(self) -> None:
        s = Settings()
        assert s.collection_template_dirs == ["notificação", "notificacao"]

    def test_default_letter_locale(self) -> None:
        s = Settings()
        assert s.letter_city == "Toledo"
        assert s.letter_timezone == "America/Sao_Paulo"
        assert s.keep_company_above_tax_id is True


class TestSettingsFromEnv:
    def test_loads_layout_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYOUT_ENGINE", "pymupdf")
        s = Settings()
        assert s.layout_engine == "pymupdf"

    def test_loads_fetch_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEMPLATE_FETCH_TIMEOUT_SECONDS", "2.5")
        s = Settings()
        assert s.template_fetch_timeout_seconds == 2.5

    def test_loads_slot_trading_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEP_COMPANY_ABOVE_TAX_ID", "false")
        s = Settings()
        assert s.keep_company_above_tax_id is False

    def test_loads_collection_dirs_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COLLECTION_TEMPLATE_DIRS", '["cartas"]')
        s = Settings()
        assert s.collection_template_dirs == ["cartas"]


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEMPLATE_FETCH_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_slot_trading_flag_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEP_COMPANY_ABOVE_TAX_ID", "maybe")
        with pytest.raises(ValidationError):
            Settings()
