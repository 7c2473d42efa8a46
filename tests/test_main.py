import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import Settings, get_settings
from main import main


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PAYMENTS_LOG_LEVEL", raising=False)
        monkeypatch.delenv("PAYMENTS_ENFORCE_CLIENT_MATCH", raising=False)
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.enforce_client_match is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PAYMENTS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PAYMENTS_ENFORCE_CLIENT_MATCH", "true")
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.enforce_client_match is True

    def test_cached(self):
        assert get_settings() is get_settings()


class TestMain:
    def test_writes_accounts_csv(self, tmp_path, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 2, 1, 2.0",
            "deposit, 1, 2, 1.0",
            "withdrawal, 1, 3, 0.25",
            "dispute, 2, 1,",
        ]))

        main([str(csv_file)])

        assert capsys.readouterr().out.splitlines() == [
            "client,available,held,total,locked",
            "1,0.7500,0.0000,0.7500,false",
            "2,0.0000,2.0000,2.0000,false",
        ]

    def test_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "Usage" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.csv")])
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_invalid_utf8_row_is_skipped(self, tmp_path, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_bytes(b"type,client,tx,amount\ndeposit,1,1,2.0\ndeposit,1,2,\xff\xfe1.0\n")

        main([str(csv_file)])

        assert capsys.readouterr().out.splitlines() == [
            "client,available,held,total,locked",
            "1,2.0000,0.0000,2.0000,false",
        ]
