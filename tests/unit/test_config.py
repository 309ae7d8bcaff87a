"""Unit tests for the credential store."""

import json
import stat

import pytest

from gwirian_cli.config import (
    DEFAULT_BASE_URL,
    CLIConfig,
    clear_token,
    load_config,
    normalize_base_url,
    set_base_url,
    set_token,
)


@pytest.mark.cli_unit
class TestLoadConfig:
    """Tests for reading config.json."""

    def test_missing_file_gives_defaults(self, config_file):
        config = load_config()

        assert config == CLIConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert not config.has_token

    def test_reading_never_creates_file(self, config_file):
        load_config()

        assert not config_file.exists()
        assert not config_file.parent.exists()

    def test_malformed_json_gives_defaults(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{not json")

        assert load_config() == CLIConfig()

    def test_non_object_gives_defaults(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("[1, 2]")

        assert load_config() == CLIConfig()

    def test_stored_values(self, stored_credential):
        config = load_config()

        assert config.token == "gw_test_token"
        assert config.base_url == "https://api.test"

    def test_empty_token_is_no_token(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"token": "", "baseUrl": "https://x.test"}))

        config = load_config()
        assert config.token is None
        assert config.base_url == "https://x.test"
        assert not load_config().has_token

    def test_missing_base_url_uses_default(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"token": "abc"}))

        assert load_config().base_url == DEFAULT_BASE_URL


@pytest.mark.cli_unit
class TestWriteConfig:
    """Tests for the mutating operations."""

    def test_set_token_persists_with_owner_only_mode(self, config_file):
        set_token("abc")

        data = json.loads(config_file.read_text())
        assert data == {"token": "abc", "baseUrl": DEFAULT_BASE_URL}
        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600
        assert stat.S_IMODE(config_file.parent.stat().st_mode) == 0o700

    def test_set_token_keeps_base_url(self, config_file):
        set_base_url("https://staging.gwirian.test")
        set_token("abc")

        assert load_config().base_url == "https://staging.gwirian.test"

    def test_set_base_url_keeps_token(self, stored_credential):
        set_base_url("https://other.test/")

        config = load_config()
        assert config.token == "gw_test_token"
        assert config.base_url == "https://other.test"

    def test_clear_token_keeps_base_url(self, stored_credential):
        clear_token()

        data = json.loads(stored_credential.read_text())
        assert data["token"] is None
        assert data["baseUrl"] == "https://api.test"
        assert not load_config().has_token

    def test_clear_without_file_writes_defaults(self, config_file):
        clear_token()

        assert json.loads(config_file.read_text()) == {
            "token": None,
            "baseUrl": DEFAULT_BASE_URL,
        }


@pytest.mark.cli_unit
class TestNormalizeBaseUrl:
    @pytest.mark.parametrize(
        "raw,normalized",
        [
            ("https://a.test/", "https://a.test"),
            ("  https://a.test  ", "https://a.test"),
            ("https://a.test", "https://a.test"),
            (" https://a.test/ ", "https://a.test"),
        ],
    )
    def test_values(self, raw, normalized):
        assert normalize_base_url(raw) == normalized
