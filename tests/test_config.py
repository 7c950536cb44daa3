import pytest
from pydantic import ValidationError

from config import KNUE_SITES, Settings, get_settings


def test_reference_defaults(settings):
    assert settings.domain_root == "https://www.knue.ac.kr/"
    assert settings.endpoint_path == "selectBbsNttView.do"
    assert settings.max_code_length == 50
    assert (settings.min_numeric_value, settings.max_numeric_value) == (0, 999_999_999)
    assert settings.sqids_min_length == 3
    assert settings.sqids_blocklist == ["admin", "www", "api"]
    assert settings.sites == KNUE_SITES
    assert settings.sites is not KNUE_SITES


def test_base_urls_are_normalized():
    settings = Settings(_env_file=None, domain_root=" https://example.org ", short_base_url="https://s.example.org")
    assert settings.domain_root == "https://example.org/"
    assert settings.short_base_url == "https://s.example.org/"


@pytest.mark.parametrize("overrides", [
    {"domain_root": "www.knue.ac.kr"},
    {"trusted_domain": "ftp://www.knue.ac.kr/"},
    {"endpoint_path": "/"},
    {"sqids_alphabet": "ab"},
    {"sqids_alphabet": "abca"},
    {"sqids_alphabet": "abcé"},
    {"sqids_min_length": 256},
    {"sqids_min_length": -1},
    {"max_code_length": 0},
    {"min_numeric_value": 10, "max_numeric_value": 5},
    {"min_numeric_value": -1},
    {"log_level": "LOUD"},
])
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KNUE_MAX_CODE_LENGTH", "20")
    monkeypatch.setenv("KNUE_SITES", '{"www": 1, "library": 40}')
    monkeypatch.setenv("KNUE_SQIDS_BLOCKLIST", '["admin"]')
    monkeypatch.setenv("KNUE_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.max_code_length == 20
    assert settings.sites == {"www": 1, "library": 40}
    assert settings.sqids_blocklist == ["admin"]
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
