"""Tests for environment configuration."""
import pytest

from repo_pager.infrastructure.settings import DEFAULT_API_URL, Settings, load_settings


def test_defaults_from_empty_environment():
    """Test defaults apply when nothing is configured."""
    settings = load_settings({})

    assert settings == Settings()
    assert settings.api_url == DEFAULT_API_URL
    assert settings.token is None
    assert settings.page_size == 30
    assert settings.request_timeout == 20.0
    assert settings.log_level == "INFO"


def test_values_from_environment():
    """Test every variable is read."""
    settings = load_settings({
        "GITHUB_API_URL": "https://github.example.com/api/v3/",
        "GITHUB_TOKEN": " ghp_example ",
        "PAGE_SIZE": "50",
        "REQUEST_TIMEOUT": "2.5",
        "LOG_LEVEL": "debug",
    })

    assert settings.api_url == "https://github.example.com/api/v3"
    assert settings.token == "ghp_example"
    assert settings.page_size == 50
    assert settings.request_timeout == 2.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw, expected", [("0", 1), ("-5", 1), ("250", 100), ("100", 100)])
def test_page_size_is_clamped(raw, expected):
    """Test PAGE_SIZE stays within what GitHub accepts."""
    assert load_settings({"PAGE_SIZE": raw}).page_size == expected


def test_blank_values_use_defaults():
    """Test empty strings behave like unset variables."""
    settings = load_settings({"GITHUB_TOKEN": "  ", "PAGE_SIZE": "", "REQUEST_TIMEOUT": " "})

    assert settings.token is None
    assert settings.page_size == 30
    assert settings.request_timeout == 20.0


@pytest.mark.parametrize("name, value", [("PAGE_SIZE", "thirty"), ("REQUEST_TIMEOUT", "soon")])
def test_invalid_numbers_raise(name, value):
    """Test unparsable numbers name the offending variable."""
    with pytest.raises(ValueError, match=name):
        load_settings({name: value})
