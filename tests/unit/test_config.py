import dataclasses

import pytest  # type: ignore[import]


pytestmark = pytest.mark.unit


def test_missing_api_key_is_a_configuration_error():
    from agentic_search_server_core import ConfigurationError, load_settings

    with pytest.raises(ConfigurationError) as exc:
        load_settings({})

    assert "AGENTIC_SEARCH_API_KEY" in str(exc.value)


def test_default_url_gets_completions_path():
    from agentic_search_server_core import load_settings

    settings = load_settings({"AGENTIC_SEARCH_API_KEY": "key"})

    assert settings.api_url == "https://agentic-search-engines-n3n7u.ondigitalocean.app/v1/chat/completions"
    assert settings.timeout == 90.0


@pytest.mark.parametrize(
    "raw_url",
    [
        "https://search.example.test",
        "https://search.example.test///",
        "https://search.example.test/v1/chat/completions",
        "https://search.example.test/v1/chat/completions/",
    ],
)
def test_url_is_normalized(raw_url):
    from agentic_search_server_core import load_settings

    settings = load_settings({"AGENTIC_SEARCH_API_KEY": "key", "AGENTIC_SEARCH_API_URL": raw_url})

    assert settings.api_url == "https://search.example.test/v1/chat/completions"


@pytest.mark.parametrize("raw_url", ["not a url", "ftp://search.example.test", "https://"])
def test_invalid_url_is_a_configuration_error(raw_url):
    from agentic_search_server_core import ConfigurationError, load_settings

    with pytest.raises(ConfigurationError):
        load_settings({"AGENTIC_SEARCH_API_KEY": "key", "AGENTIC_SEARCH_API_URL": raw_url})


def test_settings_are_immutable():
    from agentic_search_server_core import load_settings

    settings = load_settings({"AGENTIC_SEARCH_API_KEY": "key"})

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.api_key = "other"  # type: ignore[misc]


def test_initialize_runtime_exits_without_api_key(monkeypatch, capsys):
    from agentic_search_server_core import runtime

    monkeypatch.delenv("AGENTIC_SEARCH_API_KEY", raising=False)
    monkeypatch.setattr(runtime, "load_dotenv", lambda: False)

    with pytest.raises(SystemExit) as exc:
        runtime.initialize_runtime()

    assert exc.value.code == 1
    assert "CRITICAL" in capsys.readouterr().err
