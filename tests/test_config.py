import pytest

import config
from config import DEFAULT_MODEL, Settings, get_hyperparameters, load_settings


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


def test_load_settings_reads_key_and_model():
    settings = load_settings({"OPENAI_API_KEY": "sk-test", "OPENAI_MODEL": "gpt-4o-2024-08-06"})

    assert settings.api_key == "sk-test"
    assert settings.model == "gpt-4o-2024-08-06"
    assert settings.poll_interval == 30
    assert settings.event_limit == 5
    assert settings.temperature == 0


def test_load_settings_defaults_model():
    assert load_settings({"OPENAI_API_KEY": "sk-test"}).model == DEFAULT_MODEL


def test_load_settings_requires_api_key():
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        load_settings({})


def test_load_settings_reads_process_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.delenv("OPENAI_MODEL", raising=False)

    assert load_settings().api_key == "sk-env"


def test_hyperparameters_only_include_set_values(monkeypatch):
    assert get_hyperparameters() == {}

    monkeypatch.setattr(config, "N_EPOCHS", 3)
    assert get_hyperparameters() == {"n_epochs": 3}
    assert Settings(api_key="sk-test").hyperparameters == {"n_epochs": 3}
