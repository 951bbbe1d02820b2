import logging

from config import DEFAULT_MODEL, Settings, configure_logging, load_settings


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == Settings()
    assert settings.openai_model == DEFAULT_MODEL
    assert settings.strict_parsing is False


def test_load_settings_reads_values() -> None:
    settings = load_settings(
        {
            "OPENAI_API_KEY": " sk-test ",
            "OPENAI_MODEL": "gpt-4o-mini",
            "STRICT_PARSING": "yes",
            "LOG_LEVEL": "debug",
            "CURRENCY_SYMBOL": "€",
        }
    )

    assert settings.openai_api_key == "sk-test"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.strict_parsing is True
    assert settings.log_level == "DEBUG"
    assert settings.currency_symbol == "€"


def test_load_settings_from_process_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    monkeypatch.setenv("STRICT_PARSING", "0")

    settings = load_settings()

    assert settings.openai_model == "gpt-test"
    assert settings.strict_parsing is False


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("warning")
        assert root.level == logging.WARNING
        configure_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
