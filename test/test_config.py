import pytest
from pydantic import ValidationError
from rich.console import Console

from restmongo.core.config import RestMongoConfig
from restmongo.core.logging import Logger, color_palette


def test_defaults():
    config = RestMongoConfig()
    assert config.params.filtering == "filtering"
    assert config.default_limit is None
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("RESTMONGO_PROJECT_NAME", "shop-api")
    monkeypatch.setenv("RESTMONGO_DEFAULT_LIMIT", "25")
    monkeypatch.setenv("RESTMONGO_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESTMONGO_PARAMS__LIMIT", "per_page")

    config = RestMongoConfig(version="2.0.0")

    assert config.project_name == "shop-api"
    assert config.version == "2.0.0"
    assert config.default_limit == 25
    assert config.log_level == "DEBUG"
    assert config.params.limit == "per_page"
    assert config.params.offset == "offset"


def test_keyword_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("RESTMONGO_DEFAULT_LIMIT", "25")
    assert RestMongoConfig(default_limit=5).default_limit == 5


@pytest.mark.parametrize("values", [{"default_limit": -1}, {"log_level": "chatty"}])
def test_invalid_values(values):
    with pytest.raises(ValidationError):
        RestMongoConfig(**values)


def make_logger(level="INFO"):
    return Logger(level=level, output=Console(record=True, width=120))


def test_logger_filters_by_level():
    logger = make_logger()
    logger.debug("hidden detail")
    logger.info("shown")
    logger.set_level("debug")
    logger.debug("now visible")

    text = logger.console.export_text()
    assert "hidden detail" not in text
    assert "shown" in text
    assert "now visible" in text


def test_logger_indents_and_times():
    logger = make_logger()
    with logger.timed("assembling"):
        with logger.indented():
            logger.success(f"selected {color_palette['field']('name')}")

    lines = logger.console.export_text().splitlines()
    assert lines[0].startswith("  ")
    assert "selected name" in lines[0]
    assert "assembling" in lines[1] and "ms" in lines[1]


def test_logger_rejects_unknown_level():
    with pytest.raises(ValueError):
        Logger(level="loud")


def test_configure_logging_sets_package_log_level(monkeypatch):
    from restmongo.core.logging import log

    monkeypatch.setattr(log, "level", log.level)
    RestMongoConfig(log_level="error").configure_logging()
    assert log.level == "ERROR"


def test_palette_escapes_markup_in_values():
    logger = make_logger()
    logger.info(f"search {color_palette['value']('[/x] lamp [bold]')}")
    assert "search [/x] lamp [bold]" in logger.console.export_text()
