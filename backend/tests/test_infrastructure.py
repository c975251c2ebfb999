"""Database URL handling and logging setup."""
import io
import logging

import pytest

from bookshelf.config import settings
from bookshelf.core.logging import ColoredFormatter, get_logger, setup_logging
from bookshelf.database import async_database_url, engine_options


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db:5432/books", "postgresql+asyncpg://u:p@db:5432/books"),
        ("postgresql+asyncpg://u:p@db/books", "postgresql+asyncpg://u:p@db/books"),
        ("sqlite:///./books.db", "sqlite+aiosqlite:///./books.db"),
    ],
)
def test_async_database_url(url, expected):
    assert async_database_url(url) == expected


def test_engine_options_pool_sizing():
    options = engine_options("postgresql+asyncpg://u:p@db/books")
    assert options["pool_size"] == settings.db_pool_size
    assert options["max_overflow"] == settings.db_max_overflow

    options = engine_options("sqlite+aiosqlite:///:memory:")
    assert "pool_size" not in options
    assert "max_overflow" not in options


class TerminalStream(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def restore_logging():
    logger = logging.getLogger("bookshelf")
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def test_setup_logging_plain_stream(restore_logging):
    stream = io.StringIO()
    logger = setup_logging("warning", stream=stream)

    assert logger.level == logging.WARNING
    assert not logger.propagate
    assert len(logger.handlers) == 1

    get_logger("api.books").info("hidden")
    get_logger("api.books").warning("Book 7 not found")
    output = stream.getvalue()
    assert "hidden" not in output
    assert "| bookshelf.api.books | Book 7 not found" in output
    assert "\033[" not in output


def test_setup_logging_colors_terminals(restore_logging):
    stream = TerminalStream()
    logger = setup_logging("INFO", stream=stream)

    assert isinstance(logger.handlers[0].formatter, ColoredFormatter)
    get_logger("main").error("boom")
    assert "\033[31mERROR\033[0m" in stream.getvalue()


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("bookshelf.main", logging.INFO, __file__, 1, "hello", None, None)
    ColoredFormatter("%(levelname)s %(name)s %(message)s").format(record)
    assert record.levelname == "INFO"
    assert record.name == "bookshelf.main"
