"""Unit tests for the JSON logging setup in logging.py

Test coverage includes:

1. JsonFormatter
   - Ensures records render as one JSON object with standard keys.
   - Ensures `extra` fields are attached and non-JSON values are stringified.
   - Ensures exceptions are rendered.

2. initialize_logging()
   - Ensures the root logger uses the JSON formatter and LOG_LEVEL.
"""

import sys
import json
import logging
from pathlib import Path

import pytest
from freezegun import freeze_time

from fileshortener.utils.logging import JsonFormatter, initialize_logging
from fileshortener.utils.constants import LOG_LEVEL_ENV


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def make_record():
    def _make(msg='Created link.', level=logging.INFO, exc_info=None, **extra):
        record = logging.LogRecord('fileshortener.registry', level, __file__, 1, msg, (), exc_info)
        record.__dict__.update(extra)
        return record

    return _make


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


# -------------------------------
# 1. JsonFormatter
# -------------------------------


@freeze_time('2025-12-26 12:00:00')
def test_json_formatter(make_record):
    log = json.loads(JsonFormatter().format(make_record()))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'fileshortener.registry',
        'message': 'Created link.',
    }


def test_json_formatter_with_extra(make_record):
    log = json.loads(JsonFormatter().format(make_record(shortcode='abc123', path=Path('/srv/links.json'))))

    assert log['shortcode'] == 'abc123'
    assert log['path'] == '/srv/links.json'


def test_json_formatter_with_exception(make_record):
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in log['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging(monkeypatch, restore_root_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, 'debug')
    initialize_logging()

    assert restore_root_logger.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in restore_root_logger.handlers)
