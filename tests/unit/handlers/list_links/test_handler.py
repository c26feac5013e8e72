"""Unit tests for the list_links handler.

Test coverage includes:

1. Successful listing
   - Ensures all links are listed with their count (HTTP 200).
   - Ensures an empty store lists nothing.

2. Server errors
   - Ensures configuration and link store failures return HTTP 500.
"""

import json
from unittest.mock import MagicMock

import pytest

from fileshortener.handlers.list_links import app
from fileshortener.registry import LinkRegistry, get_registry
from fileshortener.dao.exceptions import CorruptStoreError


@pytest.fixture
def event(request_context):
    return {'httpMethod': 'GET', 'path': '/links', 'headers': {'User-Agent': 'pytest'}, 'requestContext': request_context}


def test_list_links(links_path, event, context):
    registry = get_registry(links_path)
    registry.create('https://a.example', 'a1')
    registry.create('https://b.example', 'b1')

    response = app.handler(event, context)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == {'links': {'a1': 'https://a.example', 'b1': 'https://b.example'}, 'count': 2}


def test_list_links_with_empty_store(links_path, event, context):
    response = app.handler(event, context)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == {'links': {}, 'count': 0}
    assert links_path.exists()


def test_list_links_with_legacy_store(links_path, event, context):
    links_path.parent.mkdir(parents=True, exist_ok=True)
    links_path.write_text('[{"shortcode": "gh", "url": "https://github.com"}]', encoding='utf-8')

    response = app.handler(event, context)
    assert json.loads(response['body']) == {'links': {'gh': 'https://github.com'}, 'count': 1}


def test_list_links_without_configuration(tmp_path, monkeypatch, event, context):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    response = app.handler(event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['error_code'] == 'CONFIGURATION_UNAVAILABLE'


def test_list_links_with_corrupt_store(monkeypatch, event, context):
    registry = MagicMock(spec=LinkRegistry)
    registry.list_all.side_effect = CorruptStoreError('not JSON')
    monkeypatch.setattr(app, 'open_registry', lambda handler_name: registry)

    response = app.handler(event, context)
    assert response['statusCode'] == 500
    assert json.loads(response['body']) == {'message': 'Internal Server Error', 'error_code': 'CORRUPT_STORE'}
