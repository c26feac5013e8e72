from datetime import datetime, UTC
from pathlib import Path

import pytest

from fileshortener.models import LinkRecord
from fileshortener.dao.jsonfile import LinkJsonDAO


@pytest.fixture
def links_path(tmp_path: Path) -> Path:
    return tmp_path / 'links.json'


@pytest.fixture
def dao(links_path: Path) -> LinkJsonDAO:
    return LinkJsonDAO(path=links_path)


@pytest.fixture
def links() -> dict[str, LinkRecord]:
    # fmt: off
    return {
        'abc': LinkRecord(shortcode='abc', target='https://a.example', created_at=datetime(2025, 10, 15, tzinfo=UTC)),
        'xyz': LinkRecord(shortcode='xyz', target='https://example.com/page'),
    }
    # fmt: on
