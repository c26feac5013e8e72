from pathlib import Path

import pytest

from fileshortener.utils.constants import LINKS_FILE_ENV, PROJECT_ROOT_ENV


@pytest.fixture
def links_path(tmp_path, monkeypatch) -> Path:
    """Point every handler at a fresh link store in a project without config files."""
    path = tmp_path / 'data' / 'links.json'
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    monkeypatch.setenv(LINKS_FILE_ENV, str(path))
    return path


@pytest.fixture
def context():
    return None


@pytest.fixture
def request_context():
    return {'domainName': 'sho.rt', 'stage': '$default', 'httpMethod': 'GET'}
