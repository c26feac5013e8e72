"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env() and project_root() read APP_ENV and PROJECT_ROOT.

2. Configuration loading behavior
   - Ensures load_config() reads config/<handler>/<env>.yml under the project root.
   - Ensures FILESHORTENER_LINKS_FILE overrides (and can replace) the file.
   - Confirms invalid files raise BadConfigurationError.

3. Derived settings
   - Ensures storage_path() resolves relative paths against the project root.
   - Ensures shortcode_options() only returns configured settings.
"""

from pathlib import Path

import pytest

from fileshortener.utils import config
from fileshortener.exceptions import BadConfigurationError
from fileshortener.utils.constants import APP_ENV_ENV, PROJECT_ROOT_ENV, LINKS_FILE_ENV


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """Point PROJECT_ROOT to an empty temporary project."""
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    return tmp_path


@pytest.fixture
def write_config(project):
    def _write(handler_name: str, content: str, env: str = 'local') -> Path:
        path = project / 'config' / handler_name / f'{env}.yml'
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path

    return _write


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env_defaults_to_local():
    assert config.app_env() == 'local'


def test_app_env(monkeypatch):
    monkeypatch.setenv(APP_ENV_ENV, 'Prod')
    assert config.app_env() == 'prod'


def test_project_root(project):
    assert config.project_root() == project.resolve()


def test_project_root_defaults_to_repository_root():
    assert config.project_root() == Path(config.__file__).resolve().parents[2]


def test_config_path(project, monkeypatch):
    monkeypatch.setenv(APP_ENV_ENV, 'prod')
    assert config.config_path('redirect_url') == project.resolve() / 'config' / 'redirect_url' / 'prod.yml'


# -------------------------------
# 2. Configuration loading behavior
# -------------------------------


def test_load_config(write_config):
    write_config('shorten_url', 'storage:\n  path: data/links.json\nshortcode:\n  length: 8\n  max_attempts: 5\n')

    app_config = config.load_config('shorten_url')
    assert app_config == {'storage': {'path': 'data/links.json'}, 'shortcode': {'length': 8, 'max_attempts': 5}}


def test_load_config_selects_environment(write_config, monkeypatch):
    write_config('redirect_url', 'storage:\n  path: local.json\n')
    write_config('redirect_url', 'storage:\n  path: /var/lib/fileshortener/links.json\n', env='prod')
    monkeypatch.setenv(APP_ENV_ENV, 'prod')

    assert config.load_config('redirect_url')['storage']['path'] == '/var/lib/fileshortener/links.json'


def test_load_config_with_missing_file(project):
    with pytest.raises(FileNotFoundError):
        config.load_config('shorten_url')


def test_load_config_with_environment_override(write_config, monkeypatch):
    write_config('shorten_url', 'storage:\n  path: data/links.json\n')
    monkeypatch.setenv(LINKS_FILE_ENV, '/tmp/override.json')

    assert config.load_config('shorten_url')['storage']['path'] == '/tmp/override.json'


def test_load_config_without_file_uses_environment(project, monkeypatch):
    """Ensure FILESHORTENER_LINKS_FILE alone is a complete configuration."""
    monkeypatch.setenv(LINKS_FILE_ENV, '/tmp/override.json')

    assert config.load_config('list_links') == {'storage': {'path': '/tmp/override.json'}, 'shortcode': {}}


@pytest.mark.parametrize(
    'content, message',
    [
        ('storage: [unclosed', 'not valid YAML'),
        ('- just\n- a list\n', 'must hold a mapping'),
        ('storage: data/links.json\n', "'storage' section"),
        ('storage:\n  other: 1\n', "Missing 'storage.path'"),
        ('', "Missing 'storage.path'"),
        ('storage:\n  path: ""\n', "Missing 'storage.path'"),
        ('storage:\n  path: x.json\nshortcode: 7\n', "'shortcode' section"),
        ('storage:\n  path: x.json\nshortcode:\n  length: 0\n', "'shortcode.length'"),
        ('storage:\n  path: x.json\nshortcode:\n  length: seven\n', "'shortcode.length'"),
        ('storage:\n  path: x.json\nshortcode:\n  max_attempts: true\n', "'shortcode.max_attempts'"),
    ],
)
def test_load_config_with_bad_file(write_config, content, message):
    write_config('shorten_url', content)
    with pytest.raises(BadConfigurationError, match=message):
        config.load_config('shorten_url')


# -------------------------------
# 3. Derived settings
# -------------------------------


def test_storage_path_relative(project):
    assert config.storage_path({'storage': {'path': 'data/links.json'}}) == project.resolve() / 'data' / 'links.json'


def test_storage_path_absolute(project):
    assert config.storage_path({'storage': {'path': '/srv/links.json'}}) == Path('/srv/links.json')


@pytest.mark.parametrize(
    'app_config, expected',
    [
        ({'shortcode': {'length': 8, 'max_attempts': 5}}, {'shortcode_length': 8, 'max_attempts': 5}),
        ({'shortcode': {'length': 8}}, {'shortcode_length': 8}),
        ({'shortcode': {}}, {}),
        ({}, {}),
    ],
)
def test_shortcode_options(app_config, expected):
    assert config.shortcode_options(app_config) == expected
