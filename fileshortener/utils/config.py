"""Utility functions for application configuration management.

Each handler reads its own YAML configuration file, selected by the current
application environment (`APP_ENV`):

    config/
    ├── shorten_url/
    │   ├── local.yml
    │   └── prod.yml
    ├── redirect_url/
    │   ├── local.yml
    │   └── prod.yml
    └── list_links/
        ├── local.yml
        └── prod.yml

A configuration file follows this structure:

    storage:
      path: data/links.json   # relative paths resolve against project_root()
    shortcode:                # optional
      length: 7
      max_attempts: 10

The storage path can be overridden with the `FILESHORTENER_LINKS_FILE`
environment variable, in which case the configuration file is optional.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    config_path(handler_name: str) -> Path
        Return the location of a handler's configuration file.

    load_config(handler_name: str) -> dict
        Load and validate the configuration of a handler.

    storage_path(app_config: dict) -> Path
        Return the absolute link store location from a loaded configuration.

    shortcode_options(app_config: dict) -> dict
        Return shortcode generation keyword arguments from a loaded configuration.

Example:
    Typical usage inside a handler:

        >>> from fileshortener.utils.config import load_config, storage_path
        >>> app_config = load_config('shorten_url')
        >>> storage_path(app_config)
        PosixPath('/srv/fileshortener/data/links.json')
"""

import os
import logging
from pathlib import Path

import yaml

from fileshortener.exceptions import BadConfigurationError
from fileshortener.utils.constants import (
    APP_ENV_ENV,
    PROJECT_ROOT_ENV,
    LINKS_FILE_ENV,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'prod'
        >>> app_env()
        'prod'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Finds the project root via the PROJECT_ROOT environment variable.
    Falls back to the directory holding the `fileshortener` package.

    Returns:
        Path:
            Absolute path to the project root directory.

    Example:
        >>> project_root()
        PosixPath('/srv/fileshortener')
    """
    default = Path(__file__).resolve().parents[2]
    return Path(os.environ.get(PROJECT_ROOT_ENV, default)).resolve()


def config_path(handler_name: str) -> Path:
    return project_root() / 'config' / handler_name / f'{app_env()}.yml'


def load_config(handler_name: str) -> dict:
    """Load configuration for a given handler from its YAML file

    Args:
        handler_name (str):
            Name of the handler (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The handler's configuration, with `storage.path` guaranteed to be set.

    Raises:
        FileNotFoundError:
            If the configuration file doesn't exist and FILESHORTENER_LINKS_FILE isn't set.
        BadConfigurationError:
            If the configuration file isn't valid YAML or misses required keys.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['storage']['path']
        'data/links.json'
    """
    path = config_path(handler_name)
    override = os.environ.get(LINKS_FILE_ENV)

    try:
        with path.open(encoding='utf-8') as f:
            app_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        if not override:
            raise
        logger.debug('No configuration file found. Using environment only.', extra={'handlerName': handler_name})
        app_config = {}
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Configuration file {path} is not valid YAML.') from e

    if not isinstance(app_config, dict):
        raise BadConfigurationError(f'Configuration file {path} must hold a mapping.')

    storage = app_config.setdefault('storage', {})
    if not isinstance(storage, dict):
        raise BadConfigurationError(f"'storage' section of {path} must be a mapping.")
    if override:
        storage['path'] = override
    if not isinstance(storage.get('path'), str) or not storage['path']:
        raise BadConfigurationError(f"Missing 'storage.path' in {path} (or set {LINKS_FILE_ENV}).")

    shortcode = app_config.setdefault('shortcode', {})
    if not isinstance(shortcode, dict):
        raise BadConfigurationError(f"'shortcode' section of {path} must be a mapping.")
    for key in ('length', 'max_attempts'):
        value = shortcode.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
            raise BadConfigurationError(f"'shortcode.{key}' in {path} must be a positive integer (given value: {value!r}).")

    logger.debug('Loaded configuration.', extra={'handlerName': handler_name, 'appEnv': app_env()})
    return app_config


def storage_path(app_config: dict) -> Path:
    path = Path(app_config['storage']['path']).expanduser()
    return path if path.is_absolute() else project_root() / path


def shortcode_options(app_config: dict) -> dict:
    """Return registry keyword arguments for the configured shortcode settings

    Only settings present in the configuration are returned, so handlers which
    don't configure shortcode generation leave a shared registry untouched.
    """
    shortcode = app_config.get('shortcode') or {}
    options = {}
    if shortcode.get('length') is not None:
        options['shortcode_length'] = shortcode['length']
    if shortcode.get('max_attempts') is not None:
        options['max_attempts'] = shortcode['max_attempts']
    return options
