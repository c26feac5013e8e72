"""Shared setup for handlers: configuration loading and registry lookup."""

import logging

from fileshortener.registry import LinkRegistry, get_registry
from fileshortener.utils.config import load_config, storage_path, shortcode_options


logger = logging.getLogger(__name__)


def open_registry(handler_name: str) -> LinkRegistry:
    """Return the process-wide registry configured for a handler

    Args:
        handler_name (str):
            Name of the handler, selects its configuration file.

    Returns:
        LinkRegistry: registry of the configured link store.

    Raises:
        FileNotFoundError:
            If the handler's configuration file doesn't exist.
        BadConfigurationError:
            If the configuration is invalid.
        PersistenceError:
            If the link store directory is unusable.
    """
    app_config = load_config(handler_name)
    path = storage_path(app_config)
    logger.debug('Using JSON file as the link store.', extra={'handlerName': handler_name, 'path': str(path)})
    return get_registry(path, **shortcode_options(app_config))
