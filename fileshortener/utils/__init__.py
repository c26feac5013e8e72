from fileshortener.utils.config import app_env, project_root, load_config, storage_path, shortcode_options
from fileshortener.utils.helpers import base_url, get_short_url, parse_body, guarantee_500_response
from fileshortener.utils.shortener import generate_shortcode
from fileshortener.utils.validators import validate_url, validate_shortcode
from fileshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'validate_url',
    'validate_shortcode',
    'app_env',
    'project_root',
    'load_config',
    'storage_path',
    'shortcode_options',
    'base_url',
    'get_short_url',
    'parse_body',
    'guarantee_500_response',
    'initialize_logging',
]
