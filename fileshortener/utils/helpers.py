"""Helper utilities for request handlers.

Functions:
    header(event, name) -> str | None
        Case-insensitive lookup of a request header
    base_url(event) -> str
        Extract the public base URL of the service from a request event
    get_short_url(shortcode, event) -> str
        Get string representation of short URL for a given shortcode
    parse_body(event) -> dict
        Decode a JSON or form-encoded request body
    guarantee_500_response(handler) -> Callable
        Decorator: turn unexpected handler errors into HTTP 500 responses

Example:
    Typical usage inside a handler:

        >>> from fileshortener.utils.helpers import base_url
        >>> event = {
        ...     "headers": {"Host": "sho.rt", "X-Forwarded-Proto": "https"},
        ... }
        >>> base_url(event)
        'https://sho.rt'

        >>> base_url({})
        'http://localhost:3001'
"""

import json
import base64
import logging
import functools
from typing import Any
from urllib.parse import parse_qs
from collections.abc import Callable

from fileshortener.utils.constants import LOCAL_BASE_URL, UNKNOWN_INTERNAL_SERVER_ERROR
from fileshortener.utils.runtime import debug_mode


logger = logging.getLogger(__name__)

_LOCAL_HOSTS = ('localhost', '127.0.0.1', '[::1]')


def header(event: dict[str, Any], name: str) -> str | None:
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from a request event

    The host comes from `requestContext.domainName` or the `Host` header.
    The scheme comes from the `X-Forwarded-Proto` header; without it, local
    hosts use http and every other host uses https. A stage name (other than
    API Gateway's `$default`) is appended as a path prefix.

    Args:
        event (dict): request event passed to the handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "http://localhost:3001"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName') or header(event, 'Host') or ''
    stage = request_context.get('stage') or ''

    if not domain:
        # Fallback: local invocation (tests, scripts, etc.)
        return LOCAL_BASE_URL

    scheme = header(event, 'X-Forwarded-Proto')
    if not scheme:
        scheme = 'http' if domain.startswith(_LOCAL_HOSTS) else 'https'

    url = f'{scheme}://{domain}'
    if stage and stage != '$default':
        url = f'{url}/{stage}'
    return url


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): request event passed to the handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the request body into a dictionary

    `application/x-www-form-urlencoded` bodies are parsed as HTML form data
    (first value per field); every other body is parsed as a JSON object.
    Base64-encoded bodies (`isBase64Encoded`) are decoded first.

    Args:
        event (dict): request event passed to the handler

    Returns:
        dict: decoded body fields. Empty for an empty body.

    Raises:
        ValueError:
            If the body isn't valid base64, UTF-8, JSON or isn't a JSON object.

    Example:
        >>> parse_body({'body': 'url=https%3A%2F%2Fexample.com&shortcode=ex1',
        ...             'headers': {'Content-Type': 'application/x-www-form-urlencoded'}})
        {'url': 'https://example.com', 'shortcode': 'ex1'}
    """
    raw = event.get('body') or ''
    if event.get('isBase64Encoded'):
        raw = base64.b64decode(raw, validate=True).decode('utf-8')

    content_type = (header(event, 'Content-Type') or '').lower()
    if content_type.startswith('application/x-www-form-urlencoded'):
        fields = parse_qs(raw, keep_blank_values=True, strict_parsing=False)
        return {name: values[0] for name, values in fields.items()}

    body = json.loads(raw or '{}')
    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object.')
    return body


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 when a handler raises unexpectedly

    In debug mode (see fileshortener.utils.runtime.debug_mode) the exception
    propagates instead, so it surfaces with a full traceback.

    Example:
        >>> @guarantee_500_response
        ... def handler(event, context):
        ...     raise RuntimeError('boom')
        >>> handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        try:
            return handler(event, context)
        except Exception:
            if debug_mode():
                raise
            logger.exception('Unexpected error in handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
