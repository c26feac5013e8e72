"""Validation of client-supplied target URLs and shortcodes.

Functions:
    validate_url(url) -> str
        Ensure a target URL is a non-empty, absolute http(s) URL.
    validate_shortcode(shortcode) -> str
        Ensure a shortcode is non-empty, URL-safe and not reserved.

Both functions return their argument unchanged on success and raise a
ValidationError subclass otherwise.

Example:
    >>> validate_url('https://example.com/page')
    'https://example.com/page'
    >>> validate_shortcode('my-link_1')
    'my-link_1'
    >>> validate_shortcode('not ok')
    Traceback (most recent call last):
        ...
    fileshortener.exceptions.InvalidShortcodeError: Shortcode 'not ok' may only contain letters, digits, '-' and '_'.
"""

from urllib.parse import urlsplit

from fileshortener.exceptions import InvalidShortcodeError, InvalidUrlError
from fileshortener.utils.constants import (
    ALLOWED_URL_SCHEMES,
    MAX_SHORTCODE_LENGTH,
    MAX_URL_LENGTH,
    RESERVED_SHORTCODES,
    URL_SAFE_CHARACTERS,
)


def validate_url(url: object) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError('Target URL is required.')
    if len(url) > MAX_URL_LENGTH:
        raise InvalidUrlError(f'Target URL is too long (max {MAX_URL_LENGTH} characters).')
    if url != url.strip() or any(ch.isspace() for ch in url):
        raise InvalidUrlError(f'Target URL {url!r} must not contain whitespace.')

    try:
        components = urlsplit(url)
        # Accessing .port validates the port component
        components.port
    except ValueError as e:
        raise InvalidUrlError(f'Target URL {url!r} is malformed.') from e

    if components.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise InvalidUrlError(f'Target URL {url!r} must be an absolute http or https URL.')
    if not components.hostname:
        raise InvalidUrlError(f'Target URL {url!r} has no host.')
    return url


def validate_shortcode(shortcode: object) -> str:
    if not isinstance(shortcode, str) or not shortcode:
        raise InvalidShortcodeError('Shortcode must be a non-empty string.')
    if len(shortcode) > MAX_SHORTCODE_LENGTH:
        raise InvalidShortcodeError(f'Shortcode is too long (max {MAX_SHORTCODE_LENGTH} characters).')
    if not set(shortcode) <= URL_SAFE_CHARACTERS:
        raise InvalidShortcodeError(f"Shortcode {shortcode!r} may only contain letters, digits, '-' and '_'.")
    if shortcode.lower() in RESERVED_SHORTCODES:
        raise InvalidShortcodeError(f'Shortcode {shortcode!r} is reserved.')
    return shortcode
