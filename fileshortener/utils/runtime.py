"""Runtime utilities

Functions:
    debug_mode() -> bool:
        True if unexpected handler errors should propagate, False otherwise.

Example:
    >>> from fileshortener.utils.runtime import debug_mode
    >>> os.environ['FILESHORTENER_DEBUG'] = 'true'
    >>> debug_mode()
    True
    >>> os.environ['FILESHORTENER_DEBUG'] = 'no'
    >>> debug_mode()
    False
"""

import os

from fileshortener.utils.constants import DEBUG_ENV


def debug_mode() -> bool:
    return os.getenv(DEBUG_ENV, '').strip().lower() in {'1', 'true'}
