"""Shortcode generation utility

This module provides a helper function for drawing short, unpredictable,
URL-safe codes which do not collide with an existing set of shortcodes.

Functions:
    generate_shortcode(existing, length=7, max_attempts=10, alphabet=ALPHABET):
        Draw a random Base62 shortcode absent from `existing`.

Example:
    >>> from fileshortener.utils import generate_shortcode
    >>> generate_shortcode({'abc1234'})
    'q2XbP9d'
"""

import math
import string
import logging
import secrets
from collections.abc import Collection

from beartype import beartype

from fileshortener.exceptions import GenerationExhaustedError
from fileshortener.utils.constants import (
    DEFAULT_MAX_GENERATION_ATTEMPTS,
    DEFAULT_SHORTCODE_LENGTH,
    MIN_SHORTCODE_ENTROPY_BITS,
    RESERVED_SHORTCODES,
    URL_SAFE_CHARACTERS,
)


logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


@beartype
def generate_shortcode(
    existing: Collection[str],
    length: int = DEFAULT_SHORTCODE_LENGTH,
    max_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
    alphabet: str = ALPHABET,
) -> str:
    """Draw a random shortcode which is not present in `existing`.

    Every character is drawn independently with `secrets.choice()`, so codes are
    neither sequential nor predictable from previously issued ones. A draw that
    collides with `existing` (or with a reserved route name) is discarded and
    re-drawn, at most `max_attempts` times in total.

    Args:
        existing (Collection[str]):
            Shortcodes already in use (e.g. the keys of the current link store).

        length (int, optional):
            Number of characters in the shortcode. Defaults to 7
            (~41 bits of entropy with the Base62 alphabet).

        max_attempts (int, optional):
            Upper bound on the number of draws. Defaults to 10.

        alphabet (str, optional):
            Characters to draw from. Must only contain URL-safe characters.

    Returns:
        str: A fresh shortcode of exactly `length` characters.

    Raises:
        ValueError:
            If `length` and `alphabet` give less than 24 bits of entropy,
            if `max_attempts` is not positive or if `alphabet` holds
            characters which are not URL-safe.

        GenerationExhaustedError:
            If all `max_attempts` draws collided.

    Example:
        >>> code = generate_shortcode(existing={'aaaaaaa'}, length=7)
        >>> len(code)
        7
    """
    symbols = set(alphabet)
    if not symbols <= URL_SAFE_CHARACTERS:
        raise ValueError(f'Alphabet must only contain URL-safe characters (given value: {alphabet!r}).')
    if len(symbols) < 2 or length * math.log2(len(symbols)) < MIN_SHORTCODE_ENTROPY_BITS:
        raise ValueError(
            f'Shortcodes need at least {MIN_SHORTCODE_ENTROPY_BITS} bits of entropy '
            f'(given values: length={length}, alphabet size={len(symbols)}).'
        )
    if max_attempts < 1:
        raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

    for attempt in range(1, max_attempts + 1):
        candidate = ''.join(secrets.choice(alphabet) for _ in range(length))
        if candidate not in existing and candidate.lower() not in RESERVED_SHORTCODES:
            return candidate
        logger.debug('Generated shortcode collided, drawing again.', extra={'attempt': attempt})

    raise GenerationExhaustedError(f'Could not generate a free shortcode after {max_attempts} attempts.')
