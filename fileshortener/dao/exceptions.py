"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    CorruptStoreError:
        Raised when the durable link store cannot be parsed. The file is left
        untouched so an operator can inspect and repair it.

    PersistenceError:
        Raised when the durable link store cannot be read or written
        (e.g. disk full, permissions, I/O errors).

Example:
    >>> from fileshortener.dao.exceptions import CorruptStoreError
    >>> raise CorruptStoreError("Link store /srv/links.json is not valid JSON.")
    Traceback (most recent call last):
        ...
    fileshortener.dao.exceptions.CorruptStoreError: Link store /srv/links.json is not valid JSON.
"""

from fileshortener.exceptions import FileShortenerError


class DAOError(FileShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'DAO_ERROR'


class CorruptStoreError(DAOError):
    """Exception raised when the durable bytes are not a well-formed link store."""

    error_code = 'CORRUPT_STORE'


class PersistenceError(DAOError):
    """Exception raised when the durable link store cannot be accessed.

    e.g. disk full, permission denied, I/O errors.
    """

    error_code = 'PERSISTENCE_ERROR'
