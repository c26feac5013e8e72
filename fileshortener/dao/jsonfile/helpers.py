import functools
from typing import TypeVar, Any
from collections.abc import Callable

from fileshortener.dao.exceptions import PersistenceError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_os_error(method: F) -> F:
    """Wrap file-interacting DAO methods to handle I/O errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises PersistenceError on I/O failures.

    Example:
        >>> @handle_os_error
        ... def size(self):
        ...     return self.path.stat().st_size
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            reason = e.strerror or e.__class__.__name__
            raise PersistenceError(f"Can't access link store at {self.path} ({reason}).") from e

    return wrapper
