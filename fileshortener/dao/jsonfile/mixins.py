"""JSON file mixin providing shared path setup and accessibility checks.

Responsibilities:
    - Resolve the link store path
    - Healthcheck the directory holding the link store

Classes:
    - JsonFileMixin: Base mixin to inject path management & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class LinkJsonDAO(JsonFileMixin, LinkBaseDAO):
        ...     pass
        ...
        >>> dao = LinkJsonDAO(path="/srv/fileshortener/links.json")
        >>> dao._healthcheck()
        True
"""

import os
from pathlib import Path

from fileshortener.dao.exceptions import PersistenceError
from fileshortener.utils.constants import DEFAULT_LINKS_FILE


class JsonFileMixin:
    """Mixin path setup and health check for JSON-file-backed DAOs.

    Attributes:
        path (Path):
            Absolute path of the JSON document holding the link store.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Verify the link store directory exists and is writable.
            Optionally raise a PersistenceError if it is not.
    """

    def __init__(self, path: str | os.PathLike = DEFAULT_LINKS_FILE, create_dirs: bool = True):
        """Initialize a JSON-file-based DAO

        Args:
            path (str | os.PathLike):
                Location of the JSON document. Defaults to 'links.json'
                in the current working directory.

            create_dirs (bool):
                If True, missing parent directories are created. Defaults to True.

        Raises:
            PersistenceError:
                If the parent directory is missing or not writable.
        """
        self.path = Path(path).expanduser().resolve()

        if create_dirs:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PersistenceError(f"Can't create link store directory {self.path.parent}.") from e

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Check the link store directory is usable

        Args:
            raise_error (bool):
                If True, raises PersistenceError on failure. Defaults to True.

        Returns:
            bool:
                True if the directory is writable, False otherwise (only if raise_error=False).

        Raises:
            PersistenceError:
                If the directory is missing or not writable and raise_error=True.
        """
        directory = self.path.parent
        if directory.is_dir() and os.access(directory, os.W_OK | os.X_OK):
            return True
        if raise_error:
            raise PersistenceError(f"Link store directory {directory} doesn't exist or isn't writable.")
        return False
