"""Link registry: the single authority over the link store

The registry combines a link store DAO with the shortcode generator and is the
only component allowed to write the link store. It exposes three operations:

    resolve(shortcode) -> str | None
        Target URL for a shortcode, None (not found) on miss.
    create(target, shortcode=None) -> LinkRecord
        Validate, check uniqueness, insert and durably persist a new link.
    list_all() -> Mapping[str, str]
        Read-only snapshot of shortcode -> target URL.

Concurrency:
    create() runs the whole "load -> check collision -> insert -> save" cycle
    under an exclusive lock, so concurrent creates never overwrite each other's
    links. Reads don't lock: they are served from a cached read-only snapshot
    which is reloaded whenever the store's fingerprint changes. The DAO replaces
    the document atomically, so a reload never sees a half-written document.

Example:
    >>> from fileshortener.registry import get_registry
    >>> registry = get_registry('data/links.json')
    >>> registry.create('https://example.com/page', 'ex1')
    LinkRecord(shortcode='ex1', target='https://example.com/page', created_at=...)
    >>> registry.resolve('ex1')
    'https://example.com/page'
    >>> registry.resolve('doesnotexist') is None
    True
"""

import os
import logging
import threading
from datetime import datetime, UTC
from types import MappingProxyType
from collections.abc import Mapping
from typing import Optional

from beartype import beartype

from fileshortener.models import LinkRecord
from fileshortener.types import StoreFingerprint
from fileshortener.dao import LinkBaseDAO, LinkJsonDAO
from fileshortener.dao.exceptions import PersistenceError
from fileshortener.exceptions import ShortcodeTakenError
from fileshortener.utils.shortener import generate_shortcode
from fileshortener.utils.validators import validate_shortcode, validate_url
from fileshortener.utils.constants import DEFAULT_MAX_GENERATION_ATTEMPTS, DEFAULT_SHORTCODE_LENGTH


logger = logging.getLogger(__name__)


class LinkRegistry:
    """Mediate all reads and mutations of the link store.

    Attributes:
        store (LinkBaseDAO):
            DAO persisting the link store.
        shortcode_length (int):
            Length of generated shortcodes.
        max_attempts (int):
            Upper bound on shortcode draws per create().
    """

    def __init__(
        self,
        store: LinkBaseDAO,
        shortcode_length: int = DEFAULT_SHORTCODE_LENGTH,
        max_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
    ):
        self.store = store
        self.shortcode_length = shortcode_length
        self.max_attempts = max_attempts

        self._create_lock = threading.Lock()
        # (fingerprint, snapshot); replaced as a whole, never mutated in place
        self._cache: tuple[Optional[StoreFingerprint], Mapping[str, LinkRecord]] | None = None

    @beartype
    def resolve(self, shortcode: str) -> str | None:
        """Look up the target URL of a shortcode

        Args:
            shortcode (str): shortcode to resolve.

        Returns:
            str | None: target URL on hit, None if the shortcode doesn't exist.

        Raises:
            CorruptStoreError:
                If the link store can't be parsed.
            PersistenceError:
                If the link store can't be read.
        """
        link = self._snapshot().get(shortcode)
        return None if link is None else link.target

    def create(self, target: str, shortcode: str | None = None) -> LinkRecord:
        """Create and durably persist a new link

        Steps:
            1. Validate the target URL.
            2. Load the current link store (under the create lock).
            3. Validate the requested shortcode and check it is free,
               or generate a fresh one if none was requested.
            4. Insert the link and save the link store.

        The link is only returned after the save completed. If the save fails,
        the insert is undone and nothing is cached, so a retry with the same
        shortcode behaves as if the failed attempt never happened.

        Args:
            target (str):
                Absolute http(s) URL to redirect to.
            shortcode (str | None):
                Requested shortcode. A fresh one is generated if None.

        Returns:
            LinkRecord: the newly created link.

        Raises:
            InvalidUrlError:
                If `target` is not an absolute http(s) URL.
            InvalidShortcodeError:
                If `shortcode` is empty, reserved or not URL-safe.
            ShortcodeTakenError:
                If `shortcode` already exists.
            GenerationExhaustedError:
                If no free shortcode could be generated.
            CorruptStoreError:
                If the link store can't be parsed.
            PersistenceError:
                If the link store can't be read or written.
        """
        validate_url(target)

        with self._create_lock:
            links = self.store.load()

            if shortcode is not None:
                validate_shortcode(shortcode)
                if shortcode in links:
                    raise ShortcodeTakenError(f"Shortcode '{shortcode}' already exists.")
            else:
                shortcode = generate_shortcode(links.keys(), length=self.shortcode_length, max_attempts=self.max_attempts)

            link = LinkRecord(shortcode=shortcode, target=target, created_at=datetime.now(UTC))
            links[shortcode] = link
            try:
                self.store.save(links)
            except PersistenceError:
                del links[shortcode]
                logger.error('Failed to persist new link. Insert rolled back.', extra={'shortcode': shortcode})
                raise

            # Fingerprint taken after our own save: the snapshot matches the document on disk.
            # The link is committed at this point, so a failing stat only disables the cache.
            try:
                fingerprint = self.store.fingerprint()
            except PersistenceError:
                logger.warning('Failed to fingerprint link store after save.', extra={'shortcode': shortcode}, exc_info=True)
                fingerprint = None
            self._cache = (fingerprint, MappingProxyType(links))

        logger.info('Created link.', extra={'shortcode': shortcode, 'target': target})
        return link

    def list_all(self) -> Mapping[str, str]:
        """Return a read-only snapshot of shortcode -> target URL

        Raises:
            CorruptStoreError:
                If the link store can't be parsed.
            PersistenceError:
                If the link store can't be read.
        """
        return MappingProxyType({shortcode: link.target for shortcode, link in self._snapshot().items()})

    def _snapshot(self) -> Mapping[str, LinkRecord]:
        """Serve the cached snapshot, reloading it if the link store changed"""
        fingerprint = self.store.fingerprint()
        cache = self._cache
        if cache is not None and fingerprint is not None and cache[0] == fingerprint:
            return cache[1]

        # NOTE: the fingerprint is taken *before* loading. If the document is
        #       replaced while we load it, the cached fingerprint is stale and
        #       the next read reloads again instead of serving old links forever.
        links = self.store.load()
        snapshot = MappingProxyType(links)
        self._cache = (fingerprint, snapshot)
        logger.debug('Reloaded link store snapshot.', extra={'links': len(links)})
        return snapshot


_registries: dict[str, LinkRegistry] = {}
_registries_lock = threading.Lock()


def get_registry(
    path: str | os.PathLike,
    shortcode_length: int | None = None,
    max_attempts: int | None = None,
) -> LinkRegistry:
    """Return the process-wide registry for a JSON link store

    All callers asking for the same store path share one registry, hence one
    create lock and one snapshot cache. Generation settings which are given
    (not None) are applied to the registry; the others keep their current value.

    Args:
        path (str | os.PathLike): location of the JSON document.
        shortcode_length (int | None): length of generated shortcodes.
        max_attempts (int | None): upper bound on shortcode draws per create().

    Returns:
        LinkRegistry: shared registry instance.
    """
    resolved = os.path.abspath(os.path.expanduser(os.fspath(path)))
    with _registries_lock:
        registry = _registries.get(resolved)
        if registry is None:
            registry = LinkRegistry(LinkJsonDAO(path=resolved))
            _registries[resolved] = registry
            logger.debug('Opened link registry.', extra={'path': resolved})
        if shortcode_length is not None:
            registry.shortcode_length = shortcode_length
        if max_attempts is not None:
            registry.max_attempts = max_attempts
    return registry


def clear_registries() -> None:
    """Drop all process-wide registries (e.g. after reconfiguration)"""
    with _registries_lock:
        _registries.clear()
