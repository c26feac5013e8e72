"""Abstract base class for link store data access objects (DAOs).

This class establishes a consistent contract for all link store DAO
implementations, regardless of the underlying durable container.

Responsibilities:
    - Read and write the whole link store as one atomic unit.
    - Standardize error handling across storage implementations.
    - Expose a cheap change token so callers can cache the loaded store.

Example:
    Typical usage with a storage-specific implementation:

        >>> from fileshortener.models import LinkRecord
        >>> from fileshortener.dao import LinkJsonDAO

        >>> dao = LinkJsonDAO(path='links.json')
        >>> links = dao.load()
        >>> links['a1b2c3'] = LinkRecord(shortcode='a1b2c3', target='https://example.com')
        >>> dao.save(links)

        >>> dao.load()['a1b2c3'].target
        'https://example.com'

NOTE:
    The DAO has no notion of uniqueness or locking. Read-modify-write cycles
    must be serialized by the caller (see fileshortener.registry.LinkRegistry).
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from fileshortener.models import LinkRecord
from fileshortener.types import LinkStore, StoreFingerprint


class LinkBaseDAO(ABC):
    """Interface for link store data access objects (DAOs).

    Methods:
        load() -> LinkStore:
            Read the complete link store. Initializes an empty durable store
            when none exists yet.
            Raises CorruptStoreError if the durable data cannot be parsed.
            Raises PersistenceError on read failure.

        save(links: Mapping[str, LinkRecord]) -> LinkBaseDAO:
            Atomically replace the durable store with `links`.
            Raises PersistenceError on write failure.

        fingerprint() -> StoreFingerprint | None:
            Return a token which changes whenever the durable store is replaced.
            None if no durable store exists.

    Subclassing:
        Storage-specific implementations (e.g. LinkJsonDAO) must extend this
        class and implement all abstract methods.
    """

    @abstractmethod
    def load(self) -> LinkStore:
        """Read the complete link store from durable storage.

        If no durable representation exists yet, an empty one is persisted
        before returning, so durable storage is always well-formed afterwards.

        Returns:
            LinkStore: Freshly built mapping of shortcode -> LinkRecord.

        Raises:
            CorruptStoreError:
                If the durable bytes are not a well-formed link store.

            PersistenceError:
                If the durable store cannot be read.
        """
        pass

    @abstractmethod
    def save(self, links: Mapping[str, LinkRecord]) -> 'LinkBaseDAO':
        """Replace the durable link store with `links`.

        Implementations must never leave a partially written store behind,
        even if the process dies mid-write.

        Args:
            links (Mapping[str, LinkRecord]):
                The complete link store to persist.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            PersistenceError:
                If the durable store cannot be written.
        """
        pass

    @abstractmethod
    def fingerprint(self) -> StoreFingerprint | None:
        """Return a change token for the durable store.

        Returns:
            StoreFingerprint | None: token, or None when nothing is persisted yet.

        Raises:
            PersistenceError:
                If the durable store cannot be inspected.
        """
        pass
