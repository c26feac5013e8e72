"""Data Access Object (DAO) implementation for the link store as a JSON document

This module provides a JSON-file-based implementation of LinkBaseDAO which
reads and writes the whole link store as a single UTF-8 JSON document.

Responsibilities:
    - Load the link store, initializing an empty one on first use;
    - Atomically replace the link store on save (temp file + fsync + rename);
    - Reject unparseable documents with CorruptStoreError instead of repairing them;
    - Read the legacy list format ([{"shortcode": ..., "url": ...}, ...]);
    - Provide a change fingerprint for caching callers.

Document format:
    {
      "abc123": {
        "created_at": "2025-10-15T00:00:00+00:00",
        "target": "https://example.com/page"
      }
    }

Classes:
    LinkJsonDAO:
        DAO for storing and retrieving the link store in a JSON file.

Functions:
    encode_links(links) -> bytes
        Serialize a link store into the JSON document format.
    decode_links(raw, source) -> LinkStore
        Parse a JSON document (current or legacy format) into a link store.

Example:
    >>> from fileshortener.models import LinkRecord
    >>> from fileshortener.dao.jsonfile import LinkJsonDAO

    >>> dao = LinkJsonDAO(path="/tmp/links.json")
    >>> dao.load()
    {}
    >>> dao.save({'abc123': LinkRecord(shortcode='abc123', target='https://example.com/page')})
    <LinkJsonDAO>
    >>> dao.load()['abc123'].target
    'https://example.com/page'
"""

import os
import json
import stat
import logging
import tempfile
from datetime import datetime
from pathlib import Path
from collections.abc import Mapping

from beartype import beartype

from fileshortener.models import LinkRecord
from fileshortener.types import LinkStore
from fileshortener.dao.base import LinkBaseDAO
from fileshortener.dao.jsonfile.mixins import JsonFileMixin
from fileshortener.dao.jsonfile.helpers import handle_os_error
from fileshortener.dao.exceptions import CorruptStoreError, PersistenceError
from fileshortener.utils.constants import JSON_INDENT, MAX_SHORTCODE_LENGTH, URL_SAFE_CHARACTERS


logger = logging.getLogger(__name__)


class LinkJsonDAO(JsonFileMixin, LinkBaseDAO):
    """JSON-file-based Data Access Object (DAO) for the link store

    This class implements the LinkBaseDAO interface using one JSON document as data store.

    Attributes (see JsonFileMixin):
        path (Path):
            Absolute path of the JSON document.

    Methods:
        load() -> LinkStore:
            Read and parse the JSON document. Creates an empty document if none exists.
            Raises CorruptStoreError when the document is malformed.
            Raises PersistenceError on I/O failures.

        save(links: Mapping[str, LinkRecord]) -> LinkJsonDAO:
            Atomically replace the JSON document.
            Raises PersistenceError on I/O failures.

        fingerprint() -> tuple[int, int, int] | None:
            (inode, mtime in ns, size) of the JSON document, None if it doesn't exist.

    Example:
        >>> dao = LinkJsonDAO(path="data/links.json")
        >>> links = dao.load()
        >>> links["abc123"] = LinkRecord(shortcode="abc123", target="https://example.com")
        >>> dao.save(links)
        <LinkJsonDAO>
    """

    def __repr__(self) -> str:
        return f'<LinkJsonDAO path={str(self.path)!r}>'

    @handle_os_error
    @beartype
    def load(self) -> LinkStore:
        """Read the link store from the JSON document

        Returns:
            LinkStore:
                Mapping of shortcode -> LinkRecord. Empty if the document was just created.

        Raises:
            CorruptStoreError:
                If the document isn't valid UTF-8 JSON of the expected structure.
                The document is left untouched.
            PersistenceError:
                If the document can't be read or initialized.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return self._initialize()
        return decode_links(raw, source=self.path)

    @handle_os_error
    @beartype
    def save(self, links: Mapping[str, LinkRecord]) -> 'LinkJsonDAO':
        """Atomically replace the JSON document with `links`

        The document is first written and fsync'ed to a temporary file in the
        same directory, which is then renamed over the document. Readers (and a
        restarted process) therefore see either the previous or the new document,
        never a truncated one.

        Args:
            links (Mapping[str, LinkRecord]):
                The complete link store to persist.

        Returns:
            LinkJsonDAO: self (for method chaining)

        Raises:
            PersistenceError:
                If the link store can't be serialized or written.
        """
        try:
            payload = encode_links(links)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Can't serialize link store for {self.path}.") from e

        try:
            mode = stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            mode = None

        temporary = self._write_temporary(payload, mode=mode)
        try:
            os.replace(temporary, self.path)
        except BaseException:
            temporary.unlink(missing_ok=True)
            raise
        self._fsync_directory()

        logger.debug('Saved link store.', extra={'path': str(self.path), 'links': len(links)})
        return self

    @handle_os_error
    def fingerprint(self) -> tuple[int, int, int] | None:
        """Return (inode, mtime in ns, size) of the JSON document

        Every save() renames a new file over the document, so the inode changes
        on each save even when mtime granularity is coarse.

        Returns:
            tuple[int, int, int] | None: fingerprint, None if the document doesn't exist.
        """
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return None
        return (stat.st_ino, stat.st_mtime_ns, stat.st_size)

    def _initialize(self) -> LinkStore:
        """Persist an empty link store unless another writer got there first"""
        logger.info('Link store not found. Initializing an empty one.', extra={'path': str(self.path)})

        # NOTE: os.link() fails if the document already exists, so a concurrent
        #       save() which lands between our read and this point is never
        #       clobbered by the empty document.
        temporary = self._write_temporary(encode_links({}))
        try:
            os.link(temporary, self.path)
        except FileExistsError:
            return decode_links(self.path.read_bytes(), source=self.path)
        finally:
            temporary.unlink(missing_ok=True)

        self._fsync_directory()
        return {}

    def _write_temporary(self, payload: bytes, mode: int | None = None) -> Path:
        fd, name = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
        temporary = Path(name)
        try:
            with os.fdopen(fd, 'wb') as f:
                if mode is not None:
                    # mkstemp() creates 0600 files; keep the permissions of the replaced document
                    os.fchmod(f.fileno(), mode)
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except BaseException:
            temporary.unlink(missing_ok=True)
            raise
        return temporary

    def _fsync_directory(self) -> None:
        """Flush the rename itself to disk (POSIX only)"""
        if not hasattr(os, 'O_DIRECTORY'):
            return
        try:
            fd = os.open(self.path.parent, os.O_RDONLY | os.O_DIRECTORY)
        except OSError:
            logger.warning('Failed to open link store directory for fsync.', extra={'path': str(self.path.parent)}, exc_info=True)
            return
        try:
            os.fsync(fd)
        except OSError:
            # The document is already replaced at this point; failing here
            # would make the caller roll back a write that did happen.
            logger.warning('Failed to fsync link store directory.', extra={'path': str(self.path.parent)}, exc_info=True)
        finally:
            os.close(fd)


def encode_links(links: Mapping[str, LinkRecord]) -> bytes:
    """Serialize a link store into the JSON document format

    Args:
        links (Mapping[str, LinkRecord]):
            Link store to serialize.

    Returns:
        bytes: UTF-8 encoded, indented JSON document with sorted keys.

    Raises:
        ValueError:
            If a key doesn't match the shortcode of its record.
    """
    document = {}
    for shortcode, link in links.items():
        if shortcode != link.shortcode:
            raise ValueError(f'Key {shortcode!r} does not match record shortcode {link.shortcode!r}.')
        entry = {'target': link.target}
        if link.created_at is not None:
            entry['created_at'] = link.created_at.isoformat()
        document[shortcode] = entry

    return (json.dumps(document, indent=JSON_INDENT, sort_keys=True, ensure_ascii=False) + '\n').encode('utf-8')


def decode_links(raw: bytes, source: os.PathLike | str = '<memory>') -> LinkStore:
    """Parse a JSON document into a link store

    Accepts both the mapping format written by encode_links() and the legacy
    list format: [{"shortcode": "abc", "url": "https://..."}, ...].

    Args:
        raw (bytes):
            Raw document bytes.
        source (os.PathLike | str):
            Document location, used in error messages only.

    Returns:
        LinkStore: Mapping of shortcode -> LinkRecord.

    Raises:
        CorruptStoreError:
            If the document is not valid UTF-8 JSON or doesn't have the expected structure.
    """
    try:
        document = json.loads(raw.decode('utf-8'), object_pairs_hook=_reject_duplicate_keys)
    except ValueError as e:
        # Covers UnicodeDecodeError, json.JSONDecodeError and duplicate keys
        raise CorruptStoreError(f'Link store {source} is not a valid JSON document ({e}).') from e

    if isinstance(document, list):
        return _decode_legacy_links(document, source)
    if not isinstance(document, dict):
        raise CorruptStoreError(f'Link store {source} must hold a JSON object (found {type(document).__name__}).')

    links = {}
    for shortcode, entry in document.items():
        _check_shortcode(shortcode, source)
        if not isinstance(entry, dict) or not isinstance(entry.get('target'), str) or not entry['target']:
            raise CorruptStoreError(f"Link store {source} has a malformed entry for shortcode '{shortcode}'.")
        links[shortcode] = LinkRecord(
            shortcode=shortcode,
            target=entry['target'],
            created_at=_parse_timestamp(entry.get('created_at'), shortcode, source),
        )
    return links


def _decode_legacy_links(document: list, source: os.PathLike | str) -> LinkStore:
    links = {}
    for entry in document:
        if not isinstance(entry, dict):
            raise CorruptStoreError(f'Link store {source} has a malformed legacy entry: {entry!r}.')
        shortcode, target = entry.get('shortcode'), entry.get('url')
        if shortcode == '':
            # Written by the legacy form when the shortcode field was left blank; never reachable
            logger.warning('Skipping legacy entry without shortcode.', extra={'source': str(source), 'target': target})
            continue
        if not isinstance(shortcode, str) or not isinstance(target, str) or not target:
            raise CorruptStoreError(f'Link store {source} has a malformed legacy entry: {entry!r}.')
        _check_shortcode(shortcode, source)
        if shortcode in links:
            raise CorruptStoreError(f"Link store {source} contains shortcode '{shortcode}' more than once.")
        links[shortcode] = LinkRecord(shortcode=shortcode, target=target)
    return links


def _check_shortcode(shortcode: str, source: os.PathLike | str) -> None:
    if not shortcode:
        raise CorruptStoreError(f'Link store {source} contains an empty shortcode.')
    if len(shortcode) > MAX_SHORTCODE_LENGTH or not set(shortcode) <= URL_SAFE_CHARACTERS:
        raise CorruptStoreError(f'Link store {source} contains an invalid shortcode {shortcode!r}.')


def _parse_timestamp(value: object, shortcode: str, source: os.PathLike | str) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CorruptStoreError(f"Link store {source} has a malformed 'created_at' for shortcode '{shortcode}'.")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise CorruptStoreError(f"Link store {source} has a malformed 'created_at' for shortcode '{shortcode}'.") from e


def _reject_duplicate_keys(pairs: list[tuple[str, object]]) -> dict:
    document = {}
    for key, value in pairs:
        if key in document:
            raise ValueError(f"duplicate key '{key}'")
        document[key] = value
    return document
