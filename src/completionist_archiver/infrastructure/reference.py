"""Reference data bootstrap — valid achievement ids, book ids, and account keys.

The snapshot is built once at startup and passed by reference to every
component that validates against it. Building it either fully succeeds
or raises a :class:`ReferenceDataError`; there is no partial snapshot.

Sources:
- ``ExcelOutput/AchievementData.json`` — keyed object, ``AchievementID`` per entry
- ``ExcelOutput/LocalbookConfig.json`` — keyed object, ``BookID`` per entry
- ``Keys.json`` — flat ``{"<uid>": "<base64 key>"}``
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import requests

if TYPE_CHECKING:
    from completionist_archiver.config.models import ResourcesConfig

logger = logging.getLogger(__name__)

ACHIEVEMENT_FILE = Path("ExcelOutput") / "AchievementData.json"
BOOK_FILE = Path("ExcelOutput") / "LocalbookConfig.json"
KEYS_FILE = Path("Keys.json")


# ── Errors ───────────────────────────────────────────────────────────


class ReferenceDataError(Exception):
    """Base class for failures while building the reference snapshot."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class NetworkError(ReferenceDataError):
    """Transport failure or non-2xx response."""


class SourceUnavailableError(ReferenceDataError):
    """A local reference file could not be read."""


class SchemaError(ReferenceDataError):
    """Response body is not JSON, or not shaped as expected."""


class EncodingError(ReferenceDataError):
    """A key entry is not valid base64."""


# ── Snapshot ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReferenceSnapshot:
    """Immutable lookup tables used to validate exported identifiers."""

    achievement_ids: frozenset[int] = frozenset()
    book_ids: frozenset[int] = frozenset()
    keys: Mapping[int, bytes] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.keys, MappingProxyType):
            object.__setattr__(self, "keys", MappingProxyType(dict(self.keys)))

    def key_for(self, uid: int) -> bytes | None:
        """Return the decryption key for account *uid*, if known."""
        return self.keys.get(uid)


# ── Parsing (shared by remote and local loaders) ─────────────────────


def parse_id_table(source: str, document: Any, id_field: str) -> frozenset[int]:
    """Collect *id_field* from every entry of a keyed JSON object."""
    if not isinstance(document, dict):
        raise SchemaError(source, f"expected a JSON object, got {type(document).__name__}")
    ids: set[int] = set()
    for key, entry in document.items():
        if not isinstance(entry, dict):
            raise SchemaError(source, f"entry {key!r} is not an object")
        value = entry.get(id_field)
        # bool is an int subclass; reject it explicitly.
        if not isinstance(value, int) or isinstance(value, bool):
            raise SchemaError(source, f"entry {key!r} has no integer {id_field}")
        ids.add(value)
    return frozenset(ids)


def parse_keys(source: str, document: Any) -> dict[int, bytes]:
    """Decode a ``{"<uid>": "<base64>"}`` table into raw key bytes."""
    if not isinstance(document, dict):
        raise SchemaError(source, f"expected a JSON object, got {type(document).__name__}")
    keys: dict[int, bytes] = {}
    for raw_uid, encoded in document.items():
        try:
            uid = int(raw_uid)
        except ValueError as exc:
            raise SchemaError(source, f"key table uid {raw_uid!r} is not an integer") from exc
        if not isinstance(encoded, str):
            raise SchemaError(source, f"key for uid {uid} is not a string")
        try:
            keys[uid] = base64.b64decode(encoded, validate=True)
        except binascii.Error as exc:
            raise EncodingError(source, f"key for uid {uid} is not valid base64") from exc
    return keys


# ── Remote loader ────────────────────────────────────────────────────


def _get_json(session: requests.Session, url: str, timeout: float | None) -> Any:
    logger.debug("requesting %s", url)
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(url, str(exc)) from exc
    try:
        return response.json()
    except ValueError as exc:
        raise SchemaError(url, "response body is not valid JSON") from exc


def load_reference_snapshot(
    resources: ResourcesConfig,
    *,
    session: requests.Session | None = None,
) -> ReferenceSnapshot:
    """Fetch all three reference datasets and build a snapshot.

    The fetches run sequentially and block. Nothing is retried; the caller
    decides whether a :class:`ReferenceDataError` aborts the process.
    """
    logger.info("initializing reference data from online sources, this might take a while")
    http = session or requests.Session()
    try:
        achievements = parse_id_table(
            resources.achievements_url,
            _get_json(http, resources.achievements_url, resources.timeout),
            "AchievementID",
        )
        books = parse_id_table(
            resources.books_url,
            _get_json(http, resources.books_url, resources.timeout),
            "BookID",
        )
        keys = parse_keys(
            resources.keys_url,
            _get_json(http, resources.keys_url, resources.timeout),
        )
    finally:
        if session is None:
            http.close()

    logger.info(
        "reference data loaded: %d achievements, %d books, %d keys",
        len(achievements),
        len(books),
        len(keys),
    )
    return ReferenceSnapshot(achievement_ids=achievements, book_ids=books, keys=keys)


# ── Local loader ─────────────────────────────────────────────────────


def _read_json(path: Path) -> Any:
    logger.debug("reading %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceUnavailableError(str(path), str(exc)) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaError(str(path), f"invalid JSON: {exc}") from exc


def load_reference_snapshot_from_dir(root: Path) -> ReferenceSnapshot:
    """Build a snapshot from a local checkout of the reference data.

    Expects the same layout as the remote sources: ``ExcelOutput/`` with the
    two tables, and ``Keys.json`` at *root*.
    """
    logger.info("initializing reference data from %s", root)
    achievement_path = root / ACHIEVEMENT_FILE
    book_path = root / BOOK_FILE
    keys_path = root / KEYS_FILE

    achievements = parse_id_table(
        str(achievement_path), _read_json(achievement_path), "AchievementID"
    )
    books = parse_id_table(str(book_path), _read_json(book_path), "BookID")
    keys = parse_keys(str(keys_path), _read_json(keys_path))
    return ReferenceSnapshot(achievement_ids=achievements, book_ids=books, keys=keys)
