"""Creation store - ordered, deduplicated, persisted collection of creations."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Protocol

from ..clients.examples import ExampleClient
from ..models.creation import Creation
from .codec import (
    ValidationError,
    creation_from_dict,
    decode_records,
    encode_history,
    history_records,
)

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Failed to write the history (quota exceeded, I/O error)."""

    pass


def _encode(data: str) -> bytes:
    try:
        return data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PersistenceError(f"History is not encodable as UTF-8: {e}") from e


class HistoryPort(Protocol):
    """Where the serialized history lives."""

    def read(self) -> str | None: ...

    def write(self, data: str) -> None: ...


class MemoryHistoryPort:
    """In-memory history, optionally with a byte quota."""

    def __init__(self, data: str | None = None, quota_bytes: int | None = None):
        self.data = data
        self.quota_bytes = quota_bytes
        self.writes = 0

    def read(self) -> str | None:
        return self.data

    def write(self, data: str) -> None:
        if self.quota_bytes is not None and len(_encode(data)) > self.quota_bytes:
            raise PersistenceError(f"History exceeds quota of {self.quota_bytes} bytes")
        self.data = data
        self.writes += 1


class FileHistoryPort:
    """JSON history file on disk with a byte quota."""

    def __init__(self, path: str | Path, quota_bytes: int | None = None):
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def read(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read history {self.path}: {e}")
            return None

    def write(self, data: str) -> None:
        encoded = _encode(data)
        if self.quota_bytes is not None and len(encoded) > self.quota_bytes:
            raise PersistenceError(
                f"History is {len(encoded)} bytes, quota is {self.quota_bytes} bytes"
            )

        # Write to a sibling temp file then swap, so a failed write never truncates the history
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(encoded)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to write history {self.path}: {e}") from e


class CreationStore:
    """
    Owns the creation collection.

    Ordered most-recent-first, unique by id. Every mutation is followed by a
    best-effort persist: a failed write is logged and the in-memory collection
    is kept as is.
    """

    def __init__(self, port: HistoryPort, examples: ExampleClient | None = None):
        self.port = port
        self.examples = examples
        self._creations: list[Creation] = []
        self._loaded = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def creations(self) -> tuple[Creation, ...]:
        return tuple(self._creations)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, creation_id: str) -> Creation | None:
        for creation in self._creations:
            if creation.id == creation_id:
                return creation
        return None

    def __contains__(self, creation_id: object) -> bool:
        return any(c.id == creation_id for c in self._creations)

    def __iter__(self) -> Iterator[Creation]:
        return iter(tuple(self._creations))

    def __len__(self) -> int:
        return len(self._creations)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> tuple[Creation, ...]:
        """
        Load the collection on first access.

        Persisted history always wins when it parses to a non-empty array, even
        if every record in it turns out invalid. Absent, blank, corrupt or empty
        history falls back to the remote examples.
        """
        if self._loaded:
            return self.creations

        raw = self.port.read()
        persisted = self._decode(raw)

        if persisted is not None:
            self._creations = persisted
            logger.info(f"Loaded {len(persisted)} creations from history")
        else:
            self._creations = await self._seed()
            if self._creations:
                self.persist()

        self._loaded = True
        return self.creations

    def _decode(self, raw: str | None) -> list[Creation] | None:
        """Persisted creations, or None when examples should be used instead."""
        if raw is None or not raw.strip():
            return None
        try:
            records = history_records(raw)
        except ValidationError as e:
            logger.warning(f"History is corrupt, falling back to examples: {e}")
            return None
        if not records:
            return None
        return self._dedupe(decode_records(records))

    async def _seed(self) -> list[Creation]:
        """Build the first-run collection from remote examples."""
        if self.examples is None:
            return []

        documents = await self.examples.fetch_all()
        creations = []
        for document in documents:
            try:
                creations.append(creation_from_dict(document))
            except ValidationError as e:
                logger.warning(f"Skipping invalid example: {e}")
        seeded = self._dedupe(creations)
        logger.info(f"Seeded {len(seeded)} example creations")
        return seeded

    @staticmethod
    def _dedupe(creations: list[Creation]) -> list[Creation]:
        """Keep the first occurrence of each id, preserving order."""
        seen: set[str] = set()
        unique = []
        for creation in creations:
            if creation.id in seen:
                logger.warning(f"Dropping duplicate creation id {creation.id}")
                continue
            seen.add(creation.id)
            unique.append(creation)
        return unique

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, creation: Creation) -> bool:
        """
        Prepend a creation.

        Returns:
            True if inserted, False if a creation with the same id already exists
            (the existing one is kept)
        """
        if creation.id in self:
            logger.debug(f"Creation {creation.id} already in store, keeping existing")
            return False

        self._creations.insert(0, creation)
        logger.info(f"Stored creation {creation.id} ({creation.name})")
        self.persist()
        return True

    def remove(self, creation_id: str) -> Creation | None:
        """Remove a creation by id. Returns the removed creation, or None if absent."""
        for index, creation in enumerate(self._creations):
            if creation.id == creation_id:
                del self._creations[index]
                self.persist()
                return creation
        return None

    def persist(self) -> bool:
        """
        Write the whole ordered collection. Best-effort.

        Returns:
            True if written, False if the write failed (logged, not raised)
        """
        try:
            data = encode_history(self._creations)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to serialize history: {e}")
            return False
        try:
            self.port.write(data)
        except PersistenceError as e:
            logger.warning(f"Local storage full or error saving history: {e}")
            return False
        return True
