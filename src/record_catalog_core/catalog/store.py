"""
Catalog Store
Ordered, uniquely-keyed record sequence guarded by a readers-writer lock
"""

from bisect import bisect_left
from operator import attrgetter
from typing import Iterable, List, Optional, Tuple

from .errors import CatalogInvariantError, RecordAlreadyExists, RecordNotFound
from .models import SEED_RECORDS, Record
from .rwlock import ReadWriteLock

_record_id = attrgetter("id")


def _sorted_unique(records: Iterable[Record]) -> List[Record]:
    ordered = sorted(records, key=_record_id)
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.id == cur.id:
            raise CatalogInvariantError(f"duplicate record id in seed: {cur.id!r}")
    return ordered


class CatalogStore:
    """
    In-memory record catalog.

    Records are kept sorted ascending by id (str comparison) with no
    duplicate ids. Reads share the lock; inserts hold it exclusively for
    the position search and the splice, so an insert is either fully
    visible or not visible at all.

    Usage:
        store = CatalogStore()
        store.insert(Record(id="4", title="Levitating", artist="Dua Lipa", price=1.29))
        records = store.snapshot()
    """

    def __init__(self, seed: Iterable[Record] = SEED_RECORDS):
        self._seed: Tuple[Record, ...] = tuple(_sorted_unique(seed))
        self._records: List[Record] = list(self._seed)
        self._lock = ReadWriteLock()

    def _search(self, record_id: str) -> int:
        # Caller must hold the lock
        return bisect_left(self._records, record_id, key=_record_id)

    def _occupied(self, index: int, record_id: str) -> bool:
        return index < len(self._records) and self._records[index].id == record_id

    def snapshot(self) -> List[Record]:
        """Return an independent copy of the ordered records"""
        with self._lock.read_locked():
            return list(self._records)

    def find_index(self, record_id: str) -> int:
        """
        Binary search for record_id.

        Returns the position holding record_id, or the position where it
        would be inserted to keep the sequence sorted.
        """
        with self._lock.read_locked():
            return self._search(record_id)

    def get(self, record_id: str) -> Record:
        """Return the record with record_id or raise RecordNotFound"""
        with self._lock.read_locked():
            index = self._search(record_id)
            if self._occupied(index, record_id):
                return self._records[index]
        raise RecordNotFound(record_id)

    def insert(self, record: Record) -> Record:
        """
        Insert record at its sorted position.

        Raises:
            RecordAlreadyExists: a record with the same id is present;
                the store is left unchanged
        """
        with self._lock.write_locked():
            index = self._search(record.id)
            if self._occupied(index, record.id):
                raise RecordAlreadyExists(record.id)
            self._records.insert(index, record)
        return record

    def reset(self, seed: Optional[Iterable[Record]] = None) -> None:
        """Replace the contents with seed, or with the construction seed"""
        records = list(self._seed) if seed is None else _sorted_unique(seed)
        with self._lock.write_locked():
            self._records = records

    def check_invariants(self) -> None:
        """Raise CatalogInvariantError unless ids are strictly increasing"""
        with self._lock.read_locked():
            records = list(self._records)
        for index in range(1, len(records)):
            prev, cur = records[index - 1].id, records[index].id
            if prev >= cur:
                raise CatalogInvariantError(
                    f"catalog out of order at position {index}: {prev!r} >= {cur!r}"
                )

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)
