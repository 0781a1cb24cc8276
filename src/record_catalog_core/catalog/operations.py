"""
Catalog Operations
List, get-by-id and insert built on top of CatalogStore
"""

from typing import List

from .errors import EmptyRecordID
from .models import Record
from .store import CatalogStore


class CatalogOperations:
    """Domain actions over a shared CatalogStore"""

    def __init__(self, store: CatalogStore):
        self.store = store

    def list_all(self) -> List[Record]:
        return self.store.snapshot()

    def get_by_id(self, record_id: str) -> Record:
        """
        Raises:
            RecordNotFound: no record has record_id
        """
        return self.store.get(record_id)

    def add_record(self, candidate: Record) -> Record:
        """
        Validate and insert candidate, returning it unchanged.

        Raises:
            EmptyRecordID: candidate.id is empty
            RecordAlreadyExists: candidate.id is already taken
        """
        if candidate.id == "":
            raise EmptyRecordID()
        return self.store.insert(candidate)
