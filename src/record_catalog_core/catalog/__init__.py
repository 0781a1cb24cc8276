"""
Record Catalog Module
Store, operations and error taxonomy for the in-memory catalog
"""

from .errors import (
    CatalogError,
    CatalogInvariantError,
    CatalogValidationError,
    EmptyRecordID,
    MalformedPayload,
    RecordAlreadyExists,
    RecordNotFound,
)
from .models import SEED_RECORDS, Record
from .operations import CatalogOperations
from .rwlock import ReadWriteLock
from .store import CatalogStore

__all__ = [
    "CatalogError",
    "CatalogInvariantError",
    "CatalogOperations",
    "CatalogStore",
    "CatalogValidationError",
    "EmptyRecordID",
    "MalformedPayload",
    "ReadWriteLock",
    "Record",
    "RecordAlreadyExists",
    "RecordNotFound",
    "SEED_RECORDS",
]
