"""
Catalog error taxonomy

Expected conditions derive from CatalogError and carry the status code and
message the HTTP layer renders for them. CatalogInvariantError is not part
of that family: it marks a broken sort/uniqueness invariant.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for recoverable catalog failures"""

    code = "CATALOG_ERROR"
    status_code = 400
    message = "catalog error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MalformedPayload(CatalogError):
    """Request body could not be decoded into a Record"""

    code = "MALFORMED_PAYLOAD"
    status_code = 400
    message = "invalid request body"


class CatalogValidationError(CatalogError):
    """Record failed validation"""

    code = "VALIDATION_ERROR"
    status_code = 400
    message = "invalid record"


class EmptyRecordID(CatalogValidationError):
    code = "EMPTY_ID"
    message = "id is required"


class RecordAlreadyExists(CatalogError):
    code = "RECORD_ALREADY_EXISTS"
    status_code = 409
    message = "song with this id already exists"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__()


class RecordNotFound(CatalogError):
    code = "RECORD_NOT_FOUND"
    status_code = 404
    message = "song not found"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__()


class CatalogInvariantError(RuntimeError):
    """Catalog contents are unsorted or contain duplicate ids"""
    pass
