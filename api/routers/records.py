"""Records Router - list, fetch and insert catalog records"""
import json
import logging
from typing import List

from fastapi import Depends, FastAPI, Request, status
from pydantic import ValidationError

from api.models.record_schemas import MessageResponse, RecordOut, RecordPayload
from api.responses import IndentedJSONResponse
from record_catalog_core.catalog import CatalogOperations, MalformedPayload, RecordAlreadyExists

logger = logging.getLogger(__name__)

PREFIX = "/records"
TAGS = ["records"]


def get_catalog(request: Request) -> CatalogOperations:
    """Catalog operations bound to the application's store"""
    return request.app.state.catalog


async def record_payload(request: Request) -> RecordPayload:
    """
    Decode the request body into a RecordPayload.

    An empty body is malformed; a JSON null body counts as an empty object
    so it reaches the empty-id check.
    """
    body = await request.body()
    if not body:
        raise MalformedPayload()
    try:
        data = json.loads(body)
    except ValueError:
        raise MalformedPayload()
    if data is None:
        data = {}
    try:
        return RecordPayload.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Rejected request body: {e.errors()[0]['msg']}")
        raise MalformedPayload()


# Handlers are sync so they run on the threadpool and contend on the
# store's readers-writer lock rather than on the event loop.
def list_records(catalog: CatalogOperations = Depends(get_catalog)):
    """All records in ascending id order"""
    return [RecordOut.from_record(r) for r in catalog.list_all()]


def get_record(record_id: str, catalog: CatalogOperations = Depends(get_catalog)):
    """Fetch one record by id"""
    return RecordOut.from_record(catalog.get_by_id(record_id))


def add_record(
    payload: RecordPayload = Depends(record_payload),
    catalog: CatalogOperations = Depends(get_catalog),
):
    """
    Insert a record at its sorted position

    Errors:
    - 400: body does not parse, or id is empty
    - 409: a record with the same id exists
    """
    try:
        record = catalog.add_record(payload.to_record())
    except RecordAlreadyExists as exc:
        logger.warning(f"Rejected duplicate record id {exc.record_id!r}")
        raise

    logger.info(f"Created record {record.id!r}")
    return RecordOut.from_record(record)


def register_routes(app: FastAPI) -> None:
    """
    Add the /records routes directly on the app.

    Routes pulled in through include_router are wrapped by newer FastAPI
    releases, which hides their endpoint from slowapi's middleware and
    leaves them unlimited.
    """
    app.add_api_route(
        PREFIX,
        list_records,
        methods=["GET"],
        response_model=List[RecordOut],
        response_class=IndentedJSONResponse,
        tags=TAGS,
    )
    app.add_api_route(
        PREFIX + "/{record_id}",
        get_record,
        methods=["GET"],
        response_model=RecordOut,
        response_class=IndentedJSONResponse,
        responses={404: {"model": MessageResponse}},
        tags=TAGS,
    )
    app.add_api_route(
        PREFIX,
        add_record,
        methods=["POST"],
        response_model=RecordOut,
        status_code=status.HTTP_201_CREATED,
        response_class=IndentedJSONResponse,
        responses={
            400: {"model": MessageResponse},
            409: {"model": MessageResponse},
        },
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {
                    "application/json": {"schema": RecordPayload.model_json_schema()}
                },
            }
        },
        tags=TAGS,
    )
