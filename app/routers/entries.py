# =============================================================================
# app/routers/entries.py - Entry Data Endpoints
# =============================================================================
# The two authorized data endpoints:
# - POST /fetchData: list a table's rows, newest first
# - POST /postData: insert one entry
#
# Both re-verify the session server-side (the navigation guard does not
# cover /api). The request body is read by a dependency that itself
# requires the session, so a caller without one gets 401 before the body
# is parsed or the store client is built.
#
# Handlers are plain `def`: supabase-py calls block, so FastAPI runs them
# in its threadpool.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import (
    CurrentUserDep,
    EntryCreateBodyDep,
    EntryServiceDep,
    FetchDataBodyDep,
)
from core.models.entry import Entry, EntryCreate, TableName

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    401: {"description": "No valid session"},
    422: {"description": "Malformed or invalid body"},
    500: {"description": "The store reported an error"},
}


def _json_body(schema: dict) -> dict:
    """Document a body that is parsed by a dependency rather than a parameter."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema}},
        }
    }


FETCH_DATA_SCHEMA = {
    "type": "object",
    "required": ["table"],
    "properties": {
        "table": {"type": "string", "enum": [table.value for table in TableName]},
    },
}


@router.post(
    "/fetchData",
    response_model=list[Entry],
    responses=ERROR_RESPONSES,
    openapi_extra=_json_body(FETCH_DATA_SCHEMA),
)
def fetch_data(
    user: CurrentUserDep,
    body: FetchDataBodyDep,
    service: EntryServiceDep,
) -> list[dict]:
    """
    List every row of the requested table, ordered by created_at descending.

    An empty table returns an empty list.
    """
    logger.debug(f"User {user.id} listing {body.table.value}")
    return service.list_rows(body.table)


@router.post(
    "/postData",
    response_model=list[Entry],
    responses=ERROR_RESPONSES,
    openapi_extra=_json_body(EntryCreate.model_json_schema()),
)
def post_data(
    user: CurrentUserDep,
    body: EntryCreateBodyDep,
    service: EntryServiceDep,
) -> list[dict]:
    """
    Insert one entry and return the stored row(s).

    id and created_at are assigned by the store. Identical requests are
    not deduplicated: each call stores a new row.
    """
    rows = service.create_entry(body)
    logger.info(f"User {user.id} created entry {rows[0].get('id') if rows else None}")
    return rows
