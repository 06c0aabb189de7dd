# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# Route handlers receive the session, the store client and the services
# built on it as parameters; tests replace any of them through
# app.dependency_overrides.
# =============================================================================

from typing import Annotated, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from core.models.entry import EntryCreate, FetchDataRequest
from core.services.entry_service import EntryService
from lib.supabase_client import SupabaseClient

BodyModel = TypeVar("BodyModel", bound=BaseModel)


def get_supabase_client() -> Client:
    """
    Get Supabase client instance.

    Returns the shared service-role client.
    """
    return SupabaseClient.get_client()


def get_auth_client():
    """
    Get the Supabase Auth API for a single login/signup call.

    A fresh anon-key client is created per call.
    """
    return SupabaseClient.create_auth_client().auth


def get_entry_service(
    client: Annotated[Client, Depends(get_supabase_client)],
) -> EntryService:
    """Build the entry service around the request's store client."""
    return EntryService(client)


# Type aliases for dependency injection
SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
EntryServiceDep = Annotated[EntryService, Depends(get_entry_service)]
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]


async def _parse_body(request: Request, model: type[BodyModel]) -> BodyModel:
    """
    Read and validate a JSON body.

    Called only from dependencies that already require a session, so a
    caller without one gets 401 even when the body is not valid JSON.
    """
    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)]
        ) from e


async def get_fetch_data_request(user: CurrentUserDep, request: Request) -> FetchDataRequest:
    return await _parse_body(request, FetchDataRequest)


async def get_entry_create(user: CurrentUserDep, request: Request) -> EntryCreate:
    return await _parse_body(request, EntryCreate)


FetchDataBodyDep = Annotated[FetchDataRequest, Depends(get_fetch_data_request)]
EntryCreateBodyDep = Annotated[EntryCreate, Depends(get_entry_create)]
