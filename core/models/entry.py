# =============================================================================
# core/models/entry.py - Entry Schemas
# =============================================================================
# These models define the API contract for the entries table:
# - Entry: A stored row as returned by Supabase
# - EntryCreate: Input for the write endpoint
# - TableName: Closed set of tables the read endpoint may query
# - FetchDataRequest: Input for the read endpoint
#
# id and created_at are always assigned by the store; they are never
# accepted from clients.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TableName(str, Enum):
    """
    Tables the read endpoint is allowed to query.

    Table names are resolved server-side from this enum rather than passed
    through from the request, so an authenticated caller cannot read
    arbitrary store objects.
    """
    ENTRIES = "entries"


class EntryCreate(BaseModel):
    """
    Schema for inserting a new entry.

    Unknown fields (including id and created_at) are ignored.

    Example:
        {
            "name": "Ada",
            "email": "ada@example.com",
            "message": "Hello there"
        }
    """

    name: str = Field(..., description="Author name")
    email: str = Field(..., description="Author email")
    message: str = Field(..., description="Message body")

    def to_row(self) -> dict[str, str]:
        """Return the exact columns written to the store."""
        return {
            "name": self.name,
            "email": self.email,
            "message": self.message,
        }


class Entry(BaseModel):
    """A row from the entries table."""

    # Assigned by the store
    id: int | None = Field(default=None, description="Store-assigned identifier")

    name: str
    email: str
    message: str

    # Assigned by the store
    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the row was inserted"
    )


class FetchDataRequest(BaseModel):
    """Request body for the read endpoint."""

    table: TableName = Field(..., description="Table to list, newest rows first")
