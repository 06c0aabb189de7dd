# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - entry.py: Entry read/write schemas and the table allow-list
#
# These models define the "contract" between API and clients.
# =============================================================================

from .entry import (
    Entry,
    EntryCreate,
    FetchDataRequest,
    TableName,
)

__all__ = [
    "Entry",
    "EntryCreate",
    "FetchDataRequest",
    "TableName",
]
