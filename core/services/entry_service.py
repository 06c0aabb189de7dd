# =============================================================================
# core/services/entry_service.py - Entry Business Logic
# =============================================================================
# Reads and writes rows of the entries table through a Supabase client.
# The client is passed in by the caller, so route handlers (and tests) decide
# which store the service talks to.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.exceptions import StoreFailureError
from core.models.entry import EntryCreate, TableName
from lib.supabase_client import error_message

logger = logging.getLogger(__name__)

ENTRIES_TABLE = TableName.ENTRIES

FETCH_FALLBACK_MESSAGE = "Failed to fetch data from database"
INSERT_FALLBACK_MESSAGE = "Failed to insert entry"


class EntryService:
    """
    Service for entry read/write operations.

    Each call performs exactly one store operation.
    """

    def __init__(self, client: Client):
        self.client = client

    def list_rows(self, table: TableName) -> list[dict[str, Any]]:
        """
        List every row of `table`, newest first.

        Args:
            table: One of the allowed tables

        Returns:
            List of row dicts (empty list when the table is empty)

        Raises:
            StoreFailureError: If the query fails
        """
        table = TableName(table)

        try:
            response = (
                self.client.table(table.value)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch rows from {table.value}: {e}")
            raise StoreFailureError(
                error_message(e, FETCH_FALLBACK_MESSAGE),
                operation="select",
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table.value}")
        return rows

    def create_entry(self, entry: EntryCreate) -> list[dict[str, Any]]:
        """
        Insert one entry.

        Only name, email and message are sent; id and created_at are
        assigned by the store. No deduplication is attempted, so calling
        this twice with the same entry stores two rows.

        Returns:
            The inserted row(s) as returned by the store

        Raises:
            StoreFailureError: If the insert fails
        """
        try:
            response = (
                self.client.table(ENTRIES_TABLE.value)
                .insert([entry.to_row()])
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to insert entry: {e}")
            raise StoreFailureError(
                error_message(e, INSERT_FALLBACK_MESSAGE),
                operation="insert",
            ) from e

        rows = response.data or []
        logger.info(f"Inserted {len(rows)} row(s) into {ENTRIES_TABLE.value}")
        return rows
