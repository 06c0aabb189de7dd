# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the entry models:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# =============================================================================

from datetime import datetime

import pytest
from pydantic import ValidationError

from core.models import Entry, EntryCreate, FetchDataRequest, TableName


class TestEntryCreate:

    def test_valid(self):
        entry = EntryCreate(name="Ada", email="ada@example.com", message="Hello")

        assert entry.to_row() == {"name": "Ada", "email": "ada@example.com", "message": "Hello"}

    def test_store_assigned_fields_are_dropped(self):
        entry = EntryCreate(
            id=5,
            created_at="2024-01-01T00:00:00Z",
            name="Ada",
            email="ada@example.com",
            message="Hello",
        )

        assert "id" not in entry.to_row()
        assert "created_at" not in entry.to_row()

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_required(self, field):
        data = {"name": "Ada", "email": "ada@example.com", "message": "Hello"}
        del data[field]

        with pytest.raises(ValidationError):
            EntryCreate(**data)


class TestEntry:

    def test_from_store_row(self):
        entry = Entry(
            id=1,
            name="Ada",
            email="ada@example.com",
            message="Hello",
            created_at="2025-01-01T00:00:01+00:00",
        )

        assert entry.id == 1
        assert isinstance(entry.created_at, datetime)

    def test_store_fields_optional(self):
        entry = Entry(name="Ada", email="ada@example.com", message="Hello")

        assert entry.id is None
        assert entry.created_at is None


class TestFetchDataRequest:

    def test_entries(self):
        assert FetchDataRequest(table="entries").table is TableName.ENTRIES

    @pytest.mark.parametrize("table", ["users", "ENTRIES", "entries; drop table entries", ""])
    def test_other_tables_rejected(self, table):
        with pytest.raises(ValidationError):
            FetchDataRequest(table=table)
