# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .entry_service import EntryService

__all__ = [
    "EntryService",
]
