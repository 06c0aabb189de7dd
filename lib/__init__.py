# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Construction of Supabase service and auth clients
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, error_message

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
    "error_message",
]
