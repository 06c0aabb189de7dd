# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for data validation
# - services/: Entry reads/writes against the Supabase store
# - navigation.py: Allow-list policy for the navigation guard
#
# Route handlers live in app/; code here never touches Request objects.
# =============================================================================
