# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the database-facing logic:
# - models/: Pydantic schemas for request targets and responses
# - services/: One service method per gateway operation
#
# Code in this package only raises the gateway's exception types; routing
# and HTTP parsing stay in app/.
# =============================================================================
