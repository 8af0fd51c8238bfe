# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP gateway:
# - main.py: App factory, lifespan, middleware, error handlers
# - config.py: Environment variable loading and settings
# - auth/: Bearer-token allowlist check
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it validates requests and delegates each
# operation to core.services.CollectionService.
# =============================================================================
