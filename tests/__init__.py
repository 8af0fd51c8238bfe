# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the MongoDB Gateway:
# - test_api.py: Endpoint tests against an in-memory mongomock client
# - test_collection_service.py: Service tests with a mocked driver
# - test_utils.py: Coercion and serialization helpers
# - test_config.py: Settings parsing
# - test_main.py: Application startup and shutdown
# - test_mongo_client.py: MongoDB client construction
#
# Run tests with: pytest
# =============================================================================
