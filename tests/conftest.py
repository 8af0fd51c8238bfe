# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds the app around an in-memory mongomock client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a module-level app, which loads settings on import

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/gateway_test")
os.environ.setdefault("ALLOWED_TOKENS", "testtoken")
os.environ.setdefault("ENVIRONMENT", "development")

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

TEST_TOKEN = "testtoken"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings with a single allowed token and a default database."""
    return Settings(
        MONGO_URI="mongodb://localhost:27017/gateway_test",
        ALLOWED_TOKENS=f"{TEST_TOKEN}, othertoken",
    )


@pytest.fixture
def mongo():
    """Fresh in-memory MongoDB for each test."""
    return mongomock.MongoClient()


@pytest.fixture
def client(settings, mongo):
    """TestClient for an app sharing the mongomock client."""
    return TestClient(create_app(settings=settings, mongo_client=mongo))


@pytest.fixture
def auth():
    """Authorization header with an allowed token."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
