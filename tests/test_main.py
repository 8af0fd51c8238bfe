# =============================================================================
# tests/test_main.py - Application Lifespan Tests
# =============================================================================
# Runs the app inside `with TestClient(...)` so startup and shutdown fire.
# =============================================================================

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.main import create_app


class TestLifespan:
    """Client creation, startup ping and shutdown."""

    def test_injected_client_pinged_and_left_open(self, settings, auth):
        mongo = MagicMock()
        app = create_app(settings=settings, mongo_client=mongo)

        with TestClient(app) as client:
            mongo.admin.command.assert_called_once_with("ping")
            assert client.get("/health", headers=auth).status_code == 200

        mongo.close.assert_not_called()
        assert app.state.mongo_client is mongo

    def test_unreachable_database_does_not_block_startup(self, settings, auth):
        mongo = MagicMock()
        mongo.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        app = create_app(settings=settings, mongo_client=mongo)

        with TestClient(app) as client:
            response = client.get("/health", headers=auth)

        assert response.status_code == 200
        mongo.close.assert_not_called()

    def test_created_client_closed_on_shutdown(self, settings):
        mongo = MagicMock()
        app = create_app(settings=settings)

        with patch("app.main.create_mongo_client", return_value=mongo) as factory:
            with TestClient(app):
                assert app.state.mongo_client is mongo
                mongo.close.assert_not_called()

        factory.assert_called_once_with(
            settings.MONGO_URI,
            server_selection_timeout_ms=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        )
        mongo.admin.command.assert_called_once_with("ping")
        mongo.close.assert_called_once_with()
        assert app.state.mongo_client is None
