"""
Tests for the health check endpoint.
"""

from __future__ import annotations

from django.db import DatabaseError


class TestHealthCheck:
    def test_healthy(self, client, db):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_database_down(self, client, mocker):
        mock_connection = mocker.patch("core.views.connection")
        mock_connection.cursor.side_effect = DatabaseError("could not connect")

        response = client.get("/health/")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"
