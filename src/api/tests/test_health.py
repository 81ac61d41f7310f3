"""Tests for health and root endpoints."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from api.main import app, SERVICE_NAME


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get('/health')

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'healthy'
        assert data['services']['mongodb']['status'] == 'healthy'

    @patch('api.routes.health.get_mongodb_client')
    def test_not_configured(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get('/health')

        assert response.status_code == 503
        assert response.json()['status'] == 'degraded'

    @patch('api.routes.health.get_mongodb_client')
    def test_ping_failure_hides_error_detail(self, mock_get_client):
        client = MagicMock()
        client.admin.command.side_effect = PyMongoError("auth failed for user admin")
        mock_get_client.return_value = client

        response = self.client.get('/health')

        assert response.status_code == 503
        assert 'admin' not in response.text

    def test_root(self):
        response = self.client.get('/')

        assert response.status_code == 200
        assert response.json()['service'] == SERVICE_NAME
        assert response.json()['status'] == 'running'


if __name__ == '__main__':
    unittest.main()
