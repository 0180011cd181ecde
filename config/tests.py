import json
import pytest
from unittest.mock import patch
from django.db import DatabaseError
from rest_framework import status
from rest_framework.test import APIClient

from config.views import error_500


@pytest.mark.django_db
class TestHealthCheck:

    def test_healthy(self):
        response = APIClient().get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}

    def test_database_down(self):
        with patch('config.views.connection.cursor', side_effect=DatabaseError('down')):
            response = APIClient().get('/api/health/')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json() == {'status': 'unavailable'}


@pytest.mark.django_db
class TestSchema:

    def test_schema_lists_rating_endpoints(self):
        response = APIClient().get('/api/schema/', {'format': 'json'})

        assert response.status_code == status.HTTP_200_OK
        paths = response.json()['paths']
        assert '/api/v1/ratings/' in paths
        assert '/api/v1/ratings/{content_id}/' in paths


class TestErrorHandlers:
    """Fallback handlers share the API's errors body."""

    def test_unknown_url(self, db):
        response = APIClient().get('/api/v1/does-not-exist/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'errors': {'notFound': 'Resource not found.'}}

    def test_server_error_body(self, rf):
        response = error_500(rf.get('/'))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert json.loads(response.content) == {'errors': {'serverError': 'Internal server error.'}}
