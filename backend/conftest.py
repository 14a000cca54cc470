"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.core.cache import cache


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test to prevent cache pollution.
    """
    yield  # Run the test
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.post('/api/integrations/doordash/webhooks/orders/', {}, format='json')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_client(api_client, staff_user):
    """
    Provide an API client authenticated as a staff user.

    Usage:
        def test_protected_endpoint(staff_client):
            response = staff_client.get('/api/orders/')
            assert response.status_code == 200
    """
    api_client.force_authenticate(user=staff_user)
    return api_client


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *
