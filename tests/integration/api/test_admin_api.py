"""
Integration tests for admin API endpoints.
"""

import pytest
from django.test import override_settings
from django.urls import reverse

from licenses.infrastructure.models import ActivationCode


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAPI:
    """Integration tests for POST /api/v1/admin/codes."""

    def test_create_code(self, api_client, admin_headers):
        """Test creating an activation code."""
        response = api_client.post(
            reverse("create-activation-code"),
            {
                "phone": "+221 77 123 45 67",
                "order_id": "ORDER-42",
                "customer_name": "Awa Diop",
                "customer_email": "awa@example.com",
            },
            format="json",
            **admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["created"] is True
        assert data["message"] == "Activation code created for +221771234567"
        assert data["data"]["phone"] == "+221771234567"
        assert data["data"]["order_id"] == "ORDER-42"
        assert data["data"]["used"] is False
        row = ActivationCode.objects.get(phone="+221771234567")
        assert row.customer_name == "Awa Diop"
        assert row.device_id is None

    def test_create_code_defaults(self, api_client, admin_headers):
        """Test manual entries get generated order id and name."""
        response = api_client.post(
            reverse("create-activation-code"),
            {"phone": "221771234567"},
            format="json",
            **admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["order_id"].startswith("MANUAL-")
        assert data["customer_name"] == "Manual Entry"

    def test_create_code_twice(self, api_client, admin_headers):
        """Test a repeated entry returns the existing record with 200."""
        url = reverse("create-activation-code")
        api_client.post(url, {"phone": "221771234567"}, format="json", **admin_headers)

        response = api_client.post(
            url, {"phone": "+221 77 123 45 67"}, format="json", **admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["created"] is False
        assert data["message"] == "Activation code already exists for +221771234567"
        assert ActivationCode.objects.count() == 1

    def test_missing_phone(self, api_client, admin_headers):
        """Test a request without phone gets 400."""
        response = api_client.post(
            reverse("create-activation-code"), {}, format="json", **admin_headers
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_wrong_key(self, api_client):
        """Test a wrong admin key gets 401 and creates nothing."""
        response = api_client.post(
            reverse("create-activation-code"),
            {"phone": "221771234567"},
            format="json",
            HTTP_X_ADMIN_KEY="wrong",
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_ADMIN_KEY"
        assert ActivationCode.objects.count() == 0

    def test_missing_key(self, api_client):
        """Test a request without admin key gets 401."""
        response = api_client.post(
            reverse("create-activation-code"), {"phone": "221771234567"}, format="json"
        )

        assert response.status_code == 401

    @override_settings(ADMIN_SECRET_KEY="")
    def test_admin_api_disabled(self, api_client):
        """Test the admin API is off when no secret is configured."""
        response = api_client.post(
            reverse("create-activation-code"),
            {"phone": "221771234567"},
            format="json",
            HTTP_X_ADMIN_KEY="",
        )

        assert response.status_code == 503

    def test_usage(self, api_client, admin_headers):
        """Test GET describes the endpoint."""
        response = api_client.get(reverse("create-activation-code"), **admin_headers)

        assert response.status_code == 200
        assert "example" in response.json()
