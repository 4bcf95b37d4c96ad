"""
Integration tests for the create_activation_code management command.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from licenses.infrastructure.models import ActivationCode


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateActivationCodeCommand:
    """Integration tests for create_activation_code."""

    def test_create(self):
        """Test creating a code from the shell."""
        out = StringIO()

        call_command(
            "create_activation_code", "+221 77 123 45 67", "--order-id", "ORD-7", stdout=out
        )

        assert "Activation code created for +221771234567" in out.getvalue()
        row = ActivationCode.objects.get(phone="+221771234567")
        assert row.order_id == "ORD-7"
        assert row.customer_name == "Manual Entry"

    def test_existing(self):
        """Test a second run reports the existing code."""
        call_command("create_activation_code", "221771234567", stdout=StringIO())
        out = StringIO()

        call_command("create_activation_code", "221771234567", stdout=out)

        assert "already exists" in out.getvalue()
        assert ActivationCode.objects.count() == 1

    def test_invalid_phone(self):
        """Test a malformed phone fails the command."""
        with pytest.raises(CommandError, match="INVALID_PHONE_NUMBER"):
            call_command("create_activation_code", "nope", stdout=StringIO())
