"""
Django management command to register an activation code.

Same operation as ``POST /api/v1/admin/codes``, for use from a shell
when the back-office API is not reachable.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)


class Command(BaseCommand):
    """Command to create an unclaimed license for a phone number."""

    help = "Create an activation code (unclaimed license) for a phone number"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("phone", type=str, help="Buyer's phone number")
        parser.add_argument(
            "--order-id",
            type=str,
            default=None,
            help="Order reference (default: MANUAL-<timestamp>)",
        )
        parser.add_argument(
            "--name",
            type=str,
            default=None,
            help="Customer name (default: Manual Entry)",
        )
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Customer email",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = CreateLicenseHandler(license_repository=DjangoLicenseRepository())
        command = CreateLicenseCommand(
            phone=options["phone"],
            order_id=options["order_id"],
            customer_name=options["name"],
            customer_email=options["email"],
        )

        try:
            result = async_to_sync(handler.handle)(command)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

        style = self.style.SUCCESS if result.created else self.style.WARNING
        # pylint: disable=no-member
        self.stdout.write(style(result.message))
        self.stdout.write(f"  order_id: {result.license.order_id}")
        self.stdout.write(f"  claimed:  {'yes' if result.license.used else 'no'}")
