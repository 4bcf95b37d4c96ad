"""
Activation code Django ORM model.

This is the infrastructure layer model for license records.
Domain entities are in licenses.domain.license.
"""
import uuid

from django.db import models
from django.db.models import Q


class ActivationCode(models.Model):
    """
    A purchased license, keyed by the buyer's canonical phone number.

    ``device_id`` is NULL until the first successful activation and
    never changes afterwards.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone = models.CharField(max_length=16, unique=True, help_text="Canonical +digits form")
    order_id = models.CharField(max_length=100, help_text="Originating purchase identifier")
    customer_name = models.CharField(max_length=200, null=True, blank=True)
    customer_email = models.EmailField(null=True, blank=True)
    device_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        db_index=True,
        help_text="Fingerprint of the device holding this license",
    )
    used = models.BooleanField(default=False, db_index=True)
    used_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "activation_codes"
        app_label = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["device_id", "used"], name="activation_device_used_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(used=False, device_id__isnull=True)
                    | Q(used=True, device_id__isnull=False)
                ),
                name="activation_codes_used_iff_bound",
            ),
        ]

    def __str__(self):
        return self.phone
