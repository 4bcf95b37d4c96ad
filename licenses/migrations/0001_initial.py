import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ActivationCode",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "phone",
                    models.CharField(
                        help_text="Canonical +digits form", max_length=16, unique=True
                    ),
                ),
                (
                    "order_id",
                    models.CharField(help_text="Originating purchase identifier", max_length=100),
                ),
                ("customer_name", models.CharField(blank=True, max_length=200, null=True)),
                ("customer_email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "device_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Fingerprint of the device holding this license",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("used", models.BooleanField(db_index=True, default=False)),
                ("used_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "activation_codes",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["device_id", "used"], name="activation_device_used_idx")
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("device_id__isnull", True), ("used", False))
                            | models.Q(("device_id__isnull", False), ("used", True))
                        ),
                        name="activation_codes_used_iff_bound",
                    )
                ],
            },
        ),
    ]
