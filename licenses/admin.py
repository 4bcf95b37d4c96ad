"""
Django admin configuration for licenses app.
"""
from django import forms
from django.contrib import admin
from django.utils.html import format_html

from core.domain.exceptions import InvalidPhoneNumberError
from core.domain.value_objects import PhoneNumber
from licenses.infrastructure.models import ActivationCode


class ActivationCodeAdminForm(forms.ModelForm):
    """Stores phone numbers in the canonical form activation looks up."""

    # Room for separators typed by the operator; the stored value is shorter
    phone = forms.CharField(max_length=32, help_text="Stored as +digits")

    class Meta:
        model = ActivationCode
        fields = "__all__"

    def clean_phone(self):
        try:
            return PhoneNumber.normalize(self.cleaned_data.get("phone")).value
        except InvalidPhoneNumberError as e:
            raise forms.ValidationError(e.message, code="invalid_phone") from e


@admin.register(ActivationCode)
class ActivationCodeAdmin(admin.ModelAdmin):
    """Admin interface for ActivationCode model."""

    form = ActivationCodeAdminForm
    list_display = [
        "phone",
        "customer_name",
        "order_id",
        "claim_display",
        "device_id",
        "used_at",
        "created_at",
    ]
    list_filter = ["used", "created_at", "used_at"]
    search_fields = ["phone", "order_id", "customer_name", "customer_email", "device_id"]
    # Binding is only ever changed through the activation endpoint
    readonly_fields = ["id", "device_id", "used", "used_at", "created_at"]
    fieldsets = (
        (
            "Buyer",
            {
                "fields": ("id", "phone", "customer_name", "customer_email", "order_id"),
            },
        ),
        (
            "Device Binding",
            {
                "fields": ("used", "device_id", "used_at"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def claim_display(self, obj):
        """Display claimed/unclaimed with color coding."""
        if obj.used:
            return format_html(
                '<span style="color: {}; font-weight: bold;">{}</span>', "green", "CLAIMED"
            )
        return format_html('<span style="color: {};">{}</span>', "gray", "UNCLAIMED")

    claim_display.short_description = "Status"
