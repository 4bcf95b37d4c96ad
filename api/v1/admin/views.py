"""
Admin API views.

Back-office intake of activation codes. Requests must carry the
``X-Admin-Key`` header, checked by ``AdminKeyAuthenticationMiddleware``.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body
from api.v1.admin.serializers import (
    CreateActivationCodeRequestSerializer,
    CreateActivationCodeResponseSerializer,
    LicenseRecordDTOSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)

_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)

ADMIN_KEY_HEADER = OpenApiParameter(
    name="X-Admin-Key",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Back-office secret",
)


class CreateActivationCodeView(APIView):
    """View for creating activation codes."""

    @extend_schema(
        operation_id="create_activation_code",
        summary="Create Activation Code",
        description=(
            "Register an unclaimed license for a buyer's phone number. "
            "Idempotent per phone number: an existing record is returned unchanged."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_KEY_HEADER],
        request=CreateActivationCodeRequestSerializer,
        responses={
            201: CreateActivationCodeResponseSerializer,
            200: CreateActivationCodeResponseSerializer,
            400: {"description": "Missing or malformed phone number"},
            401: {"description": "Invalid admin key"},
        },
    )
    def post(self, request: Request) -> Response:
        """Create an activation code."""
        return async_to_sync(self._handle_post)(request)

    async def _handle_post(self, request: Request) -> Response:
        """Async handler for create."""
        with tracer.start_as_current_span("create_activation_code") as span:
            span.set_attribute("operation", "create_activation_code")

            serializer = CreateActivationCodeRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    {
                        **error_body("Phone number required", "VALIDATION_ERROR"),
                        "details": serializer.errors,
                    },
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = CreateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                CreateLicenseCommand(
                    phone=serializer.validated_data["phone"],
                    order_id=serializer.validated_data.get("order_id"),
                    customer_name=serializer.validated_data.get("customer_name"),
                    customer_email=serializer.validated_data.get("customer_email"),
                )
            )

            span.set_attribute("created", result.created)
            return Response(
                {
                    "success": True,
                    "message": result.message,
                    "created": result.created,
                    "data": LicenseRecordDTOSerializer(result.license).data,
                },
                status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
            )

    @extend_schema(
        operation_id="create_activation_code_usage",
        summary="Activation Code Usage",
        tags=["Admin API"],
        parameters=[ADMIN_KEY_HEADER],
        responses={200: {"description": "Usage example"}},
    )
    def get(self, request: Request) -> Response:
        """Describe how to call this endpoint."""
        return Response(
            {
                "message": "Use POST with the X-Admin-Key header to create activation codes",
                "example": {
                    "phone": "+221771234567",
                    "order_id": "ORDER-123",
                    "customer_name": "Awa Diop",
                    "customer_email": "awa@example.com",
                },
            },
            status=status.HTTP_200_OK,
        )
