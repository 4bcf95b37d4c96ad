"""
Activation API views.

These endpoints are used by the mobile client to:
- Activate a license on the current device
- Check a phone number's license status
- Restore a session from the device fingerprint
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_device import ActivateDeviceCommand
from activations.application.handlers.activate_device_handler import ActivateDeviceHandler
from activations.application.handlers.get_activation_status_handler import (
    GetActivationStatusHandler,
)
from activations.application.handlers.get_device_activation_handler import (
    GetDeviceActivationHandler,
)
from activations.application.queries.get_activation_status import GetActivationStatusQuery
from activations.application.queries.get_device_activation import GetDeviceActivationQuery
from api.exceptions import error_body
from api.v1.activation.serializers import (
    ActivateRequestSerializer,
    ActivateResponseSerializer,
    ActivationDataSerializer,
    ActivationStatusQuerySerializer,
    ActivationStatusResponseSerializer,
    DeviceActivationQuerySerializer,
    DeviceActivationResponseSerializer,
    ProfileSerializer,
)
from core.domain.exceptions import DeviceConflictError, LicenseNotFoundError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class ActivateView(APIView):
    """View for activation (POST) and status by phone (GET)."""

    error_envelope = {"success": False}

    def get_error_envelope(self, request: Request) -> dict:
        if request.method == "GET":
            return {"valid": False}
        return {"success": False}

    def initial(self, request, *args, **kwargs):
        """Pick the error body shape for this request."""
        self.error_envelope = self.get_error_envelope(request)
        super().initial(request, *args, **kwargs)

    @extend_schema(
        operation_id="activate_device",
        summary="Activate License",
        description=(
            "Bind the license of a phone number to the calling device. "
            "A license can only ever be bound to one device; re-activating "
            "from that device is allowed."
        ),
        tags=["Activation API"],
        request=ActivateRequestSerializer,
        responses={
            200: ActivateResponseSerializer,
            400: {"description": "Missing or malformed phone / deviceId"},
            403: {"description": "Already activated on another device"},
            404: {"description": "No license for this phone number"},
            500: {"description": "License store unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license on a device."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate."""
        with tracer.start_as_current_span("activate_device") as span:
            span.set_attribute("operation", "activate_device")

            serializer = ActivateRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    {
                        **error_body(
                            "Phone number and deviceId are required", "VALIDATION_ERROR"
                        ),
                        "details": serializer.errors,
                    },
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = ActivateDeviceHandler(license_repository=_license_repo)
            result = await handler.handle(
                ActivateDeviceCommand(
                    phone=serializer.validated_data["phone"],
                    device_id=serializer.validated_data["deviceId"],
                )
            )

            span.set_attribute("already_activated", result.already_activated)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "message": result.message,
                    "data": ActivationDataSerializer(result).data,
                },
                status=status.HTTP_200_OK,
            )

    @extend_schema(
        operation_id="get_activation_status",
        summary="Check Activation Status",
        description=(
            "Read-only check of a phone number's license. When deviceId is "
            "given, a license bound to another device reports valid=false."
        ),
        tags=["Activation API"],
        parameters=[
            OpenApiParameter(name="phone", type=str, required=True),
            OpenApiParameter(name="deviceId", type=str, required=False),
        ],
        responses={
            200: ActivationStatusResponseSerializer,
            400: {"description": "Missing phone number"},
            500: {"description": "License store unavailable"},
        },
    )
    def get(self, request: Request) -> Response:
        """Check activation status for a phone number."""
        return async_to_sync(self._handle_status)(request)

    async def _handle_status(self, request: Request) -> Response:
        """Async handler for status by phone."""
        with tracer.start_as_current_span("get_activation_status") as span:
            span.set_attribute("operation", "get_activation_status")

            serializer = ActivationStatusQuerySerializer(data=request.query_params)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    error_body("Phone number is required", "VALIDATION_ERROR", {"valid": False}),
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = GetActivationStatusHandler(license_repository=_license_repo)
            try:
                result = await handler.handle(
                    GetActivationStatusQuery(
                        phone=serializer.validated_data["phone"],
                        device_id=serializer.validated_data.get("deviceId") or None,
                    )
                )
            except (LicenseNotFoundError, DeviceConflictError) as exc:
                # A negative answer, not a failure of the check itself.
                span.set_attribute("valid", False)
                return Response(
                    error_body(exc.message, exc.code, {"valid": False}),
                    status=status.HTTP_200_OK,
                )

            span.set_attribute("valid", True)
            return Response(
                {"valid": True, "profile": ProfileSerializer(result.profile).data},
                status=status.HTTP_200_OK,
            )


class CheckDeviceView(APIView):
    """View for restoring a session from a device fingerprint."""

    error_envelope = {"activated": False}

    @extend_schema(
        operation_id="check_device",
        summary="Check Device Activation",
        description=(
            "Look up the license bound to a device fingerprint. A device "
            "without a license returns activated=false, never an error."
        ),
        tags=["Activation API"],
        parameters=[OpenApiParameter(name="fingerprint", type=str, required=True)],
        responses={
            200: DeviceActivationResponseSerializer,
            400: {"description": "Missing fingerprint"},
            500: {"description": "License store unavailable"},
        },
    )
    def get(self, request: Request) -> Response:
        """Check whether a device is activated."""
        return async_to_sync(self._handle_check_device)(request)

    async def _handle_check_device(self, request: Request) -> Response:
        """Async handler for status by device."""
        with tracer.start_as_current_span("check_device") as span:
            span.set_attribute("operation", "check_device")

            serializer = DeviceActivationQuerySerializer(data=request.query_params)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    error_body("Fingerprint required", "VALIDATION_ERROR", self.error_envelope),
                    status=status.HTTP_400_BAD_REQUEST,
                )

            handler = GetDeviceActivationHandler(license_repository=_license_repo)
            result = await handler.handle(
                GetDeviceActivationQuery(device_id=serializer.validated_data["fingerprint"])
            )

            span.set_attribute("activated", result.activated)
            return Response(
                DeviceActivationResponseSerializer(result).data,
                status=status.HTTP_200_OK,
            )
