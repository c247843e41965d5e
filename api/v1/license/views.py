"""
License API views.

These endpoints are used by instance administrators to:
- Inspect the current license
- Activate a license key
- Renew the license
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from opentelemetry.trace import Status, StatusCode
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    LicenseInfoResponseSerializer,
)
from core.instrumentation import get_tracer
from licensing.application.commands.activate_license import ActivateLicenseCommand
from licensing.application.handlers.license_handlers import (
    ActivateLicenseHandler,
    GetLicenseInfoHandler,
    RenewLicenseHandler,
)
from licensing.container import get_license_services

tracer = get_tracer(__name__)


class LicenseInfoView(APIView):
    """View for reading the current license."""

    @extend_schema(
        operation_id="get_license_info",
        summary="Get License",
        description="Current plan, lifecycle state, quotas and entitlements of this instance.",
        tags=["License API"],
        responses={200: LicenseInfoResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get license information."""
        return async_to_sync(self._handle_get_info)(request)

    async def _handle_get_info(self, request: Request) -> Response:
        """Async handler for license information."""
        handler = GetLicenseInfoHandler(lifecycle=get_license_services().lifecycle)
        result = await handler.handle()
        return Response(LicenseInfoResponseSerializer(result).data, status=status.HTTP_200_OK)


class ActivateLicenseView(APIView):
    """View for activating a license key."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Exchange an activation key for a license certificate. "
            "The certificate is stored and the new features apply immediately."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: LicenseInfoResponseSerializer,
            400: {"description": "Activation key rejected"},
            503: {"description": "License manager not initialized"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license key."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")

            serializer = ActivateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = ActivateLicenseHandler(lifecycle=get_license_services().lifecycle)
            command = ActivateLicenseCommand(
                activation_key=serializer.validated_data["activation_key"],
            )
            result = await handler.handle(command)

            span.set_attribute("license.plan_name", result.plan_name)
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseInfoResponseSerializer(result).data, status=status.HTTP_200_OK)


class RenewLicenseView(APIView):
    """View for renewing the license."""

    @extend_schema(
        operation_id="renew_license",
        summary="Renew License",
        description="Renew the license certificate with the license server.",
        tags=["License API"],
        request=None,
        responses={
            200: LicenseInfoResponseSerializer,
            503: {"description": "License manager not initialized"},
        },
    )
    def post(self, request: Request) -> Response:
        """Renew the license."""
        return async_to_sync(self._handle_renew)(request)

    async def _handle_renew(self, request: Request) -> Response:
        """Async handler for renew license."""
        with tracer.start_as_current_span("renew_license") as span:
            span.set_attribute("operation", "renew_license")
            handler = RenewLicenseHandler(lifecycle=get_license_services().lifecycle)
            result = await handler.handle()
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseInfoResponseSerializer(result).data, status=status.HTTP_200_OK)
