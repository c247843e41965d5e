"""
Core views for health checks and system status.
"""

from django.db import connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from licensing.container import get_license_services
from licensing.domain.lifecycle_state import LifecycleState


def _check_database() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except Exception:  # pylint: disable=broad-exception-caught
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "instance-license"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                return JsonResponse({"status": "healthy", "database": "connected"})
        except Exception as e:  # pylint: disable=broad-exception-caught
            return JsonResponse(
                {"status": "unhealthy", "database": "disconnected", "error": str(e)},
                status=503,
            )


@method_decorator(csrf_exempt, name="dispatch")
class LicenseHealthView(View):
    """License lifecycle health endpoint."""

    def get(self, _request):
        """Report the license lifecycle state. Anything but ready is degraded."""
        lifecycle = get_license_services().lifecycle
        is_ready = lifecycle.state is LifecycleState.READY
        return JsonResponse(
            {
                "status": "healthy" if is_ready else "degraded",
                "license": str(lifecycle.state),
                "plan": lifecycle.get_plan_name(),
            },
            status=200 if is_ready else 503,
        )


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "database": _check_database(),
            "license": not get_license_services().lifecycle.state.is_terminating,
        }

        all_healthy = all(checks.values())
        status_code = 200 if all_healthy else 503

        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=status_code,
        )
