"""
URL configuration for InstanceLicenseService project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import HealthDBView, HealthView, LicenseHealthView, ReadyView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("health/license/", LicenseHealthView.as_view(), name="health-license"),
    path("ready/", ReadyView.as_view(), name="ready"),
    # API endpoints
    path("api/v1/license/", include(("api.v1.license.urls", "license"), namespace="license")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
