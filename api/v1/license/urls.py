"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path(
        "",
        views.LicenseInfoView.as_view(),
        name="license-info",
    ),
    path(
        "activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "renew",
        views.RenewLicenseView.as_view(),
        name="renew-license",
    ),
]
