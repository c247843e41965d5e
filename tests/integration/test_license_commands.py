"""
Integration tests for license management commands.
"""

from io import StringIO

import pytest
from django.core.management import call_command

from licensing.domain.constants import SETTINGS_LICENSE_CERT_KEY
from licensing.domain.lifecycle_state import LifecycleState
from licensing.infrastructure.models import Setting


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestLicenseCommands:
    """Integration tests for license management commands."""

    def test_license_info(self, license_services):
        """Test printing license information."""
        out = StringIO()

        call_command("license_info", stdout=out)

        output = out.getvalue()
        assert "InMemoryEntitlementManager" in output
        assert "Plan: Community" in output
        assert "Consumer:" in output
        assert license_services.lifecycle.state is LifecycleState.READY

    def test_license_clear(self, license_services, certificate_factory):
        """Test clearing the stored certificate."""
        Setting.objects.create(
            key=SETTINGS_LICENSE_CERT_KEY,
            value=certificate_factory({"feat:sharing": True}),
        )
        out = StringIO()

        call_command("license_clear", stdout=out)

        assert "Successfully cleared license" in out.getvalue()
        assert not Setting.objects.filter(key=SETTINGS_LICENSE_CERT_KEY).exists()
        assert license_services.lifecycle.state is LifecycleState.SHUT_DOWN
