"""
Unit tests for reload-license propagation between instances.
"""

import pytest

from core.domain.value_objects import ExecutionMode
from core.infrastructure.command_channel import InMemoryCommandBroker, InMemoryCommandChannel
from licensing.container import build_license_services
from licensing.domain.constants import LicenseFeature


@pytest.mark.asyncio
class TestPeerReload:
    """Tests for peers reloading after a license change."""

    async def test_activation_reloads_peer(self, make_config, settings_repository, manager_factory):
        """Test activating on one main makes the peer pick up the new license."""
        broker = InMemoryCommandBroker()
        instances = [
            build_license_services(
                config=make_config(execution_mode=ExecutionMode.QUEUE, instance_id=instance_id),
                manager_factory=manager_factory,
                settings_repository=settings_repository,
                command_channel=InMemoryCommandChannel(sender_id=instance_id, broker=broker),
            )
            for instance_id in ("main-1", "main-2")
        ]
        first, second = instances
        for services in instances:
            await services.lifecycle.init()
            await services.lifecycle.flush()

        assert second.license_state.is_sharing_licensed() is False

        await first.lifecycle.activate("valid-key")
        await first.lifecycle.flush()
        await second.lifecycle.flush()

        assert first.license_state.is_sharing_licensed() is True
        assert second.license_state.is_sharing_licensed() is True
        assert second.license_state.get_max_users() == 5

        for services in instances:
            await services.shutdown()

        assert broker.channels == []
