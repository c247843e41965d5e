"""
Unit tests for license domain services.
"""

import pytest

from core.domain.value_objects import InstanceRole, MultiMainRole
from licensing.domain.entitlement import Entitlement
from licensing.domain.services import MainPlanSelector, RenewalPolicy


class TestRenewalPolicy:
    """Tests for RenewalPolicy."""

    @pytest.mark.parametrize(
        "role,auto_renew,multi_main,multi_main_role,expected",
        [
            (InstanceRole.MAIN, True, False, MultiMainRole.UNSET, True),
            (InstanceRole.MAIN, True, True, MultiMainRole.LEADER, True),
            (InstanceRole.MAIN, True, True, MultiMainRole.FOLLOWER, False),
            (InstanceRole.MAIN, True, True, MultiMainRole.UNSET, False),
            (InstanceRole.MAIN, False, False, MultiMainRole.UNSET, False),
            (InstanceRole.MAIN, False, True, MultiMainRole.LEADER, False),
            (InstanceRole.WORKER, True, False, MultiMainRole.UNSET, False),
            (InstanceRole.WORKER, True, True, MultiMainRole.LEADER, False),
            (InstanceRole.WEBHOOK, True, False, MultiMainRole.UNSET, False),
        ],
    )
    def test_is_renewal_enabled(self, role, auto_renew, multi_main, multi_main_role, expected):
        """Test renewal eligibility truth table."""
        assert (
            RenewalPolicy.is_renewal_enabled(
                role=role,
                auto_renew_enabled=auto_renew,
                multi_main_enabled=multi_main,
                multi_main_role=multi_main_role,
            )
            is expected
        )


class TestMainPlanSelector:
    """Tests for MainPlanSelector."""

    def test_select_main_plan(self):
        """Test the entitlement marked as main plan is picked."""
        add_on = Entitlement(id="ent-add-on", product_id="ai-credits")
        main = Entitlement(
            id="ent-main",
            product_id="enterprise",
            product_metadata={"terms": {"isMainPlan": True}},
        )

        assert MainPlanSelector.select([add_on, main]) is main

    def test_select_without_main_plan(self):
        """Test None is returned without a main plan."""
        assert MainPlanSelector.select([Entitlement(id="ent-1", product_id="p")]) is None
