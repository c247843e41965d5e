"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from licensing.domain.entitlement import Entitlement


@dataclass
class EntitlementDTO:
    """DTO for entitlement information."""

    id: str
    product_id: str
    is_main_plan: bool
    features: Dict[str, Any]
    valid_from: Optional[datetime]
    valid_to: Optional[datetime]

    @classmethod
    def from_entity(cls, entitlement: Entitlement) -> "EntitlementDTO":
        return cls(
            id=entitlement.id,
            product_id=entitlement.product_id,
            is_main_plan=entitlement.is_main_plan,
            features=dict(entitlement.features),
            valid_from=entitlement.valid_from,
            valid_to=entitlement.valid_to,
        )


@dataclass
class LicenseInfoDTO:
    """DTO for license information response."""

    state: str
    plan_name: str
    info: str
    users_limit: int
    is_within_users_limit: bool
    entitlements: List[EntitlementDTO]
