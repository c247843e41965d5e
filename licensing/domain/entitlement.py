"""
Entitlement domain entity.

An entitlement is one grant inside a license certificate: a product plan with
the features and quotas it carries.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Entitlement:
    """
    Entitlement domain entity.

    Immutable snapshot reported by the entitlement manager.
    """

    id: str
    product_id: str
    features: Dict[str, Any] = field(default_factory=dict)
    product_metadata: Dict[str, Any] = field(default_factory=dict)
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None

    @property
    def is_main_plan(self) -> bool:
        """Whether the product terms mark this entitlement as the main plan."""
        terms = self.product_metadata.get("terms") or {}
        return bool(terms.get("isMainPlan", False))

    def is_active(self, at: Optional[datetime] = None) -> bool:
        """
        Check whether the entitlement is valid at a point in time.

        Args:
            at: Point in time (defaults to now, timezone-naive UTC)

        Returns:
            True if inside the validity window
        """
        at = at or datetime.now(timezone.utc).replace(tzinfo=None)
        if self.valid_from and at < self.valid_from:
            return False
        if self.valid_to and at > self.valid_to:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert entitlement to dictionary for serialization."""
        return {
            "id": self.id,
            "product_id": self.product_id,
            "features": dict(self.features),
            "product_metadata": dict(self.product_metadata),
            "valid_from": self.valid_from.isoformat() if self.valid_from else None,
            "valid_to": self.valid_to.isoformat() if self.valid_to else None,
        }
