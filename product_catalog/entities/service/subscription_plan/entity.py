"""Entity: SubscriptionPlan."""

from typing import Any

from pydantic import Field

from product_catalog.core.validation import (
    MAX_PLAN_DURATION_DAYS,
    MAX_PRICE,
    NAME_MAX_LENGTH,
)
from product_catalog.entities.core._base import Entity


class SubscriptionPlan(Entity):
    """A billing plan attached to a product."""

    product_id: str = Field(description="Identifier of the owning product")
    plan_name: str = Field(max_length=NAME_MAX_LENGTH, description="Plan name")
    duration: int = Field(
        gt=0, le=MAX_PLAN_DURATION_DAYS, description="Plan length in days"
    )
    price: float = Field(gt=0, le=MAX_PRICE, description="Plan price")

    def __eq__(self, other: Any) -> bool:
        """Compare plans by business attributes, ignoring timestamps."""
        if not isinstance(other, SubscriptionPlan):
            return False

        return (
            self.id == other.id
            and self.product_id == other.product_id
            and self.plan_name == other.plan_name
            and self.duration == other.duration
            and self.price == other.price
        )

    def __hash__(self) -> int:
        return hash((self.id, self.product_id))
