"""Subscription plan database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from product_catalog.entities.core._base import EntityTable


class SubscriptionPlanTable(EntityTable, table=True):
    """Database persistence model for subscription plans."""

    __tablename__ = "subscription_plans"
    __table_args__ = (
        sa.CheckConstraint("duration > 0", name="ck_plans_duration_positive"),
        sa.CheckConstraint("price >= 0", name="ck_plans_price_non_negative"),
    )

    product_id: str = Field(foreign_key="products.id", ondelete="CASCADE", index=True)
    plan_name: str = Field(max_length=255)
    duration: int
    price: float
