"""Subscription plan data access layer."""

from typing import Any

from sqlmodel import Session, func, select

from product_catalog.entities.service.subscription_plan.entity import (
    SubscriptionPlan,
)
from product_catalog.entities.service.subscription_plan.table import (
    SubscriptionPlanTable,
)


class SubscriptionPlanRepository:
    """Data-access layer for subscription plans."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def to_entity(row: SubscriptionPlanTable) -> SubscriptionPlan:
        return SubscriptionPlan(
            id=row.id,
            product_id=row.product_id,
            plan_name=row.plan_name,
            duration=row.duration,
            price=row.price,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def create(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        row = SubscriptionPlanTable(
            id=plan.id,
            product_id=plan.product_id,
            plan_name=plan.plan_name,
            duration=plan.duration,
            price=plan.price,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self.to_entity(row)

    def get(self, plan_id: str) -> SubscriptionPlan | None:
        row = self._session.get(SubscriptionPlanTable, plan_id)
        if row is None:
            return None
        return self.to_entity(row)

    def get_by_product_id(
        self, product_id: str, limit: int, offset: int
    ) -> list[SubscriptionPlan]:
        statement = (
            select(SubscriptionPlanTable)
            .where(SubscriptionPlanTable.product_id == product_id)
            .order_by(SubscriptionPlanTable.created_at, SubscriptionPlanTable.id)
            .offset(offset)
            .limit(limit)
        )
        return [self.to_entity(row) for row in self._session.exec(statement).all()]

    def count_by_product_id(self, product_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(SubscriptionPlanTable)
            .where(SubscriptionPlanTable.product_id == product_id)
        )
        return self._session.exec(statement).one()

    def update(self, plan_id: str, updates: dict[str, Any]) -> SubscriptionPlan | None:
        row = self._session.get(SubscriptionPlanTable, plan_id)
        if row is None:
            return None
        for column, value in updates.items():
            setattr(row, column, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self.to_entity(row)

    def delete(self, plan_id: str) -> bool:
        row = self._session.get(SubscriptionPlanTable, plan_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
