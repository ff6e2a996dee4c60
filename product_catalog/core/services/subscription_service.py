"""Subscription plan domain operations."""

from typing import Any

from loguru import logger
from sqlmodel import Session

from product_catalog.core.exceptions import BadRequest, NotFound
from product_catalog.core.models import Page
from product_catalog.core.validation import normalize_page, parse_identifier
from product_catalog.entities.service.subscription_plan import (
    CreateSubscriptionPlanRequest,
    SubscriptionPlan,
    SubscriptionPlanRepository,
    UpdateSubscriptionPlanRequest,
)


class SubscriptionService:
    """CRUD over subscription plans.

    The owning product is not looked up on create; the foreign key rejects
    plans for unknown products.
    """

    def __init__(self, db_session: Session):
        self._repository = SubscriptionPlanRepository(db_session)

    def create_subscription_plan(
        self, request: CreateSubscriptionPlanRequest
    ) -> SubscriptionPlan:
        product_id = parse_identifier(request.product_id, "invalid product ID format")
        plan = SubscriptionPlan(
            product_id=product_id,
            plan_name=request.plan_name,
            duration=request.duration,
            price=request.price,
        )
        created = self._repository.create(plan)
        logger.info(
            "Created subscription plan {} for product {}", created.id, created.product_id
        )
        return created

    def get_subscription_plan(self, plan_id: str) -> SubscriptionPlan:
        plan = self._repository.get(plan_id)
        if plan is None:
            raise NotFound("subscription plan not found")
        return plan

    def update_subscription_plan(
        self, plan_id: str, request: UpdateSubscriptionPlanRequest
    ) -> SubscriptionPlan:
        self.get_subscription_plan(plan_id)

        updates: dict[str, Any] = request.model_dump(exclude_none=True)
        if not updates:
            raise BadRequest("no fields to update")

        updated = self._repository.update(plan_id, updates)
        if updated is None:
            raise NotFound("subscription plan not found")
        return updated

    def delete_subscription_plan(self, plan_id: str) -> None:
        if not self._repository.delete(plan_id):
            raise NotFound("subscription plan not found")
        logger.info("Deleted subscription plan {}", plan_id)

    def list_subscription_plans(
        self, product_id: str, page: int = 0, page_size: int = 0
    ) -> Page[SubscriptionPlan]:
        page, page_size = normalize_page(page, page_size)
        items = self._repository.get_by_product_id(
            product_id, limit=page_size, offset=(page - 1) * page_size
        )
        total = self._repository.count_by_product_id(product_id)
        return Page[SubscriptionPlan](
            items=items, total=total, page=page, page_size=page_size
        )
