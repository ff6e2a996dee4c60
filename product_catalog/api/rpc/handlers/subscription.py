"""SubscriptionService servicer."""

from typing import Any

import grpc

from product_catalog.api.rpc.handlers.convert import plan_to_proto
from product_catalog.api.rpc.handlers.errors import translate_errors
from product_catalog.api.rpc.proto import protos, services
from product_catalog.core.services.database.db_session import DbSessionService
from product_catalog.core.services.subscription_service import SubscriptionService
from product_catalog.core.validation import (
    parse_identifier,
    parse_request,
    sanitize_text,
)
from product_catalog.entities.service.subscription_plan import (
    CreateSubscriptionPlanRequest,
    UpdateSubscriptionPlanRequest,
)

INVALID_PLAN_ID = "invalid subscription plan ID"


def build_create_request(request: Any) -> CreateSubscriptionPlanRequest:
    return parse_request(
        CreateSubscriptionPlanRequest,
        {
            "product_id": request.product_id.strip(),
            "plan_name": sanitize_text(request.plan_name),
            "duration": request.duration,
            "price": request.price,
        },
    )


def build_update_request(request: Any) -> UpdateSubscriptionPlanRequest:
    plan_name = None
    if request.HasField("plan_name"):
        plan_name = sanitize_text(request.plan_name) or None
    return parse_request(
        UpdateSubscriptionPlanRequest,
        {
            "plan_name": plan_name,
            "duration": request.duration if request.HasField("duration") else None,
            "price": request.price if request.HasField("price") else None,
        },
    )


class SubscriptionServicer(services.SubscriptionServiceServicer):
    """Boundary for ``catalog.v1.SubscriptionService``; one session per call."""

    def __init__(self, db_service: DbSessionService):
        self._db = db_service

    @translate_errors
    def CreateSubscriptionPlan(self, request, context: grpc.ServicerContext):
        create_request = build_create_request(request)
        with self._db.session_scope() as session:
            plan = SubscriptionService(session).create_subscription_plan(create_request)
        return protos.CreateSubscriptionPlanResponse(
            subscription_plan=plan_to_proto(plan)
        )

    @translate_errors
    def GetSubscriptionPlan(self, request, context: grpc.ServicerContext):
        plan_id = parse_identifier(request.id, INVALID_PLAN_ID)
        with self._db.session_scope() as session:
            plan = SubscriptionService(session).get_subscription_plan(plan_id)
        return protos.GetSubscriptionPlanResponse(subscription_plan=plan_to_proto(plan))

    @translate_errors
    def UpdateSubscriptionPlan(self, request, context: grpc.ServicerContext):
        plan_id = parse_identifier(request.id, INVALID_PLAN_ID)
        update_request = build_update_request(request)
        with self._db.session_scope() as session:
            plan = SubscriptionService(session).update_subscription_plan(
                plan_id, update_request
            )
        return protos.UpdateSubscriptionPlanResponse(
            subscription_plan=plan_to_proto(plan)
        )

    @translate_errors
    def DeleteSubscriptionPlan(self, request, context: grpc.ServicerContext):
        plan_id = parse_identifier(request.id, INVALID_PLAN_ID)
        with self._db.session_scope() as session:
            SubscriptionService(session).delete_subscription_plan(plan_id)
        return protos.DeleteSubscriptionPlanResponse(success=True)

    @translate_errors
    def ListSubscriptionPlans(self, request, context: grpc.ServicerContext):
        product_id = parse_identifier(request.product_id, "invalid product ID")
        with self._db.session_scope() as session:
            page = SubscriptionService(session).list_subscription_plans(
                product_id, request.page, request.page_size
            )
        return protos.ListSubscriptionPlansResponse(
            subscription_plans=[plan_to_proto(plan) for plan in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )
