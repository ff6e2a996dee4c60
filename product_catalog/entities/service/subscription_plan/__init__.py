"""Entity package: SubscriptionPlan."""

from .entity import SubscriptionPlan
from .repository import SubscriptionPlanRepository
from .requests import CreateSubscriptionPlanRequest, UpdateSubscriptionPlanRequest
from .table import SubscriptionPlanTable

__all__ = [
    "CreateSubscriptionPlanRequest",
    "SubscriptionPlan",
    "SubscriptionPlanRepository",
    "SubscriptionPlanTable",
    "UpdateSubscriptionPlanRequest",
]
