"""Domain requests for creating and updating subscription plans."""

from pydantic import BaseModel, Field, field_validator

from product_catalog.core.validation import (
    MAX_PLAN_DURATION_DAYS,
    MAX_PRICE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
)


class CreateSubscriptionPlanRequest(BaseModel):
    """Validated input for creating a plan.

    ``product_id`` is parsed by the service, which owns the reference check.
    """

    product_id: str
    plan_name: str = Field(max_length=NAME_MAX_LENGTH)
    duration: int = Field(gt=0, le=MAX_PLAN_DURATION_DAYS)
    price: float = Field(gt=0, le=MAX_PRICE)

    @field_validator("plan_name")
    @classmethod
    def _plan_name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("plan_name is required")
        if len(value) < NAME_MIN_LENGTH:
            raise ValueError(
                f"plan_name must be at least {NAME_MIN_LENGTH} characters"
            )
        return value


class UpdateSubscriptionPlanRequest(BaseModel):
    """Sparse update; ``None`` means the field is left untouched."""

    plan_name: str | None = Field(
        default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    )
    duration: int | None = Field(default=None, gt=0, le=MAX_PLAN_DURATION_DAYS)
    price: float | None = Field(default=None, gt=0, le=MAX_PRICE)
