"""Domain requests for creating and updating products."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from product_catalog.core.validation import (
    DESCRIPTION_MAX_LENGTH,
    DIMENSIONS_MAX_LENGTH,
    MAX_PRICE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    sanitize_url,
)
from product_catalog.entities.service.product.entity import (
    ProductDetails,
    ProductType,
    SubscriptionPeriod,
)


class CreateProductRequest(BaseModel):
    """Validated input for creating a product.

    ``details`` may be missing or belong to another type here; the service
    rejects that with a message naming the expected variant.
    """

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    price: float = Field(ge=0, le=MAX_PRICE)
    type: ProductType
    details: ProductDetails | None = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("product name is required")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        try:
            return ProductType(value)
        except ValueError:
            raise ValueError("invalid product type") from None


class DigitalUpdate(BaseModel):
    file_size: int | None = Field(default=None, gt=0)
    download_link: str | None = None

    @field_validator("download_link")
    @classmethod
    def _valid_download_link(cls, value: str | None) -> str | None:
        if value is not None and not sanitize_url(value):
            raise ValueError("invalid download_link format - must be a valid URL")
        return value


class PhysicalUpdate(BaseModel):
    weight: float | None = Field(default=None, gt=0)
    dimensions: str | None = Field(default=None, max_length=DIMENSIONS_MAX_LENGTH)


class SubscriptionUpdate(BaseModel):
    period: SubscriptionPeriod | None = None
    renewal_price: float | None = Field(default=None, gt=0)

    @field_validator("period", mode="before")
    @classmethod
    def _known_period(cls, value: Any) -> Any:
        if value is None:
            return value
        try:
            return SubscriptionPeriod(value)
        except ValueError:
            raise ValueError(
                "invalid subscription_period. Must be one of: "
                + ", ".join(period.value for period in SubscriptionPeriod)
            ) from None


class UpdateProductRequest(BaseModel):
    """Sparse update; ``None`` means the field is left untouched.

    All three variant groups may be supplied, only the one matching the stored
    product type is applied.
    """

    name: str | None = Field(
        default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    digital: DigitalUpdate | None = None
    physical: PhysicalUpdate | None = None
    subscription: SubscriptionUpdate | None = None
