"""Entity: Product."""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from product_catalog.core.validation import (
    DESCRIPTION_MAX_LENGTH,
    DIMENSIONS_MAX_LENGTH,
    MAX_PRICE,
    NAME_MAX_LENGTH,
    sanitize_url,
)
from product_catalog.entities.core._base import Entity


class ProductType(str, Enum):
    """Closed set of product shapes."""

    DIGITAL = "digital"
    PHYSICAL = "physical"
    SUBSCRIPTION = "subscription"


class SubscriptionPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class DigitalDetails(BaseModel):
    """Attributes of a downloadable product."""

    kind: Literal["digital"] = "digital"
    file_size: int = Field(description="File size in bytes")
    download_link: str = Field(description="http(s) URL the file is served from")

    @field_validator("file_size")
    @classmethod
    def _positive_file_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("file size must be greater than 0 for digital products")
        return value

    @field_validator("download_link")
    @classmethod
    def _valid_download_link(cls, value: str) -> str:
        if not value:
            raise ValueError("download link is required for digital products")
        if not sanitize_url(value):
            raise ValueError("invalid download_link format - must be a valid URL")
        return value


class PhysicalDetails(BaseModel):
    """Attributes of a shipped product."""

    kind: Literal["physical"] = "physical"
    weight: float = Field(description="Weight, must be positive")
    dimensions: str = Field(description="Free-text dimensions, e.g. 10x20x5 cm")

    @field_validator("weight")
    @classmethod
    def _positive_weight(cls, value: float) -> float:
        # NaN fails every comparison
        if not value > 0:
            raise ValueError("weight must be greater than 0 for physical products")
        return value

    @field_validator("dimensions")
    @classmethod
    def _valid_dimensions(cls, value: str) -> str:
        if not value:
            raise ValueError("dimensions are required for physical products")
        if len(value) > DIMENSIONS_MAX_LENGTH:
            raise ValueError("dimensions too long")
        return value


class SubscriptionDetails(BaseModel):
    """Attributes of a recurring product."""

    kind: Literal["subscription"] = "subscription"
    period: SubscriptionPeriod
    renewal_price: float

    @field_validator("period", mode="before")
    @classmethod
    def _known_period(cls, value: Any) -> Any:
        if not value:
            raise ValueError("subscription period is required for subscription products")
        try:
            return SubscriptionPeriod(value)
        except ValueError:
            raise ValueError(
                "invalid subscription_period. Must be one of: "
                + ", ".join(period.value for period in SubscriptionPeriod)
            ) from None

    @field_validator("renewal_price")
    @classmethod
    def _positive_renewal_price(cls, value: float) -> float:
        if not value > 0:
            raise ValueError(
                "renewal price must be greater than 0 for subscription products"
            )
        return value


ProductDetails = Annotated[
    DigitalDetails | PhysicalDetails | SubscriptionDetails,
    Field(discriminator="kind"),
]

DETAILS_BY_TYPE: dict[ProductType, type[BaseModel]] = {
    ProductType.DIGITAL: DigitalDetails,
    ProductType.PHYSICAL: PhysicalDetails,
    ProductType.SUBSCRIPTION: SubscriptionDetails,
}


class Product(Entity):
    """Product entity representing a sellable item in the catalog.

    Exactly one variant payload is carried in ``details`` and it always
    matches ``type``.
    """

    name: str = Field(max_length=NAME_MAX_LENGTH, description="Name")
    description: str = Field(
        default="", max_length=DESCRIPTION_MAX_LENGTH, description="Description"
    )
    price: float = Field(ge=0, le=MAX_PRICE, description="Price")
    type: ProductType = Field(description="Product type")
    details: ProductDetails

    @model_validator(mode="after")
    def _details_match_type(self) -> "Product":
        if self.details.kind != self.type.value:
            raise ValueError(
                f"{self.type.value} product cannot carry {self.details.kind} details"
            )
        return self

    @property
    def digital(self) -> DigitalDetails | None:
        return self.details if isinstance(self.details, DigitalDetails) else None

    @property
    def physical(self) -> PhysicalDetails | None:
        return self.details if isinstance(self.details, PhysicalDetails) else None

    @property
    def subscription(self) -> SubscriptionDetails | None:
        return self.details if isinstance(self.details, SubscriptionDetails) else None

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.type == other.type
            and self.details == other.details
        )

    def __hash__(self) -> int:
        """Hash based on identity, ignoring timestamps."""
        return hash((
            self.id,
            self.type,
        ))
