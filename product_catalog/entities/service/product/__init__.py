"""Entity package: Product."""

from .entity import (
    DigitalDetails,
    PhysicalDetails,
    Product,
    ProductDetails,
    ProductType,
    SubscriptionDetails,
    SubscriptionPeriod,
)
from .repository import ProductRepository
from .requests import (
    CreateProductRequest,
    DigitalUpdate,
    PhysicalUpdate,
    SubscriptionUpdate,
    UpdateProductRequest,
)
from .table import ProductTable

__all__ = [
    "CreateProductRequest",
    "DigitalDetails",
    "DigitalUpdate",
    "PhysicalDetails",
    "PhysicalUpdate",
    "Product",
    "ProductDetails",
    "ProductRepository",
    "ProductTable",
    "ProductType",
    "SubscriptionDetails",
    "SubscriptionPeriod",
    "SubscriptionUpdate",
    "UpdateProductRequest",
]
