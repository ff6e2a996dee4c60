"""Product domain operations."""

from typing import Any

from loguru import logger
from sqlmodel import Session

from product_catalog.core.exceptions import BadRequest, NotFound
from product_catalog.core.models import Page
from product_catalog.core.validation import normalize_page
from product_catalog.entities.service.product import (
    CreateProductRequest,
    Product,
    ProductRepository,
    ProductType,
    UpdateProductRequest,
)
from product_catalog.entities.service.product.entity import DETAILS_BY_TYPE


class ProductService:
    """Create, read, update, delete and list products.

    Field-level validation has already happened when the request models were
    built; this layer enforces the type/variant pairing, existence and
    non-empty updates.
    """

    def __init__(self, db_session: Session):
        self._repository = ProductRepository(db_session)

    def create_product(self, request: CreateProductRequest) -> Product:
        expected = DETAILS_BY_TYPE[request.type]
        if not isinstance(request.details, expected):
            kind = request.type.value
            raise BadRequest(
                f"{kind} product information is required for {kind} products"
            )

        product = Product(
            name=request.name,
            description=request.description,
            price=request.price,
            type=request.type,
            details=request.details,
        )
        created = self._repository.create(product)
        logger.info("Created {} product {}", created.type.value, created.id)
        return created

    def get_product(self, product_id: str) -> Product:
        product = self._repository.get(product_id)
        if product is None:
            raise NotFound("product not found")
        return product

    def update_product(self, product_id: str, request: UpdateProductRequest) -> Product:
        """Apply the present fields of ``request``; the product type never changes.

        Only the variant group matching the stored type is read, the other
        groups are ignored.
        """
        existing = self.get_product(product_id)

        updates: dict[str, Any] = {}
        if request.name is not None:
            updates["name"] = request.name
        if request.description is not None:
            updates["description"] = request.description
        if request.price is not None:
            updates["price"] = request.price
        updates.update(self._variant_updates(existing.type, request))

        if not updates:
            raise BadRequest("no fields to update")

        updated = self._repository.update(product_id, updates)
        if updated is None:
            raise NotFound("product not found")
        logger.info("Updated product {} fields {}", product_id, sorted(updates))
        return updated

    @staticmethod
    def _variant_updates(
        product_type: ProductType, request: UpdateProductRequest
    ) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        if product_type is ProductType.DIGITAL and request.digital is not None:
            if request.digital.file_size is not None:
                updates["digital_file_size"] = request.digital.file_size
            if request.digital.download_link is not None:
                updates["digital_download_link"] = request.digital.download_link
        elif product_type is ProductType.PHYSICAL and request.physical is not None:
            if request.physical.weight is not None:
                updates["physical_weight"] = request.physical.weight
            if request.physical.dimensions is not None:
                updates["physical_dimensions"] = request.physical.dimensions
        elif (
            product_type is ProductType.SUBSCRIPTION
            and request.subscription is not None
        ):
            if request.subscription.period is not None:
                updates["subscription_period"] = request.subscription.period.value
            if request.subscription.renewal_price is not None:
                updates["subscription_renewal_price"] = (
                    request.subscription.renewal_price
                )
        return updates

    def delete_product(self, product_id: str) -> None:
        """Hard-delete a product together with its subscription plans."""
        if not self._repository.delete(product_id):
            raise NotFound("product not found")
        logger.info("Deleted product {}", product_id)

    def list_products(
        self, type_filter: ProductType | None = None, page: int = 0, page_size: int = 0
    ) -> Page[Product]:
        page, page_size = normalize_page(page, page_size)
        items = self._repository.list_all(
            type_filter, limit=page_size, offset=(page - 1) * page_size
        )
        total = self._repository.count(type_filter)
        return Page[Product](items=items, total=total, page=page, page_size=page_size)
