"""Product data access layer."""

from typing import Any

from sqlmodel import Session, func, select

from product_catalog.entities.service.product.entity import (
    DigitalDetails,
    PhysicalDetails,
    Product,
    ProductDetails,
    ProductType,
    SubscriptionDetails,
)
from product_catalog.entities.service.product.table import ProductTable


def _details_from_row(row: ProductTable) -> ProductDetails:
    product_type = ProductType(row.type)
    if product_type is ProductType.DIGITAL:
        return DigitalDetails(
            file_size=row.digital_file_size,
            download_link=row.digital_download_link,
        )
    if product_type is ProductType.PHYSICAL:
        return PhysicalDetails(
            weight=row.physical_weight,
            dimensions=row.physical_dimensions,
        )
    return SubscriptionDetails(
        period=row.subscription_period,
        renewal_price=row.subscription_renewal_price,
    )


def _details_columns(details: ProductDetails) -> dict[str, Any]:
    if isinstance(details, DigitalDetails):
        return {
            "digital_file_size": details.file_size,
            "digital_download_link": details.download_link,
        }
    if isinstance(details, PhysicalDetails):
        return {
            "physical_weight": details.weight,
            "physical_dimensions": details.dimensions,
        }
    return {
        "subscription_period": details.period.value,
        "subscription_renewal_price": details.renewal_price,
    }


class ProductRepository:
    """Data-access layer for products.

    Update mappings are keyed by column name, e.g. ``{"price": 9.5,
    "digital_download_link": "https://..."}``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def to_entity(row: ProductTable) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=row.price,
            type=ProductType(row.type),
            details=_details_from_row(row),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def create(self, product: Product) -> Product:
        row = ProductTable(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            type=product.type.value,
            created_at=product.created_at,
            updated_at=product.updated_at,
            **_details_columns(product.details),
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self.to_entity(row)

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self.to_entity(row)

    def list_all(
        self, type_filter: ProductType | None, limit: int, offset: int
    ) -> list[Product]:
        statement = select(ProductTable)
        if type_filter is not None:
            statement = statement.where(ProductTable.type == type_filter.value)
        statement = (
            statement.order_by(ProductTable.created_at, ProductTable.id)
            .offset(offset)
            .limit(limit)
        )
        return [self.to_entity(row) for row in self._session.exec(statement).all()]

    def count(self, type_filter: ProductType | None) -> int:
        statement = select(func.count()).select_from(ProductTable)
        if type_filter is not None:
            statement = statement.where(ProductTable.type == type_filter.value)
        return self._session.exec(statement).one()

    def update(self, product_id: str, updates: dict[str, Any]) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        for column, value in updates.items():
            setattr(row, column, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self.to_entity(row)

    def delete(self, product_id: str) -> bool:
        """Permanently delete a product; its plans go with it via the FK cascade."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
