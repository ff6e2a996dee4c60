"""Product database table model."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from product_catalog.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    All product types share this table; variant attributes live in nullable
    columns grouped by prefix and only the group matching ``type`` is filled.
    """

    __tablename__ = "products"
    __table_args__ = (
        sa.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        sa.CheckConstraint(
            "type IN ('digital', 'physical', 'subscription')",
            name="ck_products_type",
        ),
    )

    name: str = Field(max_length=255, index=True)
    description: str = Field(default="", sa_type=sa.Text)
    price: float
    type: str = Field(max_length=20, index=True)

    digital_file_size: int | None = Field(default=None, sa_type=sa.BigInteger)
    digital_download_link: str | None = Field(default=None, sa_type=sa.Text)

    physical_weight: float | None = None
    physical_dimensions: str | None = Field(default=None, max_length=100)

    subscription_period: str | None = Field(default=None, max_length=50)
    subscription_renewal_price: float | None = None

    # Never written: deletes are hard deletes
    deleted_at: datetime | None = Field(default=None, index=True)
