"""Tests for the product domain service."""

import uuid

import pytest

from product_catalog.core.exceptions import BadRequest, NotFound
from product_catalog.core.services.product_service import ProductService
from product_catalog.core.services.subscription_service import SubscriptionService
from product_catalog.entities.service.product import (
    CreateProductRequest,
    DigitalDetails,
    DigitalUpdate,
    PhysicalDetails,
    PhysicalUpdate,
    ProductType,
    SubscriptionUpdate,
    UpdateProductRequest,
)
from product_catalog.entities.service.subscription_plan import (
    CreateSubscriptionPlanRequest,
)


@pytest.fixture
def service(session) -> ProductService:
    return ProductService(session)


def _digital_request(**overrides) -> CreateProductRequest:
    data = {
        "name": "E-Book",
        "description": "A book",
        "price": 9.99,
        "type": ProductType.DIGITAL,
        "details": DigitalDetails(file_size=1, download_link="https://a.com/book"),
    }
    data.update(overrides)
    return CreateProductRequest(**data)


class TestCreateProduct:
    """Test product creation."""

    def test_create_digital_product(self, service):
        product = service.create_product(_digital_request())

        uuid.UUID(product.id)
        assert product.type is ProductType.DIGITAL
        assert product.digital.file_size == 1
        assert product.physical is None
        assert product.subscription is None

    def test_missing_variant_rejected(self, service):
        with pytest.raises(BadRequest) as exc_info:
            service.create_product(_digital_request(details=None))

        assert str(exc_info.value) == (
            "digital product information is required for digital products"
        )

    def test_variant_of_other_type_rejected(self, service):
        request = _digital_request(
            details=PhysicalDetails(weight=1.0, dimensions="1x1x1")
        )

        with pytest.raises(BadRequest, match="digital product information is required"):
            service.create_product(request)

    def test_created_product_is_persisted(self, service):
        product = service.create_product(_digital_request())

        assert service.get_product(product.id) == product


class TestGetAndDeleteProduct:
    """Test lookups and hard deletes."""

    def test_get_unknown_product(self, service):
        with pytest.raises(NotFound) as exc_info:
            service.get_product(str(uuid.uuid4()))

        assert str(exc_info.value) == "product not found"

    def test_delete_unknown_product(self, service):
        with pytest.raises(NotFound):
            service.delete_product(str(uuid.uuid4()))

    def test_delete_product(self, service):
        product = service.create_product(_digital_request())

        service.delete_product(product.id)

        with pytest.raises(NotFound):
            service.get_product(product.id)

    def test_delete_cascades_to_plans(self, db_service, subscription_product):
        with db_service.session_scope() as session:
            product = ProductService(session).create_product(
                CreateProductRequest(
                    name=subscription_product.name,
                    price=subscription_product.price,
                    type=subscription_product.type,
                    details=subscription_product.details,
                )
            )
            plan = SubscriptionService(session).create_subscription_plan(
                CreateSubscriptionPlanRequest(
                    product_id=product.id, plan_name="Monthly", duration=30, price=9.99
                )
            )

        with db_service.session_scope() as session:
            ProductService(session).delete_product(product.id)

        with db_service.session_scope() as session:
            with pytest.raises(NotFound):
                SubscriptionService(session).get_subscription_plan(plan.id)


class TestUpdateProduct:
    """Test partial updates."""

    def test_updates_present_fields_only(self, service):
        product = service.create_product(_digital_request())

        updated = service.update_product(
            product.id, UpdateProductRequest(price=19.99)
        )

        assert updated.price == 19.99
        assert updated.name == "E-Book"
        assert updated.description == "A book"

    def test_merges_individual_variant_fields(self, service):
        product = service.create_product(_digital_request())

        updated = service.update_product(
            product.id,
            UpdateProductRequest(
                digital=DigitalUpdate(download_link="https://b.com/book")
            ),
        )

        assert updated.digital.download_link == "https://b.com/book"
        assert updated.digital.file_size == 1

    def test_type_never_changes(self, service):
        product = service.create_product(_digital_request())

        with pytest.raises(BadRequest, match="no fields to update"):
            service.update_product(
                product.id,
                UpdateProductRequest(
                    physical=PhysicalUpdate(weight=5.0, dimensions="2x2x2"),
                    subscription=SubscriptionUpdate(renewal_price=3.0),
                ),
            )

        stored = service.get_product(product.id)
        assert stored.type is ProductType.DIGITAL
        assert stored.physical is None

    def test_other_type_fields_ignored_alongside_valid_ones(self, service):
        product = service.create_product(_digital_request())

        updated = service.update_product(
            product.id,
            UpdateProductRequest(
                name="Audio Book", physical=PhysicalUpdate(weight=5.0)
            ),
        )

        assert updated.name == "Audio Book"
        assert updated.type is ProductType.DIGITAL
        assert updated.physical is None

    def test_empty_update_rejected(self, service):
        product = service.create_product(_digital_request())

        with pytest.raises(BadRequest) as exc_info:
            service.update_product(product.id, UpdateProductRequest())

        assert str(exc_info.value) == "no fields to update"

    def test_update_unknown_product(self, service):
        with pytest.raises(NotFound):
            service.update_product(str(uuid.uuid4()), UpdateProductRequest(price=1))


class TestListProducts:
    """Test pagination and type filtering."""

    def test_defaults_match_first_page_of_ten(self, service):
        for index in range(12):
            service.create_product(_digital_request(name=f"Book {index}"))
        service.create_product(
            CreateProductRequest(
                name="Lamp",
                price=10,
                type=ProductType.PHYSICAL,
                details=PhysicalDetails(weight=1, dimensions="1x1"),
            )
        )

        defaulted = service.list_products(ProductType.DIGITAL, 0, 0)
        explicit = service.list_products(ProductType.DIGITAL, 1, 10)

        assert defaulted == explicit
        assert defaulted.page == 1
        assert defaulted.page_size == 10
        assert defaulted.total == 12
        assert len(defaulted.items) == 10

    def test_last_page(self, service):
        for index in range(12):
            service.create_product(_digital_request(name=f"Book {index}"))

        page = service.list_products(None, 2, 10)

        assert len(page.items) == 2
        assert page.total == 12

    def test_empty_listing(self, service):
        page = service.list_products(ProductType.SUBSCRIPTION)

        assert page.items == []
        assert page.total == 0
