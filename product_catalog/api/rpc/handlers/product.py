"""ProductService servicer."""

from typing import Any

import grpc

from product_catalog.api.rpc.handlers.convert import (
    PRODUCT_TYPE_FROM_PROTO,
    product_to_proto,
)
from product_catalog.api.rpc.handlers.errors import translate_errors
from product_catalog.api.rpc.proto import protos, services
from product_catalog.core.exceptions import BadRequest
from product_catalog.core.services.database.db_session import DbSessionService
from product_catalog.core.services.product_service import ProductService
from product_catalog.core.validation import (
    parse_identifier,
    parse_request,
    sanitize_download_link,
    sanitize_text,
)
from product_catalog.entities.service.product import (
    CreateProductRequest,
    ProductType,
    UpdateProductRequest,
)

INVALID_PRODUCT_ID = "invalid product ID"


def _create_details(request: Any, product_type: ProductType | None) -> dict | None:
    """Pick the variant message matching the declared type, if it was sent."""
    if product_type is ProductType.DIGITAL and request.HasField("digital_product"):
        digital = request.digital_product
        return {
            "kind": "digital",
            "file_size": digital.file_size,
            "download_link": sanitize_download_link(digital.download_link),
        }
    if product_type is ProductType.PHYSICAL and request.HasField("physical_product"):
        physical = request.physical_product
        return {
            "kind": "physical",
            "weight": physical.weight,
            "dimensions": sanitize_text(physical.dimensions),
        }
    if product_type is ProductType.SUBSCRIPTION and request.HasField(
        "subscription_product"
    ):
        subscription = request.subscription_product
        return {
            "kind": "subscription",
            "period": subscription.subscription_period.strip(),
            "renewal_price": subscription.renewal_price,
        }
    return None


def build_create_request(request: Any) -> CreateProductRequest:
    product_type = PRODUCT_TYPE_FROM_PROTO.get(request.type)
    return parse_request(
        CreateProductRequest,
        {
            "name": sanitize_text(request.name),
            "description": sanitize_text(request.description),
            "price": request.price,
            "type": product_type,
            "details": _create_details(request, product_type),
        },
    )


def _present_text(request: Any, field: str) -> str | None:
    if not request.HasField(field):
        return None
    return sanitize_text(getattr(request, field)) or None


def build_update_request(request: Any) -> UpdateProductRequest:
    """Collect the fields present on the wire; zero values count as absent."""
    data: dict[str, Any] = {
        "name": _present_text(request, "name"),
        "description": _present_text(request, "description"),
        "price": request.price if request.HasField("price") else None,
    }
    if request.HasField("digital_product"):
        digital = request.digital_product
        data["digital"] = {
            "file_size": digital.file_size or None,
            "download_link": sanitize_download_link(digital.download_link) or None,
        }
    if request.HasField("physical_product"):
        physical = request.physical_product
        data["physical"] = {
            "weight": physical.weight or None,
            "dimensions": sanitize_text(physical.dimensions) or None,
        }
    if request.HasField("subscription_product"):
        subscription = request.subscription_product
        data["subscription"] = {
            "period": subscription.subscription_period.strip() or None,
            "renewal_price": subscription.renewal_price or None,
        }
    return parse_request(UpdateProductRequest, data)


def parse_type_filter(request: Any) -> ProductType | None:
    if not request.HasField("type"):
        return None
    product_type = PRODUCT_TYPE_FROM_PROTO.get(request.type)
    if product_type is None:
        raise BadRequest("invalid product type")
    return product_type


class ProductServicer(services.ProductServiceServicer):
    """Boundary for ``catalog.v1.ProductService``; one session per call."""

    def __init__(self, db_service: DbSessionService):
        self._db = db_service

    @translate_errors
    def CreateProduct(self, request, context: grpc.ServicerContext):
        create_request = build_create_request(request)
        with self._db.session_scope() as session:
            product = ProductService(session).create_product(create_request)
        return protos.CreateProductResponse(product=product_to_proto(product))

    @translate_errors
    def GetProduct(self, request, context: grpc.ServicerContext):
        product_id = parse_identifier(request.id, INVALID_PRODUCT_ID)
        with self._db.session_scope() as session:
            product = ProductService(session).get_product(product_id)
        return protos.GetProductResponse(product=product_to_proto(product))

    @translate_errors
    def UpdateProduct(self, request, context: grpc.ServicerContext):
        product_id = parse_identifier(request.id, INVALID_PRODUCT_ID)
        update_request = build_update_request(request)
        with self._db.session_scope() as session:
            product = ProductService(session).update_product(product_id, update_request)
        return protos.UpdateProductResponse(product=product_to_proto(product))

    @translate_errors
    def DeleteProduct(self, request, context: grpc.ServicerContext):
        product_id = parse_identifier(request.id, INVALID_PRODUCT_ID)
        with self._db.session_scope() as session:
            ProductService(session).delete_product(product_id)
        return protos.DeleteProductResponse(success=True)

    @translate_errors
    def ListProducts(self, request, context: grpc.ServicerContext):
        type_filter = parse_type_filter(request)
        with self._db.session_scope() as session:
            page = ProductService(session).list_products(
                type_filter, request.page, request.page_size
            )
        return protos.ListProductsResponse(
            products=[product_to_proto(product) for product in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )
