"""Conversions between domain entities and wire messages."""

from datetime import datetime

from google.protobuf.timestamp_pb2 import Timestamp

from product_catalog.api.rpc.proto import protos
from product_catalog.entities.service.product import Product, ProductType
from product_catalog.entities.service.subscription_plan import SubscriptionPlan

PRODUCT_TYPE_TO_PROTO: dict[ProductType, int] = {
    ProductType.DIGITAL: protos.DIGITAL,
    ProductType.PHYSICAL: protos.PHYSICAL,
    ProductType.SUBSCRIPTION: protos.SUBSCRIPTION,
}

PRODUCT_TYPE_FROM_PROTO: dict[int, ProductType] = {
    value: product_type for product_type, value in PRODUCT_TYPE_TO_PROTO.items()
}


def to_timestamp(value: datetime) -> Timestamp:
    timestamp = Timestamp()
    timestamp.FromDatetime(value)
    return timestamp


def product_to_proto(product: Product):
    message = protos.Product(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        type=PRODUCT_TYPE_TO_PROTO[product.type],
        created_at=to_timestamp(product.created_at),
        updated_at=to_timestamp(product.updated_at),
    )
    if product.digital is not None:
        message.digital_product.CopyFrom(
            protos.DigitalProduct(
                file_size=product.digital.file_size,
                download_link=product.digital.download_link,
            )
        )
    elif product.physical is not None:
        message.physical_product.CopyFrom(
            protos.PhysicalProduct(
                weight=product.physical.weight,
                dimensions=product.physical.dimensions,
            )
        )
    elif product.subscription is not None:
        message.subscription_product.CopyFrom(
            protos.SubscriptionProduct(
                subscription_period=product.subscription.period.value,
                renewal_price=product.subscription.renewal_price,
            )
        )
    return message


def plan_to_proto(plan: SubscriptionPlan):
    return protos.SubscriptionPlan(
        id=plan.id,
        product_id=plan.product_id,
        plan_name=plan.plan_name,
        duration=plan.duration,
        price=plan.price,
        created_at=to_timestamp(plan.created_at),
        updated_at=to_timestamp(plan.updated_at),
    )
