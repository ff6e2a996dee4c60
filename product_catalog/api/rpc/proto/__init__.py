"""Wire contract, compiled from ``catalog.proto`` when first imported.

``protos`` holds the message classes and ``services`` the servicer base
classes, stubs and ``add_*_to_server`` helpers generated by grpcio-tools.
"""

import grpc

PROTO_PATH = "product_catalog/api/rpc/proto/catalog.proto"

protos, services = grpc.protos_and_services(PROTO_PATH)

PRODUCT_SERVICE_NAME = protos.DESCRIPTOR.services_by_name["ProductService"].full_name
SUBSCRIPTION_SERVICE_NAME = protos.DESCRIPTOR.services_by_name[
    "SubscriptionService"
].full_name

__all__ = [
    "PRODUCT_SERVICE_NAME",
    "PROTO_PATH",
    "SUBSCRIPTION_SERVICE_NAME",
    "protos",
    "services",
]
