"""End-to-end tests of SubscriptionService over an in-process gRPC server."""

import uuid

import grpc
import pytest

from product_catalog.api.rpc.proto import protos


@pytest.fixture
def product_id(product_stub, auth_metadata) -> str:
    response = product_stub.CreateProduct(
        protos.CreateProductRequest(
            name="Music",
            price=0,
            type=protos.SUBSCRIPTION,
            subscription_product=protos.SubscriptionProduct(
                subscription_period="monthly", renewal_price=9.99
            ),
        ),
        metadata=auth_metadata,
    )
    return response.product.id


def _create_plan(stub, metadata, product_id, **overrides):
    request = protos.CreateSubscriptionPlanRequest(
        product_id=product_id, plan_name="Monthly", duration=30, price=29.99
    )
    for field, value in overrides.items():
        setattr(request, field, value)
    return stub.CreateSubscriptionPlan(request, metadata=metadata).subscription_plan


class TestCreateSubscriptionPlan:
    """Test CreateSubscriptionPlan."""

    def test_round_trip(self, subscription_stub, auth_metadata, product_id):
        created = _create_plan(subscription_stub, auth_metadata, product_id)

        fetched = subscription_stub.GetSubscriptionPlan(
            protos.GetSubscriptionPlanRequest(id=created.id), metadata=auth_metadata
        ).subscription_plan

        assert fetched.plan_name == "Monthly"
        assert fetched.duration == 30
        assert fetched.price == pytest.approx(29.99)
        assert fetched.product_id == product_id

    def test_malformed_product_id(self, subscription_stub, auth_metadata):
        with pytest.raises(grpc.RpcError) as exc_info:
            _create_plan(subscription_stub, auth_metadata, "not-a-uuid")

        assert exc_info.value.code() == grpc.StatusCode.INVALID_ARGUMENT
        assert exc_info.value.details() == "invalid product ID format"

    def test_unknown_product_is_internal_error(self, subscription_stub, auth_metadata):
        with pytest.raises(grpc.RpcError) as exc_info:
            _create_plan(subscription_stub, auth_metadata, str(uuid.uuid4()))

        assert exc_info.value.code() == grpc.StatusCode.INTERNAL
        assert exc_info.value.details() == "internal server error"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"plan_name": ""},
            {"plan_name": "A"},
            {"duration": 0},
            {"duration": 3651},
            {"price": 0},
            {"price": 1_000_001},
        ],
    )
    def test_field_constraints(
        self, subscription_stub, auth_metadata, product_id, overrides
    ):
        with pytest.raises(grpc.RpcError) as exc_info:
            _create_plan(subscription_stub, auth_metadata, product_id, **overrides)

        assert exc_info.value.code() == grpc.StatusCode.INVALID_ARGUMENT


class TestUpdateAndDeleteSubscriptionPlan:
    """Test UpdateSubscriptionPlan and DeleteSubscriptionPlan."""

    def test_update_duration_only(self, subscription_stub, auth_metadata, product_id):
        created = _create_plan(subscription_stub, auth_metadata, product_id)

        updated = subscription_stub.UpdateSubscriptionPlan(
            protos.UpdateSubscriptionPlanRequest(id=created.id, duration=365),
            metadata=auth_metadata,
        ).subscription_plan

        assert updated.duration == 365
        assert updated.plan_name == "Monthly"

    def test_update_without_fields(self, subscription_stub, auth_metadata, product_id):
        created = _create_plan(subscription_stub, auth_metadata, product_id)

        with pytest.raises(grpc.RpcError) as exc_info:
            subscription_stub.UpdateSubscriptionPlan(
                protos.UpdateSubscriptionPlanRequest(id=created.id),
                metadata=auth_metadata,
            )

        assert exc_info.value.code() == grpc.StatusCode.INVALID_ARGUMENT
        assert exc_info.value.details() == "no fields to update"

    def test_delete(self, subscription_stub, auth_metadata, product_id):
        created = _create_plan(subscription_stub, auth_metadata, product_id)

        response = subscription_stub.DeleteSubscriptionPlan(
            protos.DeleteSubscriptionPlanRequest(id=created.id), metadata=auth_metadata
        )

        assert response.success is True
        with pytest.raises(grpc.RpcError) as exc_info:
            subscription_stub.GetSubscriptionPlan(
                protos.GetSubscriptionPlanRequest(id=created.id),
                metadata=auth_metadata,
            )
        assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND
        assert exc_info.value.details() == "subscription plan not found"

    def test_deleting_product_removes_plans(
        self, product_stub, subscription_stub, auth_metadata, product_id
    ):
        created = _create_plan(subscription_stub, auth_metadata, product_id)

        product_stub.DeleteProduct(
            protos.DeleteProductRequest(id=product_id), metadata=auth_metadata
        )

        with pytest.raises(grpc.RpcError) as exc_info:
            subscription_stub.GetSubscriptionPlan(
                protos.GetSubscriptionPlanRequest(id=created.id),
                metadata=auth_metadata,
            )
        assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND


class TestListSubscriptionPlans:
    """Test ListSubscriptionPlans."""

    def test_pagination(self, subscription_stub, auth_metadata, product_id):
        for index in range(3):
            _create_plan(
                subscription_stub, auth_metadata, product_id, plan_name=f"Plan {index}"
            )

        response = subscription_stub.ListSubscriptionPlans(
            protos.ListSubscriptionPlansRequest(product_id=product_id, page_size=2),
            metadata=auth_metadata,
        )

        assert len(response.subscription_plans) == 2
        assert response.total == 3
        assert response.page == 1
        assert response.page_size == 2

    def test_malformed_product_id(self, subscription_stub, auth_metadata):
        with pytest.raises(grpc.RpcError) as exc_info:
            subscription_stub.ListSubscriptionPlans(
                protos.ListSubscriptionPlansRequest(product_id="nope"),
                metadata=auth_metadata,
            )

        assert exc_info.value.code() == grpc.StatusCode.INVALID_ARGUMENT
