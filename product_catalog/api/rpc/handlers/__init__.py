from .product import ProductServicer
from .subscription import SubscriptionServicer

__all__ = ["ProductServicer", "SubscriptionServicer"]
