from .auth import BasicAuthInterceptor
from .request_logging import RequestLoggingInterceptor

__all__ = ["BasicAuthInterceptor", "RequestLoggingInterceptor"]
