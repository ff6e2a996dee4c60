"""Per-call request logging with a correlation id."""

import functools
import time
import uuid

import grpc
from loguru import logger

from product_catalog.api.rpc.interceptors.wrapping import Behavior, wrap_handler

REQUEST_ID_KEY = "x-request-id"


def _request_id(metadata) -> str:
    for key, value in metadata or ():
        if key == REQUEST_ID_KEY and value:
            return value
    return str(uuid.uuid4())


class RequestLoggingInterceptor(grpc.ServerInterceptor):
    """Logs ``rpc.start`` / ``rpc.end`` for unary calls.

    Everything logged while the call runs carries ``request_id`` and
    ``method`` in its extra fields.
    """

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None or handler.request_streaming or handler.response_streaming:
            return handler

        method = handler_call_details.method
        request_id = _request_id(handler_call_details.invocation_metadata)

        def log_call(behavior: Behavior) -> Behavior:
            @functools.wraps(behavior)
            def logged(request, context: grpc.ServicerContext):
                start = time.perf_counter()
                with logger.contextualize(request_id=request_id, method=method):
                    logger.info("rpc.start")
                    try:
                        response = behavior(request, context)
                    except Exception as exc:
                        code = context.code() or grpc.StatusCode.UNKNOWN
                        logger.bind(
                            status=code.name,
                            duration_ms=round((time.perf_counter() - start) * 1000, 1),
                            error_type=type(exc).__name__,
                        ).info("rpc.end")
                        raise
                    logger.bind(
                        status=grpc.StatusCode.OK.name,
                        duration_ms=round((time.perf_counter() - start) * 1000, 1),
                    ).info("rpc.end")
                    return response

            return logged

        return wrap_handler(handler, log_call)
