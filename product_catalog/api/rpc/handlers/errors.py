"""Translation of domain errors into gRPC status codes."""

import functools
from collections.abc import Callable
from typing import Any

import grpc
from loguru import logger

from product_catalog.core.exceptions import BadRequest, NotFound

INTERNAL_ERROR_MESSAGE = "internal server error"


def translate_errors(method: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a servicer method so domain errors abort the call with a status.

    BadRequest maps to INVALID_ARGUMENT and NotFound to NOT_FOUND, both with
    the error message as detail. Anything else is logged with its traceback
    and reported as INTERNAL without detail.
    """

    @functools.wraps(method)
    def wrapper(self: Any, request: Any, context: grpc.ServicerContext) -> Any:
        try:
            return method(self, request, context)
        except BadRequest as e:
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, str(e))
        except NotFound as e:
            context.abort(grpc.StatusCode.NOT_FOUND, str(e))
        except Exception:
            logger.exception("Unhandled error in {}", method.__qualname__)
            context.abort(grpc.StatusCode.INTERNAL, INTERNAL_ERROR_MESSAGE)

    return wrapper
