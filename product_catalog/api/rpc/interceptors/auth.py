"""Basic authentication gate for every RPC."""

import functools
from collections.abc import Iterable, Sequence
from typing import Any

import grpc
from loguru import logger

from product_catalog.api.rpc.interceptors.wrapping import Behavior, wrap_handler
from product_catalog.core.security import AuthenticationError, decode_basic_auth
from product_catalog.core.services.auth_service import Authenticator

AUTHORIZATION_KEY = "authorization"
DEFAULT_BYPASS_SUFFIXES = ("/Health", ".Health/Check", ".Health/Watch")


class BasicAuthInterceptor(grpc.ServerInterceptor):
    """Rejects calls without valid ``Basic`` credentials as UNAUTHENTICATED.

    Methods whose full name ends with one of ``bypass_suffixes`` skip the
    check. Credentials are verified on the worker thread that runs the call,
    so password hashing never blocks the server's dispatch loop.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        bypass_suffixes: Sequence[str] = DEFAULT_BYPASS_SUFFIXES,
    ) -> None:
        self._authenticator = authenticator
        self._bypass_suffixes = tuple(bypass_suffixes)

    def is_bypassed(self, method: str) -> bool:
        return method.endswith(self._bypass_suffixes)

    def authenticate(self, metadata: Iterable[Any] | None) -> str:
        """Check call metadata and return the authenticated username.

        Raises:
            AuthenticationError: with the reason reported to the caller
        """
        if metadata is None:
            raise AuthenticationError("missing metadata")

        header = next(
            (value for key, value in metadata if key.lower() == AUTHORIZATION_KEY),
            None,
        )
        if not header:
            raise AuthenticationError("missing authorization header")
        username, password = decode_basic_auth(header)
        if not self._authenticator.validate(username, password):
            raise AuthenticationError("invalid username or password")
        return username

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None:
            return None

        method = handler_call_details.method
        if self.is_bypassed(method):
            return handler

        metadata = handler_call_details.invocation_metadata

        def guard(behavior: Behavior) -> Behavior:
            @functools.wraps(behavior)
            def guarded(request_or_iterator, context: grpc.ServicerContext):
                try:
                    username = self.authenticate(metadata)
                except AuthenticationError as e:
                    logger.warning("Rejected call to {}: {}", method, e)
                    context.abort(grpc.StatusCode.UNAUTHENTICATED, str(e))
                logger.debug("Authenticated {} for {}", username, method)
                return behavior(request_or_iterator, context)

            return guarded

        return wrap_handler(handler, guard)
