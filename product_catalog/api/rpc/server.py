"""gRPC server assembly and lifecycle."""

import signal
import threading
from collections.abc import Sequence
from concurrent import futures
from dataclasses import dataclass

import grpc
from grpc_health.v1 import health, health_pb2, health_pb2_grpc
from grpc_reflection.v1alpha import reflection
from loguru import logger

from product_catalog.api.rpc.app_data import ApplicationDependencies
from product_catalog.api.rpc.handlers import ProductServicer, SubscriptionServicer
from product_catalog.api.rpc.interceptors import (
    BasicAuthInterceptor,
    RequestLoggingInterceptor,
)
from product_catalog.api.rpc.proto import (
    PRODUCT_SERVICE_NAME,
    SUBSCRIPTION_SERVICE_NAME,
    services,
)
from product_catalog.core.services import Authenticator, DbSessionService
from product_catalog.runtime.config.config_data import ConfigData, ServerConfig

CATALOG_SERVICE_NAMES = (PRODUCT_SERVICE_NAME, SUBSCRIPTION_SERVICE_NAME)


class DatabaseUnavailableError(RuntimeError):
    """The database did not answer the startup health check."""


@dataclass
class RunningServer:
    server: grpc.Server
    port: int
    health_servicer: health.HealthServicer

    def stop(self, grace: float | None = None) -> threading.Event:
        """Mark every service NOT_SERVING, then stop accepting calls."""
        self.health_servicer.enter_graceful_shutdown()
        return self.server.stop(grace)


def create_app_dependencies(main_config: ConfigData) -> ApplicationDependencies:
    """Build the long-lived services shared by every call."""
    return ApplicationDependencies(
        database_service=DbSessionService(
            main_config.database, main_config.app.environment
        ),
        authenticator=Authenticator.from_config(main_config.auth.users),
    )


def create_server(
    deps: ApplicationDependencies,
    server_config: ServerConfig,
    bypass_suffixes: Sequence[str],
) -> RunningServer:
    """Register the catalog, health and reflection services on a new server.

    The server is bound but not started. Binding to port 0 picks a free port,
    reported on the returned ``RunningServer``.
    """
    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=server_config.max_workers),
        interceptors=[
            RequestLoggingInterceptor(),
            BasicAuthInterceptor(deps.authenticator, bypass_suffixes),
        ],
    )

    services.add_ProductServiceServicer_to_server(
        ProductServicer(deps.database_service), server
    )
    services.add_SubscriptionServiceServicer_to_server(
        SubscriptionServicer(deps.database_service), server
    )

    health_servicer = health.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)
    # "" is the overall server status
    for name in ("", *CATALOG_SERVICE_NAMES):
        health_servicer.set(name, health_pb2.HealthCheckResponse.SERVING)

    if server_config.reflection:
        reflection.enable_server_reflection(
            (*CATALOG_SERVICE_NAMES, health.SERVICE_NAME, reflection.SERVICE_NAME),
            server,
        )

    port = server.add_insecure_port(server_config.address)
    if port == 0:
        raise RuntimeError(f"Failed to bind gRPC server to {server_config.address}")

    return RunningServer(server=server, port=port, health_servicer=health_servicer)


def serve(main_config: ConfigData) -> None:
    """Run the server until SIGINT or SIGTERM, then drain in-flight calls."""
    deps = create_app_dependencies(main_config)
    if not deps.database_service.health_check():
        raise DatabaseUnavailableError("Database is not reachable")

    running = create_server(deps, main_config.server, main_config.auth.bypass_suffixes)
    grace = main_config.server.shutdown_grace_seconds

    def _shutdown(signum, frame) -> None:
        logger.info(
            "Received {}, stopping gRPC server", signal.Signals(signum).name
        )
        running.stop(grace)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    running.server.start()
    logger.bind(
        host=main_config.server.host,
        port=running.port,
        environment=main_config.app.environment,
        reflection=main_config.server.reflection,
    ).info("gRPC server started")

    running.server.wait_for_termination()
    deps.database_service.dispose()
    logger.info("gRPC server stopped")
