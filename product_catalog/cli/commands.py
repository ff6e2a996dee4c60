"""Service and database CLI commands."""

from pathlib import Path

import typer
from rich.panel import Panel

from product_catalog.api.rpc.server import DatabaseUnavailableError, serve as run_server
from product_catalog.core.services import DbManageService, DbSessionService
from product_catalog.runtime.config.config_data import ConfigData, ServerConfig
from product_catalog.runtime.context import get_config, with_context

from .utils import bootstrap, console

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config.yaml (defaults to $CONFIG_PATH or ./config.yaml)",
    exists=True,
    dir_okay=False,
)


def serve(
    config: Path | None = ConfigOption,
    host: str | None = typer.Option(
        None, help="Host to bind the server to (overrides server.host)"
    ),
    port: int | None = typer.Option(
        None, help="Port to bind the server to (overrides server.port)"
    ),
) -> None:
    """
    🚀 Start the gRPC server.

    Serves ProductService, SubscriptionService, health checks and reflection
    until interrupted with Ctrl+C or SIGTERM.
    """
    bootstrap(config)

    server_overrides = {
        key: value for key, value in (("host", host), ("port", port)) if value is not None
    }
    override = (
        ConfigData(server=ServerConfig(**server_overrides)) if server_overrides else None
    )

    with with_context(override):
        main_config = get_config()

        console.print(
            Panel.fit(
                f"[bold green]Starting {main_config.app.name} gRPC server[/bold green]",
                border_style="green",
            )
        )
        console.print(f"[blue]Listening on:[/blue] {main_config.server.address}")
        console.print("[dim]Press Ctrl+C to stop the server[/dim]")

        try:
            run_server(main_config)
        except DatabaseUnavailableError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(1) from e


def init_db(config: Path | None = ConfigOption) -> None:
    """
    🗄️  Create the products and subscription_plans tables.
    """
    main_config = bootstrap(config)

    db_service = DbSessionService(main_config.database, main_config.app.environment)
    if not db_service.health_check():
        console.print("[red]❌ Database is not reachable[/red]")
        raise typer.Exit(1)

    DbManageService(db_service).create_all()
    db_service.dispose()
    console.print("[green]✅ Database tables created[/green]")
