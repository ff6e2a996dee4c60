"""Main CLI application module."""

import typer

from .commands import init_db, serve

# Create the main CLI application
app = typer.Typer(
    help="📦 Product Catalog - gRPC product and subscription plan service",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db)


def main() -> None:
    """Main entry point for the CLI."""
    app()
