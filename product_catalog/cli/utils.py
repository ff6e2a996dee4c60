"""Shared helpers for CLI commands."""

from pathlib import Path

from rich.console import Console

from product_catalog.api.utils.app_startup import configure_logging
from product_catalog.runtime.config.config_data import ConfigData
from product_catalog.runtime.context import load_config, set_config

console = Console()


def bootstrap(config_path: Path | None) -> ConfigData:
    """Load configuration, make it current and configure logging."""
    main_config = load_config(config_path)
    set_config(main_config)
    configure_logging(main_config)
    return main_config
