"""Shared pytest fixtures for database and gRPC tests."""

from .core import *  # noqa: F401,F403
from .rpc import *  # noqa: F401,F403
