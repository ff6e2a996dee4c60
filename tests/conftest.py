"""Shared pytest configuration for the product catalog tests."""

from tests.fixtures import *  # noqa: F401,F403
