"""Shared service-level models."""

from .page import Page

__all__ = ["Page"]
