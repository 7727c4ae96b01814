"""Application settings."""

from .system_settings import Settings  # noqa: F401

__all__ = ["Settings"]
