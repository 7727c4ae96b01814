"""Configuration services."""

from .service import EncodingConfigService  # noqa: F401

__all__ = ['EncodingConfigService']
