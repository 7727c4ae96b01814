"""Service layer public exports."""

from .config import EncodingConfigService  # noqa: F401

__all__ = [
    'EncodingConfigService',
]
