"""Controllers with per-action parameter encodings."""

from .parameter_encoding import BINARY, UTF_8, ActionEncodingTemplate, ParameterEncoding  # noqa: F401
from .params import InvalidParameterEncoding, UnknownEncodingError  # noqa: F401
from .base import Controller  # noqa: F401
from .registry import ControllerRegistry  # noqa: F401

__all__ = [
    'BINARY',
    'UTF_8',
    'ActionEncodingTemplate',
    'ParameterEncoding',
    'InvalidParameterEncoding',
    'UnknownEncodingError',
    'Controller',
    'ControllerRegistry',
]
