"""Controller base class: one Flask view per action."""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import current_app, request
from flask.views import View
from werkzeug.datastructures import MultiDict

from .parameter_encoding import UTF_8, ParameterEncoding
from .params import request_parameters

logger = logging.getLogger(__name__)


class Controller(ParameterEncoding, View):
    """Groups request actions; each public method is an action.

    Routing happens through ``as_view(action)``; the instance is created per
    request and ``self.params`` is decoded with the encodings declared for
    the current action.
    """

    def __init__(self, action_name: str):
        self.action_name = action_name
        self.path_params: dict = {}
        self._params: Optional[MultiDict] = None

    @classmethod
    def action_methods(cls) -> list:
        return sorted(
            name for name in dir(cls)
            if not name.startswith('_')
            and name not in _RESERVED
            and callable(getattr(cls, name))
        )

    @classmethod
    def declare_encodings(cls) -> None:
        """Hook for code-level encoding declarations; called by ``for_app``."""

    @classmethod
    def for_app(cls) -> type:
        """Fresh subclass with its own registry, so per-app YAML declarations
        never leak into other apps."""
        bound = type(cls.__name__, (cls,), {'__module__': cls.__module__, '__qualname__': cls.__qualname__})
        bound.setup_param_encode()
        bound.declare_encodings()
        return bound

    @classmethod
    def as_view(cls, action: str, name: Optional[str] = None, **kwargs: Any):
        if action not in cls.action_methods():
            raise ValueError(f"{cls.__name__} 没有 action: {action}")
        return super().as_view(name or action, action, **kwargs)

    @property
    def request(self):
        return request

    @property
    def params(self) -> MultiDict:
        if self._params is None:
            template = type(self).action_encoding_template(self.action_name)
            default_encoding = current_app.config.get('DEFAULT_PARAM_ENCODING', UTF_8)
            self._params = request_parameters(request, template, default_encoding)
        return self._params

    def dispatch_request(self, **kwargs):
        self.path_params = kwargs
        logger.debug("[controller] %s#%s", type(self).__name__, self.action_name)
        return getattr(self, self.action_name)()


# View / ParameterEncoding 自带的公共方法不是 action
_RESERVED = frozenset(
    name for base in (View, ParameterEncoding) for name in dir(base) if not name.startswith('_')
) | {'request', 'params', 'path_params', 'action_name', 'action_methods', 'dispatch_request', 'declare_encodings', 'for_app'}

__all__ = ['Controller']
