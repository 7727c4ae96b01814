"""Controller registration.

Registering a controller is the point where it gets its own parameter
encoding registry; routes are added through the registry so every URL rule
maps to a known controller action.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Type

from flask import Flask

from .base import Controller

logger = logging.getLogger(__name__)


class ControllerRegistry:
    def __init__(self):
        self._controllers: Dict[str, Type[Controller]] = {}

    def register(self, name: str, controller_cls: Type[Controller]) -> Type[Controller]:
        if not (isinstance(controller_cls, type) and issubclass(controller_cls, Controller)):
            raise ValueError(f"{controller_cls!r} 不是 Controller 子类")
        if name in self._controllers:
            raise ValueError(f"controller 已注册: {name}")
        if '_parameter_encodings' not in controller_cls.__dict__:
            controller_cls.setup_param_encode()
        self._controllers[name] = controller_cls
        logger.debug("[controllers] registered %s -> %s", name, controller_cls.__name__)
        return controller_cls

    def get(self, name: str) -> Optional[Type[Controller]]:
        return self._controllers.get(name)

    def require(self, name: str) -> Type[Controller]:
        controller_cls = self.get(name)
        if controller_cls is None:
            raise ValueError(f"未注册的 controller: {name}")
        return controller_cls

    def names(self) -> List[str]:
        return sorted(self._controllers)

    def __contains__(self, name: str) -> bool:
        return name in self._controllers

    def add_route(self, app: Flask, rule: str, name: str, action: str, methods: Optional[Iterable[str]] = None):
        controller_cls = self.require(name)
        endpoint = f"{name}.{action}"
        view = controller_cls.as_view(action, name=endpoint)
        app.add_url_rule(rule, endpoint=endpoint, view_func=view, methods=list(methods or ['GET']))
        return endpoint

    def describe(self) -> Dict[str, Dict[str, dict]]:
        out = {}
        for name in self.names():
            encodings = self._controllers[name].parameter_encodings()
            out[name] = {action: template.to_dict() for action, template in sorted(encodings.items())}
        return out


__all__ = ['ControllerRegistry']
