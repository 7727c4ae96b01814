"""Per-action parameter encodings for controller classes.

A controller declares, per action, how its request parameters are decoded:

    class RepositoriesController(Controller):
        def show(self):
            path = self.params['file_path']        # bytes
            name = self.params['repo_name']        # str (utf-8)

    RepositoriesController.param_encoding('show', 'file_path', BINARY)

`skip_parameter_encoding` keeps every parameter of an action as raw bytes,
`default_parameter_encoding` decodes all of them with another codec
(e.g. an incoming webhook that speaks Shift_JIS).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

# 原始字节，不做解码（相当于 ASCII-8BIT）
BINARY = 'binary'
UTF_8 = 'utf-8'

_REGISTRY_ATTR = '_parameter_encodings'
_write_lock = threading.Lock()


@dataclass(frozen=True)
class ActionEncodingTemplate:
    """Parameter name -> encoding for one action.

    A template with a ``fallback`` answers it for every name not listed in
    ``overrides``; without one, unlisted names answer ``None`` and the
    caller falls back to the application default.
    """
    overrides: Mapping[str, str] = field(default_factory=dict)
    fallback: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.fallback is not None

    def get(self, param, default: Optional[str] = None) -> Optional[str]:
        name = str(param)
        if name in self.overrides:
            return self.overrides[name]
        if self.fallback is not None:
            return self.fallback
        return default

    def __getitem__(self, param) -> Optional[str]:
        return self.get(param)

    def __contains__(self, param) -> bool:
        return self.is_default or str(param) in self.overrides

    def __iter__(self) -> Iterator[str]:
        return iter(self.overrides)

    def __len__(self) -> int:
        return len(self.overrides)

    def with_param(self, param, encoding: str) -> 'ActionEncodingTemplate':
        overrides = dict(self.overrides)
        overrides[str(param)] = encoding
        return ActionEncodingTemplate(overrides=overrides, fallback=self.fallback)

    def to_dict(self) -> Dict[str, object]:
        return {
            'default': self.fallback,
            'params': dict(self.overrides),
        }


class ParameterEncoding:
    """Mixin giving a controller class its own encoding registry.

    The registry lives in the class's own ``__dict__``; subclasses never see
    their parent's entries and get an empty registry of their own on first
    use (or when ``setup_param_encode`` is called by the controller registry).
    """

    @classmethod
    def setup_param_encode(cls) -> None:
        with _write_lock:
            setattr(cls, _REGISTRY_ATTR, {})

    @classmethod
    def _own_parameter_encodings(cls) -> Dict[str, ActionEncodingTemplate]:
        return cls.__dict__.get(_REGISTRY_ATTR) or {}

    @classmethod
    def _store_template(cls, action: str, template: ActionEncodingTemplate) -> None:
        with _write_lock:
            encodings = dict(cls._own_parameter_encodings())
            encodings[action] = template
            setattr(cls, _REGISTRY_ATTR, encodings)

    @classmethod
    def action_encoding_template(cls, action) -> Optional[ActionEncodingTemplate]:
        return cls._own_parameter_encodings().get(str(action))

    @classmethod
    def parameter_encodings(cls) -> Dict[str, ActionEncodingTemplate]:
        return dict(cls._own_parameter_encodings())

    @classmethod
    def skip_parameter_encoding(cls, action) -> None:
        """Keep all parameters of ``action`` as raw bytes.

        Useful when the encoding of the incoming data is unknown, like
        filesystem paths.
        """
        cls.default_parameter_encoding(action, BINARY)

    @classmethod
    def default_parameter_encoding(cls, action, encoding: str) -> None:
        """Decode every parameter of ``action`` with ``encoding``.

        Replaces whatever was declared for the action before, including
        per-parameter encodings.
        """
        cls._store_template(str(action), ActionEncodingTemplate(fallback=encoding))
        logger.debug("[param-encoding] %s.%s -> default %s", cls.__name__, action, encoding)

    @classmethod
    def param_encoding(cls, action, param, encoding: str) -> None:
        """Decode a single parameter of ``action`` with ``encoding``.

        Other parameters keep the action's default if one was declared,
        otherwise the application default (utf-8).
        """
        with _write_lock:
            encodings = dict(cls._own_parameter_encodings())
            template = encodings.get(str(action))
            if template is None:
                template = ActionEncodingTemplate()
            encodings[str(action)] = template.with_param(param, encoding)
            setattr(cls, _REGISTRY_ATTR, encodings)
        logger.debug("[param-encoding] %s.%s[%s] -> %s", cls.__name__, action, param, encoding)


__all__ = ['BINARY', 'UTF_8', 'ActionEncodingTemplate', 'ParameterEncoding']
