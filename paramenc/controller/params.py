"""Request parameter decoding.

Werkzeug already decodes ``request.args`` / ``request.form`` as utf-8, so the
raw query string and form body are re-parsed here and every value is decoded
with the encoding its action declares.
"""

from __future__ import annotations

import codecs
import logging
from typing import Optional, Union
from urllib.parse import unquote_to_bytes

from werkzeug.datastructures import MultiDict

from .parameter_encoding import BINARY, UTF_8, ActionEncodingTemplate

logger = logging.getLogger(__name__)

_BINARY_ALIASES = {BINARY, 'ascii-8bit', 'ascii_8bit'}
_FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class InvalidParameterEncoding(ValueError):
    """参数值无法按声明的编码解码"""

    def __init__(self, name: str, encoding: str, reason: str = ''):
        self.name = name
        self.encoding = encoding
        msg = f"Invalid request parameters: {name} is not valid {encoding}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class UnknownEncodingError(LookupError):
    """声明的编码名称在 Python 中不存在"""


def is_binary(encoding: Optional[str]) -> bool:
    return encoding is not None and encoding.lower() in _BINARY_ALIASES


def encoding_for(name: str, template: Optional[ActionEncodingTemplate], default_encoding: str = UTF_8) -> str:
    if template is None:
        return default_encoding
    return template.get(name) or default_encoding


def decode_value(raw: bytes, encoding: str, name: str = '') -> Union[str, bytes]:
    if is_binary(encoding):
        return raw
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise UnknownEncodingError(f"未知编码: {encoding} (参数 {name or '?'})") from e
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        logger.warning(f"参数解码失败: {name} ({encoding}): {e}")
        raise InvalidParameterEncoding(name, encoding, e.reason) from e


def _unquote_plus(raw: bytes) -> bytes:
    return unquote_to_bytes(raw.replace(b'+', b' '))


def parse_urlencoded(
    raw: bytes,
    template: Optional[ActionEncodingTemplate] = None,
    default_encoding: str = UTF_8,
) -> MultiDict:
    """Parse ``a=1&b=2`` bytes into a MultiDict of decoded values.

    Names are always decoded with ``default_encoding``; values with the
    encoding the template answers for that name.
    """
    params = MultiDict()
    if not raw:
        return params
    for chunk in raw.split(b'&'):
        if not chunk:
            continue
        raw_name, _, raw_value = chunk.partition(b'=')
        name = decode_value(_unquote_plus(raw_name), default_encoding, '<name>')
        if isinstance(name, bytes):
            # 参数名始终需要是字符串
            name = name.decode('latin-1')
        encoding = encoding_for(name, template, default_encoding)
        params.add(name, decode_value(_unquote_plus(raw_value), encoding, name))
    return params


def request_parameters(request, template: Optional[ActionEncodingTemplate] = None, default_encoding: str = UTF_8) -> MultiDict:
    """Query string parameters followed by urlencoded form body parameters."""
    params = parse_urlencoded(request.query_string, template, default_encoding)
    if request.mimetype == _FORM_CONTENT_TYPE:
        body = parse_urlencoded(request.get_data(cache=True), template, default_encoding)
        for name, value in body.items(multi=True):
            params.add(name, value)
    return params


__all__ = [
    'InvalidParameterEncoding',
    'UnknownEncodingError',
    'is_binary',
    'encoding_for',
    'decode_value',
    'parse_urlencoded',
    'request_parameters',
]
