"""Request middleware, JSON response envelope and error handlers."""

from __future__ import annotations

import time
import uuid
import logging
from functools import wraps
from flask import Flask, request, jsonify, g

from paramenc.controller.params import InvalidParameterEncoding, UnknownEncodingError

logger = logging.getLogger(__name__)


def setup_middleware(app: Flask):
    @app.before_request
    def before_request():
        g.start_time = time.time()
        g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        logger.info(f"Request: {request.method} {request.path}")

    @app.after_request
    def after_request(response):
        if hasattr(g, 'start_time'):
            duration = time.time() - g.start_time
            response.headers['X-Response-Time'] = f"{duration:.3f}s"
        response.headers['X-Request-ID'] = getattr(g, 'request_id', 'unknown')
        response.headers['X-API-Version'] = 'v1'
        return response


def _error(code: str, message: str, status: int, details: str = None):
    error = {'code': code, 'message': message}
    if details is not None:
        error['details'] = details
    return jsonify({'success': False, 'error': error}), status


def api_response(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
            if isinstance(result, tuple):
                data, status_code = result
                return jsonify({'success': True, 'data': data}), status_code
            return jsonify({'success': True, 'data': result})
        except (InvalidParameterEncoding, UnknownEncodingError):
            # 交给 register_error_handlers 中的处理器
            raise
        except ValueError as e:
            msg = str(e)
            return _error('INVALID_ARGUMENT', msg, 400, msg)
        except FileNotFoundError as e:
            return _error('NOT_FOUND', f'资源不存在: {e}', 404, str(e))
        except PermissionError as e:
            return _error('PERMISSION_DENIED', f'权限不足: {e}', 403, str(e))
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            return _error('INTERNAL', '服务器内部错误，请稍后重试', 500, str(e))
    return wrapper


def register_error_handlers(app: Flask):
    @app.errorhandler(InvalidParameterEncoding)
    def invalid_parameter_encoding(error):
        return _error('INVALID_ARGUMENT', str(error), 400)

    @app.errorhandler(UnknownEncodingError)
    def unknown_encoding(error):
        logger.error(f"参数编码配置错误: {error}")
        return _error('INTERNAL', '服务器内部错误', 500)

    @app.errorhandler(404)
    def not_found(error):
        return _error('NOT_FOUND', '接口不存在', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _error('METHOD_NOT_ALLOWED', '请求方法不允许', 405)

    @app.errorhandler(500)
    def internal_error(error):
        return _error('INTERNAL', '服务器内部错误', 500)


__all__ = ['setup_middleware', 'api_response', 'register_error_handlers']
