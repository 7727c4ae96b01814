import os
import logging
from logging.handlers import TimedRotatingFileHandler, WatchedFileHandler
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .config.system_settings import Settings
from .controller import ControllerRegistry
from .middleware import register_error_handlers, setup_middleware
from .api.routes import register_controllers, register_routes
from .services import EncodingConfigService


def create_app(settings: Optional[Settings] = None, configure_logging: bool = True) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings()
    app.config.update(settings.to_flask_config())

    CORS(app, origins="*", methods=["GET","POST","PUT","DELETE","OPTIONS"], allow_headers=["Content-Type","Authorization","X-Requested-With"])

    if configure_logging:
        _configure_logging(settings)

    setup_middleware(app)
    register_error_handlers(app)

    registry = register_controllers(ControllerRegistry())
    EncodingConfigService(settings.PARAM_ENCODINGS_FILE).apply(registry)
    app.extensions['paramenc.controllers'] = registry
    register_routes(app, registry, prefix=settings.API_PREFIX)

    logging.getLogger(__name__).info("应用初始化完成, controllers=%s", registry.names())
    return app


def _configure_logging(settings: Settings):
    root_logger = logging.getLogger()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s', '%Y-%m-%d %H:%M:%S')
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if not settings.FILE_LOG:
        return
    try:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file = os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME)
        # 多进程（reloader / 多 worker）下用 WatchedFileHandler 配合外部 logrotate
        if settings.USE_WATCHED_LOG:
            file_handler = WatchedFileHandler(log_file, encoding='utf-8')
        else:
            file_handler = TimedRotatingFileHandler(log_file, when='midnight', backupCount=settings.LOG_BACKUP_COUNT, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        logging.getLogger(__name__).warning(f'文件日志配置失败: {e}')

__all__ = ['create_app']
