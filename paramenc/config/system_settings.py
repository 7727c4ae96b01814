"""应用配置 - 统一的配置参数管理"""
import os
import sys
import logging
import configparser
from dataclasses import dataclass, field, fields
from pathlib import Path

logger = logging.getLogger(__name__)


def _get_config_file() -> str:
    """获取配置文件路径（环境变量 > 可执行文件目录 > 当前目录）"""
    if env_config := os.getenv("SETTINGS_FILE"):
        logger.debug(f"[config] Using config from env: {env_config}")
        return env_config

    # 打包后：配置文件在可执行文件同目录
    if getattr(sys, 'frozen', False):
        exe_dir = os.path.dirname(os.path.abspath(sys.executable))
        exe_config = os.path.join(exe_dir, "settings.ini")
        if os.path.exists(exe_config):
            logger.debug(f"[config] Using config from exe dir: {exe_config}")
            return exe_config
        logger.warning(f"[config] Config file not found in exe dir: {exe_config}")

    # 开发模式：当前工作目录
    cwd_config = Path.cwd() / "settings.ini"
    if cwd_config.exists():
        return str(cwd_config)

    # 项目根目录（兜底）
    root_config = Path(__file__).parent.parent.parent / "settings.ini"
    if root_config.exists():
        logger.debug(f"[config] Using config from root: {root_config}")
        return str(root_config)

    return str(cwd_config)


def _load_config() -> configparser.ConfigParser:
    """加载外部配置文件"""
    config = configparser.ConfigParser()
    config_file = _get_config_file()

    if not os.path.exists(config_file):
        return config

    # 尝试多种编码
    for encoding in ['utf-8', 'utf-8-sig', 'gbk', 'latin-1']:
        try:
            config.read(config_file, encoding=encoding)
        except (UnicodeDecodeError, configparser.Error) as e:
            logger.debug(f"[config] Failed to read with encoding {encoding}: {e}")
            continue
        if config.sections():
            logger.debug(f"[config] Loaded {config_file} with encoding: {encoding}")
            break
    else:
        logger.error(f"[config] Failed to read config file with any encoding: {config_file}")
    return config


def _get_bool(config: configparser.ConfigParser, env_name: str, default: bool, config_section: str = None, config_key: str = None) -> bool:
    """解析布尔值：环境变量 > 配置文件 > 默认值"""
    if raw := os.getenv(env_name):
        return str(raw).strip().lower() in {"1", "true", "yes", "y", "on"}

    if config_section and config_key and config.has_option(config_section, config_key):
        try:
            return config.getboolean(config_section, config_key)
        except ValueError:
            logger.warning(f"[config] {config_section}.{config_key} 不是布尔值，使用默认值")

    return default


def _get_int(config: configparser.ConfigParser, env_name: str, default: int, config_section: str = None, config_key: str = None) -> int:
    """解析整数：环境变量 > 配置文件 > 默认值"""
    if raw := os.getenv(env_name):
        try:
            return int(raw) if raw.strip() else default
        except ValueError:
            logger.warning(f"[config] {env_name}={raw!r} 不是整数，忽略")

    if config_section and config_key and config.has_option(config_section, config_key):
        try:
            return config.getint(config_section, config_key)
        except ValueError:
            logger.warning(f"[config] {config_section}.{config_key} 不是整数，使用默认值")

    return default


def _get_str(config: configparser.ConfigParser, env_name: str, default: str, config_section: str = None, config_key: str = None) -> str:
    """解析字符串：环境变量 > 配置文件 > 默认值"""
    if raw := os.getenv(env_name):
        return raw

    if config_section and config_key and config.has_option(config_section, config_key):
        return config.get(config_section, config_key)

    return default


def _setting(getter, env_name, default, section=None, key=None):
    # 值为 None 时在 __post_init__ 中解析
    return field(default=None, metadata={'source': (getter, env_name, default, section, key)})


@dataclass
class Settings:
    """应用配置类 - 优先级：构造参数 > 环境变量 > settings.ini > 默认值"""

    # ===== 服务器配置 =====
    HOST: str = _setting(_get_str, "APP_HOST", "0.0.0.0", "server", "host")
    PORT: int = _setting(_get_int, "APP_PORT", 8000, "server", "port")
    DEBUG: bool = _setting(_get_bool, "APP_DEBUG", False, "server", "debug")

    # ===== API 配置 =====
    API_PREFIX: str = _setting(_get_str, "API_PREFIX", "/api/v1", "api", "api_prefix")
    MAX_CONTENT_LENGTH: int = _setting(_get_int, "MAX_CONTENT_LENGTH", 16 * 1024 * 1024, "api", "max_content_length")

    # ===== 日志配置 =====
    LOG_LEVEL: str = _setting(_get_str, "APP_LOG_LEVEL", "INFO", "log", "log_level")
    LOG_DIR: str = _setting(_get_str, "APP_LOG_DIR", "logs", "log", "log_dir")
    LOG_FILE_NAME: str = _setting(_get_str, "APP_LOG_FILE", "app.log", "log", "log_file")
    LOG_BACKUP_COUNT: int = _setting(_get_int, "APP_LOG_BACKUP", 7, "log", "log_backup_count")
    USE_WATCHED_LOG: bool = _setting(_get_bool, "APP_USE_WATCHED_LOG", False, "log", "use_watched_log")
    FILE_LOG: bool = _setting(_get_bool, "APP_FILE_LOG", True, "log", "file_log")

    # ===== 参数编码 =====
    DEFAULT_PARAM_ENCODING: str = _setting(_get_str, "DEFAULT_PARAM_ENCODING", "utf-8", "encoding", "default_param_encoding")
    PARAM_ENCODINGS_FILE: str = _setting(_get_str, "PARAM_ENCODINGS_FILE", "./param_encodings.yaml", "encoding", "param_encodings_file")

    def __post_init__(self):
        config = None
        for f in fields(self):
            if getattr(self, f.name) is not None:
                continue
            if config is None:
                config = _load_config()
            getter, env_name, default, section, key = f.metadata['source']
            setattr(self, f.name, getter(config, env_name, default, section, key))

    def to_flask_config(self) -> dict:
        """转换为 Flask 配置格式"""
        return {
            "DEBUG": self.DEBUG,
            "MAX_CONTENT_LENGTH": self.MAX_CONTENT_LENGTH,
            "API_PREFIX": self.API_PREFIX,
            "DEFAULT_PARAM_ENCODING": self.DEFAULT_PARAM_ENCODING,
            "PARAM_ENCODINGS_FILE": self.PARAM_ENCODINGS_FILE,
        }
