"""YAML parameter-encoding declarations.

Lets operators adjust encodings of registered controllers without code
changes::

    controllers:
      repositories:
        skip: [download]
        defaults: {archive: shift_jis}
        params:
          show: {file_path: binary}
"""

import os
import yaml
import logging
from typing import Dict, Any

from paramenc.controller import ControllerRegistry

logger = logging.getLogger(__name__)


class EncodingConfigService:
	def __init__(self, config_path: str):
		self.config_path = config_path

	def load_config(self) -> Dict[str, Any]:
		if not self.config_path or not os.path.exists(self.config_path):
			logger.debug(f"编码配置文件不存在，跳过: {self.config_path}")
			return {}
		with open(self.config_path, 'r', encoding='utf-8') as f:
			config = yaml.safe_load(f) or {}
		self._validate_config(config)
		return config

	def _validate_config(self, config: Dict[str, Any]):
		if not isinstance(config, dict):
			raise ValueError("配置必须是字典格式")
		controllers = config.get('controllers', {}) or {}
		if not isinstance(controllers, dict):
			raise ValueError("controllers 必须是字典")
		for name, decl in controllers.items():
			if not isinstance(decl, dict):
				raise ValueError(f"controllers.{name} 必须是字典")
			unknown = set(decl) - {'skip', 'defaults', 'params'}
			if unknown:
				raise ValueError(f"controllers.{name} 包含未知字段: {', '.join(sorted(unknown))}")
			skip = decl.get('skip', []) or []
			if not isinstance(skip, list):
				raise ValueError(f"controllers.{name}.skip 必须是列表")
			defaults = decl.get('defaults', {}) or {}
			if not isinstance(defaults, dict):
				raise ValueError(f"controllers.{name}.defaults 必须是字典")
			for action, encoding in defaults.items():
				if not isinstance(encoding, str):
					raise ValueError(f"controllers.{name}.defaults.{action} 必须是编码名称")
			params = decl.get('params', {}) or {}
			if not isinstance(params, dict):
				raise ValueError(f"controllers.{name}.params 必须是字典")
			for action, mapping in params.items():
				if not isinstance(mapping, dict):
					raise ValueError(f"controllers.{name}.params.{action} 必须是字典")
				for param, encoding in mapping.items():
					if not isinstance(encoding, str):
						raise ValueError(f"controllers.{name}.params.{action}.{param} 必须是编码名称")

	def apply(self, registry: ControllerRegistry) -> int:
		"""Apply declarations to registered controllers; returns how many were applied.

		skip/defaults go first: a later default would drop per-parameter
		encodings of the same action.
		"""
		config = self.load_config()
		applied = 0
		for name, decl in (config.get('controllers') or {}).items():
			if name not in registry:
				raise ValueError(f"编码配置引用了未注册的 controller: {name}")
			controller_cls = registry.get(name)
			for action in decl.get('skip') or []:
				controller_cls.skip_parameter_encoding(action)
				applied += 1
			for action, encoding in (decl.get('defaults') or {}).items():
				controller_cls.default_parameter_encoding(action, encoding)
				applied += 1
			for action, mapping in (decl.get('params') or {}).items():
				for param, encoding in mapping.items():
					controller_cls.param_encoding(action, param, encoding)
					applied += 1
		if applied:
			logger.info(f"已加载参数编码配置 {applied} 条: {self.config_path}")
		return applied


__all__ = ['EncodingConfigService']
