"""Repository browser: filesystem paths arrive in unknown encodings."""
import os
import logging

from paramenc.controller import BINARY, Controller
from paramenc.middleware import api_response

logger = logging.getLogger(__name__)


class RepositoriesController(Controller):

	@classmethod
	def declare_encodings(cls):
		cls.param_encoding('show', 'file_path', BINARY)

	@api_response
	def index(self):
		return {'params': self.params.to_dict(flat=False)}

	@api_response
	def show(self):
		file_path = self.params.get('file_path')
		if file_path is None:
			raise ValueError('缺少必要参数: file_path')
		# file_path 为原始字节，repo_name 仍是 utf-8 文本
		return {
			'file_path': os.fsdecode(file_path),
			'file_path_hex': file_path.hex(),
			'file_path_bytes': len(file_path),
			'repo_name': self.params.get('repo_name'),
		}


__all__ = ['RepositoriesController']
