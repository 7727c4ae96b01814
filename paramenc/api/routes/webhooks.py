"""Incoming webhooks from systems that do not speak utf-8."""
import logging

from paramenc.controller import Controller
from paramenc.middleware import api_response

logger = logging.getLogger(__name__)


class WebhooksController(Controller):

	@classmethod
	def declare_encodings(cls):
		cls.default_parameter_encoding('call', 'shift_jis')

	@api_response
	def call(self):
		payload = self.params.to_dict()
		if 'id' not in payload:
			raise ValueError('缺少必要参数: id')
		logger.info(f"[webhook] id={payload['id']} fields={sorted(payload)}")
		return {'received': payload}


__all__ = ['WebhooksController']
