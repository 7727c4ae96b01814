"""Read-only view of the declared parameter encodings."""
from flask import Blueprint, current_app

from paramenc.middleware import api_response

encodings_bp = Blueprint('encodings', __name__)


@encodings_bp.route('/encodings', methods=['GET'])
@api_response
def list_encodings():
	registry = current_app.extensions['paramenc.controllers']
	return {
		'default_encoding': current_app.config.get('DEFAULT_PARAM_ENCODING'),
		'controllers': registry.describe(),
	}


@encodings_bp.route('/encodings/<name>', methods=['GET'])
@api_response
def get_controller_encodings(name: str):
	registry = current_app.extensions['paramenc.controllers']
	if name not in registry:
		raise FileNotFoundError(f'未找到 controller: {name}')
	return registry.describe()[name]


__all__ = ['encodings_bp']
