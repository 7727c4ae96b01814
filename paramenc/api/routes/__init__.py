from paramenc.controller import ControllerRegistry

from .encodings import encodings_bp  # noqa
from .repositories import RepositoriesController  # noqa
from .webhooks import WebhooksController  # noqa


def register_controllers(registry: ControllerRegistry) -> ControllerRegistry:
    # 每个 app 使用独立的子类，YAML 声明不会影响其他 app
    registry.register('repositories', RepositoriesController.for_app())
    registry.register('webhooks', WebhooksController.for_app())
    return registry


def register_routes(app, registry: ControllerRegistry, prefix: str = '/api/v1'):
    """Register controller actions and blueprints under the API prefix."""
    registry.add_route(app, f'{prefix}/repositories', 'repositories', 'index')
    registry.add_route(app, f'{prefix}/repositories/show', 'repositories', 'show', methods=['GET', 'POST'])
    registry.add_route(app, f'{prefix}/webhooks/call', 'webhooks', 'call', methods=['POST'])

    app.register_blueprint(encodings_bp, url_prefix=prefix)

__all__ = ['register_controllers', 'register_routes']
