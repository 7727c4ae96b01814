import pytest

from paramenc import create_app
from paramenc.config.system_settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        FILE_LOG=False,
        API_PREFIX='/api/v1',
        DEFAULT_PARAM_ENCODING='utf-8',
        PARAM_ENCODINGS_FILE=str(tmp_path / 'param_encodings.yaml'),
    )


@pytest.fixture
def app(settings):
    app = create_app(settings, configure_logging=False)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
