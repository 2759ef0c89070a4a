import pytest
from skillforge import create_app
from skillforge.config import Config, TestingConfig, missing_settings, normalize_database_url, parse_origins
from skillforge.errors import ConfigurationError


class ProductionConfig(TestingConfig):
    TESTING = False
    DEBUG = False
    DATABASE_URL = None
    JWT_SECRET_KEY = None


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'success'
    assert body['data']['message'] == 'SkillForge API is running'
    assert body['data']['timestamp']


def test_unknown_route(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'status': 'error', 'message': 'Route not found'}


def test_wrong_method_is_json(client):
    response = client.delete('/api/health')
    assert response.status_code == 405
    assert response.get_json()['status'] == 'error'


def test_non_integer_id_is_not_found(client, auth_headers):
    assert client.get('/api/skills/abc', headers=auth_headers).status_code == 404
    assert client.get('/api/goals/abc', headers=auth_headers).status_code == 404


def test_unexpected_error_is_hidden(app):
    @app.route('/api/boom')
    def boom():
        raise RuntimeError('database password is hunter2')

    response = app.test_client().get('/api/boom')
    assert response.status_code == 500
    assert response.get_json() == {'status': 'error', 'message': 'Internal server error'}


def test_cors_allows_configured_origin(client):
    response = client.get('/api/health', headers={'Origin': 'http://localhost:3000'})
    assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:3000'

    response = client.get('/api/health', headers={'Origin': 'http://evil.example'})
    assert 'Access-Control-Allow-Origin' not in response.headers


def test_production_start_requires_settings():
    with pytest.raises(ConfigurationError) as excinfo:
        create_app(ProductionConfig)
    assert 'DATABASE_URL' in str(excinfo.value)
    assert 'JWT_SECRET_KEY' in str(excinfo.value)


def test_missing_settings_only_enforced_in_production():
    assert missing_settings({'DEBUG': True, 'REQUIRED_SETTINGS': Config.REQUIRED_SETTINGS}) == []
    assert missing_settings({
        'DEBUG': False,
        'TESTING': False,
        'DATABASE_URL': 'postgresql://db/skillforge',
        'JWT_SECRET_KEY': '',
        'REQUIRED_SETTINGS': Config.REQUIRED_SETTINGS,
    }) == ['JWT_SECRET_KEY']


@pytest.mark.parametrize('value,expected', [
    ('postgres://u:p@host/db', 'postgresql://u:p@host/db'),
    ('postgresql://u:p@host/db', 'postgresql://u:p@host/db'),
    (None, ''),
])
def test_normalize_database_url(value, expected):
    assert normalize_database_url(value) == expected


def test_parse_origins():
    assert parse_origins('http://a.test, http://b.test,,') == ['http://a.test', 'http://b.test']
    assert parse_origins(None) == []
