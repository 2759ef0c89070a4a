from datetime import date, timedelta
import pytest
from skillforge import ai_service, create_app, db
from skillforge.config import TestingConfig


@pytest.fixture
def app(monkeypatch):
    # every test starts without a cached AI client
    monkeypatch.setattr(ai_service, '_gateway', None)
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    def _register(name='Alice', email='alice@example.com', password='secret1'):
        response = client.post('/api/auth/register', json={
            'name': name, 'email': email, 'password': password,
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _register


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth_headers(register):
    return bearer(register()['token'])


@pytest.fixture
def other_headers(register):
    return bearer(register(name='Bob', email='bob@example.com', password='hunter22')['token'])


def future(days=30):
    return (date.today() + timedelta(days=days)).isoformat()


GO_SKILL = {
    'name': 'Go',
    'category': 'backend',
    'proficiency': 4,
    'experience': 2,
    'lastUsed': '2024-01-01',
}
