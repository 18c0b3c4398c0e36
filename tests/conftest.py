import pytest

from mrtech import create_app
from mrtech.config import TestConfig
from mrtech.extensions import db
from mrtech.services.auth import AuthConfig, AdminAuthenticator

T0 = 1700000000000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def app(clock, tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    auth = AdminAuthenticator(AuthConfig(admin_password='hunter2', signing_key='k1'), clock=clock)
    app = create_app(Config, authenticator=auth)
    # Each request needs its own app context: Flask-Login caches current_user on g
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def raw_client(app):
    """Client that only sends the cookies a test passes explicitly."""
    return app.test_client(use_cookies=False)


@pytest.fixture()
def admin_client(client):
    r = client.post('/api/admin/login', json={'password': 'hunter2'})
    assert r.status_code == 200
    return client
