"""
Shared pytest fixtures for the intake app.
"""
import pytest

from intake import create_app
from intake.config import TestingConfig, config
from intake.extensions import admin_sessions

from tests.helpers import API_KEY


class UnreachableDatabaseConfig(TestingConfig):
    """Points at a SQLite file that cannot be opened."""
    SQLALCHEMY_DATABASE_URI = 'sqlite:////nonexistent-intake-dir/intake.db'


@pytest.fixture(autouse=True)
def clear_sessions():
    """Admin sessions are process-wide; start and end every test empty."""
    admin_sessions.clear()
    yield
    admin_sessions.clear()


@pytest.fixture
def app():
    app = create_app('testing')
    yield app


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Test client without a cookie jar; cookies are sent explicitly."""
    return app.test_client(use_cookies=False)


@pytest.fixture
def unreachable_app(monkeypatch):
    monkeypatch.setitem(config, 'unreachable', UnreachableDatabaseConfig)
    return create_app('unreachable')


@pytest.fixture
def unreachable_client(unreachable_app):
    return unreachable_app.test_client(use_cookies=False)


@pytest.fixture
def api_headers():
    return {'x-api-key': API_KEY}

