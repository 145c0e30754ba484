"""Request helpers shared by the route tests."""
import re

from intake.config import TestingConfig

API_KEY = TestingConfig.ADMIN_API_KEY
FALLBACK_PASSWORD = TestingConfig.ADMIN_PANEL_PASSWORD


def session_cookie(response):
    """The admin_sid value set by a response, or None."""
    for header in response.headers.getlist('Set-Cookie'):
        match = re.match(r'admin_sid=([^;]*)', header)
        if match:
            return match.group(1)
    return None


def cookie_header(token):
    return {'Cookie': f'admin_sid={token}'}


def login(client, password=FALLBACK_PASSWORD):
    response = client.post('/admin/verify', json={'password': password})
    assert response.status_code == 200
    token = session_cookie(response)
    assert token
    return token
