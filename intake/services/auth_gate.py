"""Admin authorization: API key or session token."""

import hmac
import logging

from flask import current_app
from flask_login import UserMixin

from intake.errors import InvalidCredential
from intake.extensions import admin_sessions
from intake.services import credentials

logger = logging.getLogger(__name__)

METHOD_API_KEY = 'api_key'
METHOD_SESSION = 'session'


class AdminIdentity(UserMixin):
    """An authorized admin request, tagged with how it proved itself."""

    def __init__(self, method, token=None):
        self.id = method
        self.method = method
        self.token = token

    def __repr__(self):
        return f'<AdminIdentity {self.method}>'


def _api_key_matches(presented_key):
    expected = current_app.config.get('ADMIN_API_KEY')
    if not presented_key or not expected:
        return False
    return hmac.compare_digest(presented_key.encode('utf-8'), expected.encode('utf-8'))


def authorize(presented_key, presented_token):
    """Return an AdminIdentity if either proof is good, else None.

    A valid session token has its expiry pushed forward. A session that
    started before the last saved password change is revoked instead.
    """
    if _api_key_matches(presented_key):
        return AdminIdentity(METHOD_API_KEY)
    if not presented_token or not admin_sessions.is_valid(presented_token):
        return None
    if _predates_rotation(presented_token):
        admin_sessions.revoke(presented_token)
        logger.info('Admin session revoked: it predates the last password change')
        return None
    if admin_sessions.touch(presented_token):
        return AdminIdentity(METHOD_SESSION, presented_token)
    return None


def _predates_rotation(token):
    rotated = credentials.rotated_at()
    if rotated is None:
        return False
    session = admin_sessions.get(token)
    return session is None or session.created_at < rotated


def login(presented_password):
    """Verify the admin password and start a session; returns its token."""
    if not credentials.check_password(presented_password):
        logger.warning('Rejected admin login attempt')
        raise InvalidCredential('unauthorized')
    token = admin_sessions.create()
    logger.info('Admin session created')
    return token


def logout(presented_token):
    if presented_token:
        admin_sessions.revoke(presented_token)
        logger.info('Admin session revoked')


def change_password(current_password, new_password):
    """Rotate the admin password and log every session out.

    The caller must already be authorized; the current password is checked
    again here regardless.
    """
    if not credentials.check_password(current_password):
        raise InvalidCredential('Current password is incorrect')
    credentials.set_password(new_password)
    admin_sessions.clear()
    logger.info('Admin password changed; all sessions cleared')
