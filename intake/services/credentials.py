"""Resolution of the current admin panel password.

A password saved through the panel is stored (hashed) in the
``admin_settings`` table and overrides ``ADMIN_PANEL_PASSWORD``. Until one
is saved, or whenever the database cannot be read, the configured value is
used.
"""

import hmac
import logging
from collections import namedtuple
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from intake.errors import PolicyViolation, Unavailable
from intake.extensions import bcrypt, db
from intake.models import AdminSettings

logger = logging.getLogger(__name__)

ResolvedPassword = namedtuple('ResolvedPassword', ['value', 'hashed', 'source'])


def _load_settings():
    try:
        return AdminSettings.get()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Error fetching admin settings from database')
        return None


def current_password():
    """Return the password currently in force.

    Never raises: a database error is logged and the fallback is returned.
    """
    settings = _load_settings()
    if settings is not None and settings.password_hash:
        return ResolvedPassword(settings.password_hash, True, 'database')
    return ResolvedPassword(current_app.config['ADMIN_PANEL_PASSWORD'], False, 'config')


def check_password(presented):
    """Exact, case-sensitive comparison against the current password."""
    if not presented or not isinstance(presented, str):
        return False
    resolved = current_password()
    if resolved.hashed:
        return bcrypt.check_password_hash(resolved.value, presented)
    expected = resolved.value or ''
    return hmac.compare_digest(presented.encode('utf-8'), expected.encode('utf-8'))


def set_password(new_password):
    """Persist a new admin password.

    Raises PolicyViolation if it is too short and Unavailable if it could
    not be saved. Nothing changes unless the commit succeeds.
    """
    min_length = current_app.config['ADMIN_PASSWORD_MIN_LENGTH']
    if not isinstance(new_password, str) or len(new_password) < min_length:
        raise PolicyViolation(f'New password must be at least {min_length} characters')

    try:
        _upsert(new_password)
    except IntegrityError:
        # Another request created the record first; update it instead.
        db.session.rollback()
        try:
            _upsert(new_password)
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Failed to update admin password in database')
            raise Unavailable('failed to save new password')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to update admin password in database')
        raise Unavailable('failed to save new password')

    logger.info('Admin password updated in database')


def _upsert(new_password):
    settings = AdminSettings.get()
    if settings is None:
        settings = AdminSettings()
        db.session.add(settings)
    settings.set_password(new_password)
    settings.updated_at = datetime.utcnow()
    db.session.commit()


def rotated_at():
    """Epoch seconds of the last saved password change, or None.

    Sessions started before this moment are stale even if the rotation
    happened in another process. Never raises.
    """
    settings = _load_settings()
    if settings is None or settings.updated_at is None:
        return None
    return settings.updated_at.replace(tzinfo=timezone.utc).timestamp()
