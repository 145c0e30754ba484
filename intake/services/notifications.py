"""Best-effort email alerts about admin panel access.

Nothing here raises on delivery problems: the outcome is returned as a
NotificationResult and the access being reported on is unaffected.
"""

import logging
import smtplib
import threading
from collections import namedtuple
from datetime import datetime, timezone

from flask import current_app, render_template
from flask_mail import BadHeaderError, Message

from intake.extensions import mail

logger = logging.getLogger(__name__)

NotificationResult = namedtuple('NotificationResult', ['sent', 'error'])

SUBJECT = 'Admin Panel Access Notification'


def format_timestamp(timestamp):
    """Render epoch milliseconds or an ISO-8601 string for humans."""
    if timestamp is None or timestamp == '':
        return datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
    try:
        if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
            when = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
        else:
            text = str(timestamp).strip()
            if text.endswith('Z'):
                text = text[:-1] + '+00:00'
            when = datetime.fromisoformat(text)
            if when.tzinfo is None:
                when = when.replace(tzinfo=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return str(timestamp)
    return when.astimezone(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')


def notify_access(ip, user_agent, timestamp):
    """Email the operator that the admin panel was accessed."""
    recipient = current_app.config.get('ADMIN_NOTIFY_EMAIL')
    if not recipient:
        logger.warning('Admin access notice skipped: ADMIN_NOTIFY_EMAIL not set')
        return NotificationResult(False, 'notification recipient not configured')

    msg = Message(
        subject=SUBJECT,
        recipients=[recipient],
        html=render_template(
            'email/admin_access.html',
            ip=ip or 'Unknown',
            user_agent=user_agent or 'Unknown',
            when=format_timestamp(timestamp)
        )
    )
    if not msg.sender:
        logger.warning('Admin access notice skipped: no sender configured')
        return NotificationResult(False, 'notification sender not configured')
    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError, BadHeaderError) as e:
        logger.error('Email sending error: %s', e)
        return NotificationResult(False, str(e) or e.__class__.__name__)

    logger.info('Admin access notification sent')
    return NotificationResult(True, None)


def _notify_in_background(app, ip, user_agent, timestamp):
    with app.app_context():
        try:
            notify_access(ip, user_agent, timestamp)
        except Exception:
            logger.exception('Admin access notification failed')


def dispatch_access_notice(ip, user_agent, timestamp=None):
    """Send the access notice on a background thread and return immediately."""
    app = current_app._get_current_object()
    thread = threading.Thread(
        target=_notify_in_background,
        args=(app, ip, user_agent, timestamp),
        daemon=True
    )
    thread.start()
    return thread
