"""Public JSON API endpoints."""

import logging
from datetime import datetime

from flask import Blueprint, jsonify, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from intake.errors import ValidationError
from intake.extensions import db
from intake.forms import first_error
from intake.forms.contact import ContactForm
from intake.services import notifications
from intake.services.submissions import create_submission
from intake.utils.http import client_ip, require_json_object

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


@api_bp.route('/contact', methods=['POST'])
def contact():
    """Receive a contact form submission."""
    require_json_object()
    form = ContactForm()
    if not form.validate():
        raise ValidationError(first_error(form))
    
    submission = create_submission(
        name=form.name.data,
        email=form.email.data,
        company=form.company.data,
        message=form.message.data
    )
    return jsonify({'id': submission.id, 'success': True}), 201


@api_bp.route('/admin-access', methods=['POST'])
def admin_access():
    """Email the operator that the admin panel was opened.

    Public and unauthenticated; the payload is whatever the client claims.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    ip = data.get('ip') or client_ip()
    result = notifications.notify_access(ip, data.get('userAgent'), data.get('timestamp'))
    
    if not result.sent:
        return jsonify({'success': False, 'error': result.error}), 500
    return jsonify({'success': True, 'message': 'Notification sent'})


@api_bp.route('/status')
def status():
    """Database connection status."""
    try:
        db.session.execute(text('SELECT 1'))
        connected = True
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning('Database status check failed')
        connected = False
    
    return jsonify({
        'ok': connected,
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'database': 'connected' if connected else 'disconnected'
    })
