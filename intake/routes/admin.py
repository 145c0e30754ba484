"""Admin panel routes."""

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from intake.errors import ValidationError
from intake.forms import first_error
from intake.forms.admin import ChangePasswordForm
from intake.services import auth_gate, notifications
from intake.services.submissions import delete_submission, list_submissions
from intake.utils.decorators import admin_required
from intake.utils.http import client_ip, require_json_object

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


def _session_cookie_name():
    return current_app.config['ADMIN_SESSION_COOKIE']


def _set_session_cookie(response, token):
    response.set_cookie(
        _session_cookie_name(),
        token,
        max_age=current_app.config['ADMIN_SESSION_TTL'],
        httponly=True,
        secure=True,
        samesite='None'
    )


def _clear_session_cookie(response):
    response.delete_cookie(
        _session_cookie_name(),
        httponly=True,
        secure=True,
        samesite='None'
    )


@admin_bp.route('/verify', methods=['POST'])
def verify():
    """Check the admin password and start a cookie session."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    password = data.get('password') or ''
    if not isinstance(password, str):
        password = ''
    
    token = auth_gate.login(password)
    
    if current_app.config.get('NOTIFY_ON_ADMIN_LOGIN'):
        notifications.dispatch_access_notice(client_ip(), request.headers.get('User-Agent'))
    
    response = jsonify({'ok': True})
    _set_session_cookie(response, token)
    return response


@admin_bp.route('/submissions', methods=['GET', 'POST'])
@admin_required
def submissions():
    """All contact submissions, newest first.

    POST mirrors GET for hosts that block GET on API-like paths.
    """
    rows = list_submissions()
    return jsonify({'rows': [s.to_dict() for s in rows]})


@admin_bp.route('/submissions/', methods=['DELETE'])
@admin_bp.route('/submissions/<submission_id>', methods=['DELETE'])
@admin_required
def remove_submission(submission_id=None):
    """Remove a submission by id."""
    delete_submission((submission_id or '').strip())
    return jsonify({'ok': True, 'message': 'submission deleted'})


@admin_bp.route('/change-password', methods=['POST'])
@admin_required
def change_password():
    """Rotate the admin password; every session must log in again."""
    require_json_object()
    form = ChangePasswordForm()
    if not form.validate():
        raise ValidationError(first_error(form))
    
    auth_gate.change_password(form.currentPassword.data, form.newPassword.data)
    logger.info('Admin password changed via %s', current_user.method)
    
    response = jsonify({'ok': True, 'message': 'Password changed successfully. Please log in again.'})
    _clear_session_cookie(response)
    return response


@admin_bp.route('/logout', methods=['POST'])
def logout():
    """End the cookie session, if there is one."""
    auth_gate.logout(request.cookies.get(_session_cookie_name()))
    response = jsonify({'ok': True})
    _clear_session_cookie(response)
    return response
