"""Request helpers."""

from flask import request

from intake.errors import ValidationError


def client_ip():
    """Best guess at the caller's address behind a proxy."""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr


def require_json_object():
    """Reject a JSON body that is not an object before a form reads it."""
    if request.is_json and not isinstance(request.get_json(silent=True), dict):
        raise ValidationError('request body must be a JSON object')
