"""Access decorators for admin routes."""

from functools import wraps
from flask_login import current_user

from intake.errors import Unauthorized


def admin_required(f):
    """Decorator to require an API key or a live admin session."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthorized()
        return f(*args, **kwargs)
    return decorated_function
