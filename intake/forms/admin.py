"""Admin panel forms."""

from flask_wtf import FlaskForm
from wtforms import PasswordField
from wtforms.validators import InputRequired


class ChangePasswordForm(FlaskForm):
    """Password rotation; the length policy is enforced when saving."""
    class Meta:
        csrf = False

    currentPassword = PasswordField('Current Password', validators=[
        InputRequired(message='Current and new password required')
    ])
    newPassword = PasswordField('New Password', validators=[
        InputRequired(message='Current and new password required')
    ])
