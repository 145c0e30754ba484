"""Contact submission form."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional


def strip_value(value):
    if value is None:
        return value
    return str(value).strip()


class ContactForm(FlaskForm):
    """Public contact form; accepts JSON or form-encoded bodies."""
    class Meta:
        csrf = False

    name = StringField('Name', filters=[strip_value], validators=[
        DataRequired(message='name and email are required'),
        Length(max=200, message='name must be at most 200 characters')
    ])
    email = StringField('Email', filters=[strip_value], validators=[
        DataRequired(message='name and email are required'),
        Length(max=254, message='email must be at most 254 characters')
    ])
    company = StringField('Company', filters=[strip_value], validators=[
        Optional(),
        Length(max=200, message='company must be at most 200 characters')
    ])
    message = TextAreaField('Message', filters=[strip_value], validators=[
        Optional(),
        Length(max=10000, message='message must be at most 10000 characters')
    ])
