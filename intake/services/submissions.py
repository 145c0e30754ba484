"""Create, list and delete contact submissions."""

import logging
from datetime import datetime

from sqlalchemy.exc import DBAPIError, DisconnectionError, OperationalError, SQLAlchemyError

from intake.errors import InternalError, NotFound, Unavailable, ValidationError
from intake.extensions import db
from intake.models import Submission

logger = logging.getLogger(__name__)


def _is_connection_error(err):
    if isinstance(err, (OperationalError, DisconnectionError)):
        return True
    return isinstance(err, DBAPIError) and err.connection_invalidated


def _clean(value):
    if value is None:
        return ''
    return str(value).strip()


def create_submission(name, email, company=None, message=None):
    """Trim and store a submission; returns the saved record."""
    name = _clean(name)
    email = _clean(email)
    if not name or not email:
        raise ValidationError('name and email are required')

    now = datetime.utcnow()
    submission = Submission(
        name=name,
        email=email,
        company=_clean(company),
        message=_clean(message),
        created_at=now,
        updated_at=now
    )
    try:
        db.session.add(submission)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('DB insert failed')
        raise InternalError()
    return submission


def list_submissions():
    """All submissions, newest first."""
    try:
        return Submission.query.order_by(Submission.created_at.desc()).all()
    except SQLAlchemyError as err:
        db.session.rollback()
        logger.exception('DB read failed')
        if _is_connection_error(err):
            raise Unavailable()
        raise InternalError('database error')


def delete_submission(submission_id):
    if not submission_id:
        raise ValidationError('submission id required')
    try:
        submission = db.session.get(Submission, submission_id)
        if submission is None:
            raise NotFound('submission not found')
        db.session.delete(submission)
        db.session.commit()
    except SQLAlchemyError as err:
        db.session.rollback()
        logger.exception('DB delete failed')
        if _is_connection_error(err):
            raise Unavailable()
        raise InternalError()
    logger.info('Deleted submission %s', submission_id)
