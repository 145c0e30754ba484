"""Contact submission model."""

import uuid
from datetime import datetime
from intake.extensions import db


def _new_id():
    return uuid.uuid4().hex


class Submission(db.Model):
    """Contact form submissions."""
    __tablename__ = 'submissions'
    
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    company = db.Column(db.String(200), nullable=False, default='')
    message = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'company': self.company,
            'message': self.message,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
    
    def __repr__(self):
        return f'<Submission {self.id} {self.email}>'
