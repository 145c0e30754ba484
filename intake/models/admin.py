"""Admin settings model."""

from datetime import datetime
from intake.extensions import db, bcrypt

ADMIN_SETTINGS_KEY = 'admin_settings'


class AdminSettings(db.Model):
    """Singleton record holding the admin panel password override."""
    __tablename__ = 'admin_settings'
    
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(50), unique=True, nullable=False, default=ADMIN_SETTINGS_KEY)
    password_hash = db.Column(db.String(255), nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    @classmethod
    def get(cls):
        """Return the singleton record, or None if no override was ever saved."""
        return cls.query.filter_by(key=ADMIN_SETTINGS_KEY).first()
    
    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')
    
    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)
    
    def __repr__(self):
        return f'<AdminSettings {self.key}>'
