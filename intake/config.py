import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Admin access
    ADMIN_API_KEY = os.environ.get('ADMIN_API_KEY')
    ADMIN_PANEL_PASSWORD = os.environ.get('ADMIN_PANEL_PASSWORD')
    ADMIN_SESSION_COOKIE = 'admin_sid'
    ADMIN_SESSION_TTL = 60 * 60  # seconds
    ADMIN_PASSWORD_MIN_LENGTH = 6
    # SHA-256 before bcrypt so passwords past 72 bytes are compared in full
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    
    # Mail Configuration
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'True').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_USERNAME')
    ADMIN_NOTIFY_EMAIL = os.environ.get('ADMIN_NOTIFY_EMAIL')
    NOTIFY_ON_ADMIN_LOGIN = _env_flag('NOTIFY_ON_ADMIN_LOGIN')
    
    # Request handling
    MAX_CONTENT_LENGTH = 50 * 1024
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    
    # Responses are JSON only; nothing should be framed or load subresources
    CONTENT_SECURITY_POLICY = "default-src 'none'; frame-ancestors 'none'"
    
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', 3000))
    
    # Settings without which the app refuses to start
    REQUIRED_SETTINGS = ('SQLALCHEMY_DATABASE_URI', 'ADMIN_API_KEY', 'ADMIN_PANEL_PASSWORD')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    

class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    ADMIN_API_KEY = 'test-api-key'
    ADMIN_PANEL_PASSWORD = 'fallback-secret'
    ADMIN_NOTIFY_EMAIL = 'operator@example.com'
    MAIL_DEFAULT_SENDER = 'noreply@example.com'
    MAIL_SUPPRESS_SEND = True
    NOTIFY_ON_ADMIN_LOGIN = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = ['*']


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
