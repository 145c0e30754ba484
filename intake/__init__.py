"""Flask application factory."""

import logging
import os

from flask import Flask, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import config
from .errors import IntakeError
from .extensions import db, migrate, login_manager, bcrypt, mail, cors, admin_sessions

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')
    
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    
    missing = [key for key in app.config['REQUIRED_SETTINGS'] if not app.config.get(key)]
    if missing:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")
    
    if not app.testing:
        logging.basicConfig(
            level=app.config['LOG_LEVEL'],
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
    
    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    mail.init_app(app)
    admin_sessions.init_app(app)
    cors.init_app(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        methods=['GET', 'POST', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'x-api-key']
    )
    
    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)
    
    from .cli import register_commands
    register_commands(app)
    
    # Admin requests authenticate per request, by API key or session cookie
    from .services import auth_gate
    
    @login_manager.request_loader
    def load_admin(req):
        return auth_gate.authorize(
            req.headers.get('x-api-key'),
            req.cookies.get(current_app.config['ADMIN_SESSION_COOKIE'])
        )
    
    @app.after_request
    def security_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'no-referrer')
        response.headers.setdefault('Content-Security-Policy', app.config['CONTENT_SECURITY_POLICY'])
        if request.is_secure:
            response.headers.setdefault('Strict-Transport-Security', 'max-age=31536000; includeSubDomains')
        return response
    
    # Error handlers
    @app.errorhandler(IntakeError)
    def intake_error(error):
        return jsonify(error.to_dict()), error.status_code
    
    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'error': error.description or error.name}), error.code
    
    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        logger.error('Unhandled error on %s %s', request.method, request.path)
        return jsonify({'error': 'internal server error'}), 500
    
    # Create tables; an unreachable database is reported per request instead
    from . import models  # noqa: F401
    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError:
            logger.exception('Database connection error at startup')
    
    return app
