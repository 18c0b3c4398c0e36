"""
Mr Tech Shop - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from mrtech.extensions import db, login_manager
from mrtech.config import Config


def create_app(config_class=Config, authenticator=None):
    """Create and configure the Flask application.
    
    Args:
        config_class: Configuration class to use (default: Config)
        authenticator: AdminAuthenticator to use instead of one built
            from the config (tests pass one with a pinned clock)
    
    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    _configure_logging(app)
    
    # Admin credentials are read once and frozen for the process lifetime
    from mrtech.services.auth import AuthConfig, AdminAuthenticator
    from mrtech.admin.session import EXTENSION_KEY, load_admin_from_request
    
    if authenticator is None:
        authenticator = AdminAuthenticator(AuthConfig.from_mapping(app.config))
    app.extensions[EXTENSION_KEY] = authenticator
    if not authenticator.config.is_configured:
        app.logger.warning('ADMIN_PASSWORD and/or AUTH_SECRET not set; admin panel is locked')
    
    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.session_protection = None
    login_manager.request_loader(load_admin_from_request)
    
    # Register blueprints
    from mrtech.public import public_bp
    from mrtech.admin import admin_bp
    from mrtech.api import api_bp
    
    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_bp, url_prefix='/api/admin')
    
    # Context processor for shop details
    @app.context_processor
    def inject_shop_details():
        return dict(shop_name=app.config['SHOP_NAME'],
                    shop_phone=app.config['SHOP_PHONE'],
                    shop_whatsapp=app.config['SHOP_WHATSAPP'])
    
    # Template filter for prices
    @app.template_filter('rands')
    def rands_filter(cents):
        """Cents rounded half up to whole rands, e.g. 129950 -> 1300."""
        return int((cents or 0) / 100 + 0.5)
    
    @app.template_filter('price')
    def price_filter(cents):
        return f'R {rands_filter(cents)}'
    
    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') \
                and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
            os.makedirs(os.path.join(Config.basedir, 'instance'), exist_ok=True)
        db.create_all()
    
    return app


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.getLogger('mrtech').setLevel(level)
    app.logger.setLevel(level)
