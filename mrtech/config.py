"""
Configuration settings for the Mr Tech shop website
"""
import os


class Config:
    """Flask application configuration"""
    
    # Flask secret key (only used by Flask's own session machinery)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    
    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'mrtech.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Deployment environment; 'production' turns on secure cookies
    APP_ENV = os.environ.get('APP_ENV') or 'development'
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    
    # Admin credentials. No defaults: an unset value keeps the panel locked.
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    AUTH_SECRET = os.environ.get('AUTH_SECRET')
    ADMIN_COOKIE_NAME = 'mrtech_admin'
    
    # Image uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or \
        os.path.join(basedir, 'instance', 'uploads')
    MAX_UPLOAD_BYTES = 6 * 1024 * 1024
    # Hard request ceiling, a little above the upload limit for multipart overhead
    MAX_CONTENT_LENGTH = 8 * 1024 * 1024
    
    # Shop details shown on the public pages
    SHOP_NAME = 'Mr Tech'
    SHOP_PHONE = '0648440825'
    SHOP_WHATSAPP = '27648440825'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    APP_ENV = 'testing'
    ADMIN_PASSWORD = 'hunter2'
    AUTH_SECRET = 'k1'
