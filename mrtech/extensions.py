"""
Flask Extensions

The admin panel has no user table. Flask-Login only carries the identity
derived from a verified admin cookie; nothing is kept in the session.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager, fed by the admin cookie request loader
login_manager = LoginManager()
