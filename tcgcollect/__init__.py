"""
TCG collection manager - Flask application factory
"""
from flask import Flask
from flask_cors import CORS
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from loguru import logger
import os
import sys

db = SQLAlchemy()
login_manager = LoginManager()
cors = CORS()


def create_app(config_name=None):
    """Application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app.config.from_object(f'tcgcollect.config.{config_name.capitalize()}Config')

    _configure_logging(app)
    _ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])

    # Extensions
    db.init_app(app)
    login_manager.init_app(app)
    # Bearer tokens only; no cookie session to protect
    login_manager.session_protection = None
    cors.init_app(
        app,
        origins=app.config['CORS_ORIGINS'],
        allow_headers=app.config['CORS_HEADERS'],
    )

    from tcgcollect.identity import init_identity
    init_identity(app)

    from tcgcollect.errors import register_error_handlers
    register_error_handlers(app)

    # Blueprints
    from tcgcollect.routes import cards, collections, prices, profiles

    app.register_blueprint(cards.bp)
    app.register_blueprint(collections.bp)
    app.register_blueprint(prices.bp)
    app.register_blueprint(profiles.bp)

    # Create tables
    with app.app_context():
        import tcgcollect.models  # noqa: F401
        db.create_all()

    logger.debug(f'App created with {config_name} config')
    return app


def _configure_logging(app):
    """stderr sink at LOG_LEVEL, plus a rotating file when LOG_FILE is set"""
    logger.remove()
    logger.add(sys.stderr, level=app.config['LOG_LEVEL'])
    if app.config.get('LOG_FILE'):
        logger.add(app.config['LOG_FILE'], level=app.config['LOG_LEVEL'],
                   rotation="10 MB", retention="7 days")


def _ensure_sqlite_dir(uri):
    prefix = 'sqlite:///'
    if uri.startswith(prefix) and ':memory:' not in uri:
        os.makedirs(os.path.dirname(os.path.abspath(uri[len(prefix):])), exist_ok=True)
