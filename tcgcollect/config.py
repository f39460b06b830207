"""
Configuration - development / production / testing
"""
import os

basedir = os.path.abspath(os.path.dirname(__file__))


def database_url(uri):
    """Point bare postgres URLs at the psycopg (v3) dialect"""
    for scheme in ('postgres://', 'postgresql://'):
        if uri.startswith(scheme):
            return 'postgresql+psycopg://' + uri[len(scheme):]
    return uri


def _engine_options(uri, timeout):
    """Connection timeouts for the store, per driver"""
    if uri.startswith('sqlite'):
        return {'connect_args': {'timeout': timeout}}
    if uri.startswith('postgresql'):
        return {
            'pool_pre_ping': True,
            'connect_args': {
                'connect_timeout': int(timeout),
                'options': f'-c statement_timeout={int(timeout * 1000)}',
            },
        }
    return {}


class BaseConfig:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'tcg-collection-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Seconds before a store call gives up
    STORE_TIMEOUT = float(os.environ.get('STORE_TIMEOUT', 5))

    # Identity provider: signed (local tokens) / remote (external auth service)
    IDENTITY_BACKEND = os.environ.get('IDENTITY_BACKEND', 'signed')
    IDENTITY_URL = os.environ.get('IDENTITY_URL')
    IDENTITY_API_KEY = os.environ.get('IDENTITY_API_KEY')
    IDENTITY_TIMEOUT = float(os.environ.get('IDENTITY_TIMEOUT', 5))
    TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 3600))

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    CORS_HEADERS = ['authorization', 'x-client-info', 'apikey', 'content-type']

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE = os.environ.get('LOG_FILE')

    DEFAULT_CURRENCY = 'EUR'


class DevelopmentConfig(BaseConfig):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    SQLALCHEMY_DATABASE_URI = database_url(os.environ.get('DATABASE_URL', '')) or \
        'sqlite:///' + os.path.join(basedir, '..', 'data', 'tcg_dev.db')
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI, BaseConfig.STORE_TIMEOUT)


class ProductionConfig(BaseConfig):
    """Production configuration"""
    DEBUG = False

    # Hosted postgres hands out postgres:// or postgresql://
    _db_uri = database_url(os.environ.get('DATABASE_URL', ''))
    SQLALCHEMY_DATABASE_URI = _db_uri or 'sqlite:///' + os.path.join(basedir, '..', 'data', 'tcg.db')
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI, BaseConfig.STORE_TIMEOUT)
    LOG_FILE = os.environ.get('LOG_FILE', 'logs/tcgcollect_{time}.log')


class TestingConfig(BaseConfig):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'testing-secret'
    IDENTITY_BACKEND = 'signed'
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
