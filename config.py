import os
import tempfile
from datetime import timedelta
from urllib.parse import urlparse
import pymysql
pymysql.install_as_MySQLdb()


def _normalize_db_url(raw_db_url):
    if raw_db_url.startswith("mysql://"):
        raw_db_url = raw_db_url.replace("mysql://", "mysql+pymysql://", 1)
    elif raw_db_url.startswith("postgres://"):
        raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)

    parsed_url = urlparse(raw_db_url)
    if parsed_url.scheme.startswith("sqlite"):
        return raw_db_url
    return f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path}"


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change_this_secret_key')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PASSWORD_HASH_METHOD = "pbkdf2:sha256"

    # sqlalchemy | memory | json
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'sqlalchemy')
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data'))

    # create_app builds a cachelib FileSystemCache rooted at SESSION_FILE_DIR
    SESSION_TYPE = 'cachelib'
    SESSION_FILE_DIR = os.getenv('SESSION_FILE_DIR', os.path.join(tempfile.gettempdir(), 'onboarding_sessions'))
    SESSION_PERMANENT = True
    SESSION_REFRESH_EACH_REQUEST = False
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "False") == "True"
    SESSION_COOKIE_PATH = "/"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevConfig(Config):
    """Development Configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///onboarding.db'))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestConfig(Config):
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    STORAGE_BACKEND = 'sqlalchemy'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = "WARNING"


class ProdConfig(Config):
    """Production Configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "True") == "True"

    raw_db_url = os.getenv('DATABASE_URL')

    if raw_db_url:
        SQLALCHEMY_DATABASE_URI = _normalize_db_url(raw_db_url)
    else:
        SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///onboarding.db')


ENV = os.getenv('FLASK_ENV', 'production').lower()

config_dict = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProdConfig
}

CurrentConfig = config_dict.get(ENV, ProdConfig)
