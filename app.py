import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from cachelib import FileSystemCache
from flask_session import Session
from sqlalchemy.exc import SQLAlchemyError
from config import config_dict, ProdConfig
from models import db
from manage import register_commands
from storage.factory import init_store
from utils.errors import OnboardingError
from routes.authentication import auth_bp
from routes.progress import progress_bp
from routes.admin import admin_bp

logger = logging.getLogger(__name__)

migrate = Migrate()


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logging.getLogger().setLevel(app.config.get("LOG_LEVEL", "INFO"))


def register_error_handlers(app):
    @app.errorhandler(OnboardingError)
    def handle_onboarding_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Database error: %s", error)
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_name=None, store=None, **overrides):
    """Build the app; ``store`` replaces the backend chosen by STORAGE_BACKEND."""
    app = Flask(__name__)

    env = config_name or os.environ.get("FLASK_ENV", "production")
    app.config.from_object(config_dict.get(env, ProdConfig))
    app.config.update(overrides)
    configure_logging(app)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)
    app.config.setdefault("SESSION_CACHELIB", FileSystemCache(app.config["SESSION_FILE_DIR"], threshold=500))
    Session(app)

    db.init_app(app)
    migrate.init_app(app, db)
    init_store(app, store)

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return "Welcome to the Staff Onboarding App!"

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(progress_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    logger.info("Environment: %s, storage backend: %s", env, app.extensions["onboarding_store"].name)
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config.get('DEBUG', False))
