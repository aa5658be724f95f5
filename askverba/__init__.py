from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def create_app(config_name='development', test_config=None):
    app = Flask(__name__)

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv(
        'DATABASE_URL',
        'sqlite:///askverba.db'
    )
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['AUTH_TOKEN_EXPIRES'] = int(os.getenv('AUTH_TOKEN_EXPIRES', 7 * 24 * 60 * 60))
    app.config['COOKIE_SECURE'] = os.getenv('COOKIE_SECURE', 'False').lower() in ('true', '1', 'yes')
    app.config['REDIS_URL'] = os.getenv('REDIS_URL')
    app.config['TRANSLATION_CACHE_TTL'] = int(os.getenv('TRANSLATION_CACHE_TTL', 7 * 24 * 60 * 60))
    app.config['MAX_TEXT_LENGTH'] = int(os.getenv('MAX_TEXT_LENGTH', 5000))
    app.config['OPENAI_API_KEY'] = os.getenv('OPENAI_API_KEY')
    app.config['OPENAI_BASE_URL'] = os.getenv('OPENAI_BASE_URL')
    app.config['AI_SIMPLE_MODEL'] = os.getenv('AI_SIMPLE_MODEL', 'gpt-4o-mini')
    app.config['AI_DETAILED_MODEL'] = os.getenv('AI_DETAILED_MODEL', 'gpt-4o')
    app.config['AI_TIMEOUT_SECONDS'] = float(os.getenv('AI_TIMEOUT_SECONDS', 30))

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['RATELIMIT_ENABLED'] = False
        app.config['REDIS_URL'] = None

    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=os.getenv('CORS_ORIGINS', '*'), supports_credentials=True)

    # Create tables with error handling
    with app.app_context():
        from askverba import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")

    # Register routes
    from askverba.routes import register_routes
    register_routes(app)

    from askverba.utils.route_guard import guard_request
    app.before_request(guard_request)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
