import logging

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from werkzeug.exceptions import HTTPException

from osteovet.config import Config
from osteovet.errors import ApiError

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

logger = logging.getLogger(__name__)


def build_api():
    return Api(
        title='OsteoVet Clinic API',
        version='1.0',
        description='Booking and administration API for a veterinary osteopathy clinic',
        doc='/docs',
        ui_config={
            'displayOperationId': True,
            'docExpansion': 'none',
            'filter': True,
            'defaultModelsExpandDepth': 1,
            'defaultModelExpandDepth': 1
        },
        security=[{'BearerAuth': []}],  # Define JWT security
        authorizations={
            'BearerAuth': {
                'type': 'apiKey',
                'in': 'header',
                'name': 'Authorization',
                'description': 'Enter your JWT token as "Bearer <token>"'
            }
        }
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    api = build_api()

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # Token resolution and JWT error envelopes
    from .utils.auth_middleware import setup_auth_middleware
    setup_auth_middleware(jwt)

    from .routes.auth_routes import auth_ns
    from .routes.users_routes import users_ns
    from .routes.animal_routes import animal_ns
    from .routes.service_routes import service_ns
    from .routes.appointment_routes import appointment_ns
    from .routes.reminder_routes import reminder_ns
    from .routes.todo_routes import todo_ns
    from .routes.blog_routes import blog_ns
    from .routes.dashboard_routes import dashboard_ns

    # Add namespaces to the API
    api.add_namespace(auth_ns)
    api.add_namespace(users_ns)
    api.add_namespace(animal_ns)
    api.add_namespace(service_ns)
    api.add_namespace(appointment_ns)
    api.add_namespace(reminder_ns)
    api.add_namespace(todo_ns)
    api.add_namespace(blog_ns)
    api.add_namespace(dashboard_ns)

    @api.errorhandler(ApiError)
    def handle_api_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            logger.error(f"API error: {error.message}")
        return {'error': error.message}, error.status_code

    @api.errorhandler(HTTPException)
    def handle_http_error(error):
        return {'error': error.description}, error.code

    api.init_app(app)

    @app.errorhandler(HTTPException)
    def handle_app_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception(f"Unexpected error: {error}")
        return jsonify({'error': 'An unexpected error occurred'}), 500

    from .commands import register_commands
    register_commands(app)

    # Import models so every table is known before create_all
    from . import models  # noqa: F401

    with app.app_context():
        db.create_all()  # Create all tables

    return app
