import logging

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_cors import CORS

from hotel_booking.config import Settings
from hotel_booking.models.user import db
from hotel_booking.models import hotel, booking, review  # noqa: F401  register mappers
from hotel_booking.routes.auth import auth_bp
from hotel_booking.routes.hotel import hotel_bp
from hotel_booking.routes.booking import booking_bp
from hotel_booking.routes.review import review_bp
from hotel_booking.utils.responses import ApiError, api_error
from hotel_booking.cli import register_commands

logger = logging.getLogger(__name__)

jwt = JWTManager()


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger('hotel_booking').setLevel(level)


def register_jwt_callbacks(jwt_manager):
    @jwt_manager.unauthorized_loader
    def missing_token(reason):
        return api_error('UNAUTHORIZED', 401)

    @jwt_manager.invalid_token_loader
    def invalid_token(reason):
        return api_error('UNAUTHORIZED', 401)

    @jwt_manager.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return api_error('UNAUTHORIZED', 401)

    @jwt_manager.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return api_error('UNAUTHORIZED', 401)


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return api_error(error.code, error.status_code)

    @app.errorhandler(404)
    def not_found(error):
        return api_error('NOT_FOUND', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return api_error('METHOD_NOT_ALLOWED', 405)

    # Flask has already logged the traceback by the time this runs
    @app.errorhandler(500)
    def server_error(error):
        db.session.rollback()
        return api_error('SERVER_ERROR', 500)


def create_app(overrides=None):
    app = Flask(__name__)

    # Configuration
    app.config.from_object(Settings)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config['LOG_LEVEL'])

    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(hotel_bp, url_prefix='/api')
    app.register_blueprint(booking_bp, url_prefix='/api')
    app.register_blueprint(review_bp, url_prefix='/api')

    register_error_handlers(app)
    register_commands(app)

    logger.info('%s v%s configured', app.config['APP_NAME'], app.config['VERSION'])
    return app


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(host='0.0.0.0', port=5000, debug=False)
