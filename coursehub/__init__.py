import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
from .config import Config
from .extensions import db, migrate, jwt, mail
from .exceptions import register_error_handlers
from .routes import auth, courses, payment


def create_app(config_object=Config):
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)
    CORS(app, resources={r"/api/*": {"origins": "*"}}, supports_credentials=True)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    register_jwt_callbacks()
    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth.bp, url_prefix="/api/v1/auth")
    app.register_blueprint(courses.bp, url_prefix="/api/v1/course")
    app.register_blueprint(payment.bp, url_prefix="/api/v1/payment")

    return app


def register_jwt_callbacks():
    """Authentication failures answer before any view or role check runs."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"success": False, "message": "Token is missing"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"success": False, "message": "Token is invalid"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token has expired"}), 401
