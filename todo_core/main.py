"""Flask application entry point."""

import logging

import click
from flask import Flask, jsonify
from flask_cors import CORS

from .config import settings
from .db import get_core, init_db
from .exceptions import (
    AuthenticationError,
    AuthFailure,
    DuplicateEmail,
    ResourceNotFound,
    TodoCoreError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration (credentials needed for the session cookie)
CORS(app, origins=settings.cors_origins, supports_credentials=True)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# Error handlers
def _error_response(error: TodoCoreError, error_type: str | None = None):
    response = {
        "error": {
            "type": error_type or error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response)


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error), 400


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle Unauthorized, InvalidCredentials and other 401s."""
    return _error_response(error), 401


@app.errorhandler(AuthFailure)
def handle_auth_failure(error):
    """Session failures that escaped the auth gate are still plain 401s."""
    logger.warning(f"Unconverted session failure: {error.message}")
    return jsonify({
        "error": {
            "type": "Unauthorized",
            "message": "Invalid or expired session"
        }
    }), 401


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error), 404


@app.errorhandler(DuplicateEmail)
def handle_duplicate_email(error):
    """Handle DuplicateEmail exceptions."""
    return _error_response(error), 409


@app.errorhandler(TodoCoreError)
def handle_todo_core_error(error):
    """Handle generic TodoCoreError exceptions without leaking details."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return jsonify({
        "error": {
            "type": error.__class__.__name__,
            "message": "An internal error occurred"
        }
    }), 500


@app.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {getattr(error, 'original_exception', error)}")
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Maintenance commands
@app.cli.command("sweep-sessions")
def sweep_sessions_command():
    """Delete expired sessions from the session store."""
    from .auth.session import sweep_expired_sessions

    core = get_core()
    try:
        removed = sweep_expired_sessions(core)
    finally:
        core.close()
    click.echo(f"Removed {removed} expired session(s)")


# Register blueprints
from .api import api_bp
from .auth.api import auth_bp

app.register_blueprint(auth_bp, url_prefix=f"{settings.api_prefix}/auth")
app.register_blueprint(api_bp, url_prefix=settings.api_prefix)


if __name__ == "__main__":
    app.run(debug=True)
