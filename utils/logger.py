"""
Professional Logging Setup

Provides centralized logging configuration for the Flask application
with structured output and request tracking.
"""

import logging
import sys
from flask import request, has_request_context

# Package loggers that share the application handler
SERVICE_LOGGERS = ('services',)


def setup_logger(app):
    """
    Configure professional logging for the Flask application.

    Sets up:
    - Structured log format with timestamps
    - Console output to stdout
    - Request logging for all incoming HTTP requests
    - Appropriate log level based on environment or LOG_LEVEL
    - The same handler on service module loggers

    Args:
        app: Flask application instance
    """
    # Create console handler
    handler = logging.StreamHandler(sys.stdout)

    # Create formatter with detailed structure
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    # Set log level from config, falling back to debug mode
    configured_level = app.config.get('LOG_LEVEL')
    if configured_level:
        level = getattr(logging, str(configured_level).upper(), logging.INFO)
    elif app.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Configure app logger
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    # Prevent duplicate logs from propagating
    app.logger.propagate = False

    for name in SERVICE_LOGGERS:
        service_logger = logging.getLogger(name)
        if not any(isinstance(h, logging.StreamHandler) for h in service_logger.handlers):
            service_logger.addHandler(handler)
        service_logger.setLevel(level)

    @app.before_request
    def log_request_info():
        """Log incoming request details."""
        if has_request_context():
            app.logger.info(
                f"Request: {request.method} {request.path} "
                f"from {request.remote_addr}"
            )

    @app.after_request
    def log_response_info(response):
        """Log response status."""
        if has_request_context():
            app.logger.info(
                f"Response: {response.status_code} for "
                f"{request.method} {request.path}"
            )
        return response

    # Log startup
    app.logger.info(f"Logging configured - Level: {logging.getLevelName(app.logger.level)}")

    return app
