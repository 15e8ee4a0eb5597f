"""
Main Routes Blueprint

Handles the service index, health check and JSON error pages.
"""

from flask import Blueprint, jsonify, url_for

main_bp = Blueprint('main', __name__)


@main_bp.route("/")
def home():
    """Service index listing the available endpoints."""
    return jsonify({
        'name': 'Fantasy Squad Analyst',
        'endpoints': {
            'formations': url_for('squad.formations'),
            'analyze': url_for('squad.analyze'),
            'import': url_for('squad.import_squad'),
            'lineup_add': url_for('squad.add_player'),
            'lineup_move': url_for('squad.move_player'),
            'players': url_for('squad.search_players'),
            'sample_csv': url_for('squad.sample_csv'),
            'health': url_for('main.health'),
        }
    })


@main_bp.route("/health")
def health():
    """Liveness check."""
    return jsonify({'status': 'ok'})


@main_bp.app_errorhandler(404)
def page_not_found(e):
    """JSON 404 for unknown routes."""
    return jsonify({'errors': ['Not found']}), 404


@main_bp.app_errorhandler(413)
def payload_too_large(e):
    """JSON 413 when an upload exceeds MAX_CONTENT_LENGTH."""
    return jsonify({'errors': ['Upload too large']}), 413


@main_bp.app_errorhandler(429)
def rate_limited(e):
    """JSON 429 when a client exceeds the rate limit."""
    return jsonify({'errors': [f"Rate limit exceeded: {e.description}"]}), 429
