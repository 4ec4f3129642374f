"""
Kouji Web Application Factory

Flask app that registers the JSON API blueprints.
Mirrors how cli/main.py assembles module CLIs.
"""

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

import kouji
from kouji.core import get_logger

logger = get_logger("kouji.api")


def create_app() -> Flask:
    """Create and configure the Kouji Flask application."""
    app = Flask(__name__)
    app.json.ensure_ascii = False

    @app.route("/")
    def index():
        return jsonify({
            "name": "kouji",
            "version": kouji.__version__,
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules() if rule.endpoint != "static"
            ),
        })

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.name, "message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error", "message": str(exc)}), 500

    # ── Register blueprints ──────────────────────────────────────────────
    from kouji.api.projects import bp as projects_bp
    app.register_blueprint(projects_bp)

    from kouji.api.timeparse import bp as timeparse_bp
    app.register_blueprint(timeparse_bp)

    return app
