"""
Flask application factory and server entry-point.
"""

import os
import sys
import traceback

from flask import Flask
from flask_cors import CORS

from atlas_access.config import ARCGIS_PORTAL_URL, TOKEN_EXPIRY_HOURS, configure_logging
from atlas_access.database import init_engine
from atlas_access.platform import PlatformClient
from atlas_access.api.routes import register_routes


def create_app(engine=None, client_factory=None):
    """Build and return a fully configured Flask application."""
    app = Flask(__name__)
    CORS(app)

    # ── Initialise shared resources ──────────────────────────────────
    if engine is None:
        try:
            print("[init] Initializing database connection...")
            engine = init_engine()
            print("[init] ✓ API server ready")
        except Exception as e:
            print(f"[FATAL] Failed to initialize: {e}", file=sys.stderr)
            traceback.print_exc()
            sys.exit(1)

    # ── Register routes ──────────────────────────────────────────────
    register_routes(app, engine, client_factory or PlatformClient)

    return app


def main():
    """Run the development server."""
    configure_logging()

    print("=" * 60)
    print("Atlas Map Visibility – REST API Server")
    print("=" * 60)

    app = create_app()

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    debug = os.getenv("FLASK_ENV") == "development"

    print(f"\n[server] Starting Flask API on {host}:{port}")
    print(f"[server] Debug mode: {debug}")
    print(f"[server] Platform portal: {ARCGIS_PORTAL_URL}")
    print(f"[server] Session expiry: {TOKEN_EXPIRY_HOURS} hours")
    print("\nAPI Endpoints:")
    print(f"  - POST   http://{host}:{port}/api/auth/login")
    print(f"  - POST   http://{host}:{port}/api/auth/logout")
    print(f"  - PUT    http://{host}:{port}/api/platform/token")
    print(f"  - DELETE http://{host}:{port}/api/platform/token")
    print(f"  - GET    http://{host}:{port}/api/orgs/<org_id>/maps/visibility")
    print(f"  - GET    http://{host}:{port}/health")
    print("\n" + "=" * 60)

    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
