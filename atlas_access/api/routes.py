"""
Flask route handlers for the REST API.
"""

import asyncio
import sys
import traceback
from datetime import datetime, timedelta

from flask import request, jsonify

from atlas_access.config import TOKEN_EXPIRY_HOURS
from atlas_access.database import check_connection
from atlas_access.directory import load_session_context, load_org_maps
from atlas_access.engine import resolve_visibility
from atlas_access.models import Viewer
from atlas_access.token_store import InMemoryTokenStore, viewer_for
from atlas_access.api.auth import (
    sessions,
    cleanup_expired_sessions,
    current_session,
    generate_token,
    token_required,
)


def _user_json(ctx):
    return {
        "id": ctx.user_id,
        "display_name": ctx.display_name,
        "org_id": ctx.org_id,
        "linked_arcgis_username": ctx.linked_platform_username,
    }


def register_routes(app, engine, client_factory):
    """Register all API routes on the Flask *app*.

    *client_factory* returns a fresh PlatformClient for each resolution.
    """

    async def _resolve(maps, viewer):
        async with client_factory() as client:
            return await resolve_visibility(maps, viewer, client)

    # ── Health / info ────────────────────────────────────────────────

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "service": "Atlas Map Visibility API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "auth": "/api/auth/login",
                "logout": "/api/auth/logout",
                "platform_token": "/api/platform/token",
                "visibility": "/api/orgs/<org_id>/maps/visibility",
                "health": "/health",
            },
        })

    @app.route("/health", methods=["GET"])
    def health():
        checks = {"database": bool(engine) and check_connection(engine)}
        all_healthy = all(checks.values())
        return jsonify({
            "status": "healthy" if all_healthy else "unhealthy",
            "checks": checks,
            "active_sessions": len(sessions),
        }), 200 if all_healthy else 503

    # ── Auth ─────────────────────────────────────────────────────────

    @app.route("/api/auth/login", methods=["POST"])
    def login():
        if not request.is_json:
            return jsonify({"error": "Content-Type must be application/json"}), 400

        data = request.json
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        api_key = (data.get("api_key") or "").strip()
        if not api_key:
            return jsonify({"error": "api_key is required"}), 400

        cleanup_expired_sessions()
        try:
            ctx = load_session_context(engine, api_key)
            token = generate_token(ctx)

            sessions[token] = {
                "ctx": ctx,
                "token_store": InMemoryTokenStore(),
                "created_at": datetime.utcnow(),
                "last_activity": datetime.utcnow(),
            }

            return jsonify({
                "success": True,
                "token": token,
                "user": _user_json(ctx),
                "expires_at": (datetime.utcnow() + timedelta(hours=TOKEN_EXPIRY_HOURS)).isoformat(),
            }), 200

        except ValueError as e:
            return jsonify({"error": f"Authentication failed: {str(e)}"}), 401
        except Exception as e:
            print(f"[ERROR] Login error: {e}", file=sys.stderr)
            traceback.print_exc()
            return jsonify({"error": "Internal server error during login"}), 500

    @app.route("/api/auth/logout", methods=["POST"])
    @token_required
    def logout():
        sessions.pop(request.token, None)
        return jsonify({"success": True, "message": "Logged out successfully"}), 200

    # ── Delegated platform token ─────────────────────────────────────

    @app.route("/api/platform/token", methods=["PUT"])
    @token_required
    def store_platform_token():
        if not request.is_json:
            return jsonify({"error": "Content-Type must be application/json"}), 400

        data = request.json
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        access_token = (data.get("access_token") or "").strip()
        if not access_token:
            return jsonify({"error": "access_token is required"}), 400

        try:
            expires_in = int(data["expires_in"]) if data.get("expires_in") is not None else None
        except (TypeError, ValueError):
            return jsonify({"error": "expires_in must be an integer number of seconds"}), 400

        stored = request.session_data["token_store"].store_token(
            access_token, username=data.get("username"), expires_in=expires_in,
        )
        return jsonify({
            "success": True,
            "username": stored.username,
            "expires_at": stored.expires_at.isoformat() if stored.expires_at else None,
        }), 200

    @app.route("/api/platform/token", methods=["DELETE"])
    @token_required
    def clear_platform_token():
        request.session_data["token_store"].clear()
        return jsonify({"success": True}), 200

    # ── Visibility ───────────────────────────────────────────────────

    @app.route("/api/orgs/<org_id>/maps/visibility", methods=["GET"])
    def map_visibility(org_id):
        session_data = current_session()

        # A session only counts for the organisation it was issued for.
        if session_data and session_data["ctx"].org_id == org_id:
            ctx = session_data["ctx"]
            viewer = viewer_for(True, ctx.linked_platform_username, session_data["token_store"])
        else:
            viewer = Viewer()

        try:
            maps = load_org_maps(engine, org_id)
        except ValueError as e:
            return jsonify({"success": False, "error": "Invalid map configuration", "details": str(e)}), 422
        except Exception as e:
            print(f"[ERROR] Map configuration lookup failed: {e}", file=sys.stderr)
            traceback.print_exc()
            return jsonify({"success": False, "error": "Could not load map configuration"}), 500

        result = asyncio.run(_resolve(maps, viewer))

        body = result.to_dict()
        body.update({
            "success": True,
            "org_id": org_id,
            "viewer": {
                "signed_in": viewer.has_session,
                "linked_arcgis": bool(viewer.linked_platform_username),
                "has_platform_token": bool(viewer.delegated_token),
            },
        })
        return jsonify(body), 200

    # ── Error handlers ───────────────────────────────────────────────

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Endpoint not found", "message": str(e)}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "message": str(e)}), 405

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "Internal server error", "message": str(e)}), 500
