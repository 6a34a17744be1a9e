"""
JWT authentication helpers and middleware for the Flask API.
"""

from datetime import datetime, timedelta
from functools import wraps
from typing import Dict, Any, Optional

import jwt
from flask import request, jsonify

from atlas_access.config import SECRET_KEY, TOKEN_EXPIRY_HOURS
from atlas_access.models import SessionContext

# In-memory session store (use Redis in production)
# Structure: {token: {"ctx": SessionContext, "token_store": InMemoryTokenStore, "created_at": datetime, ...}}
sessions: Dict[str, Dict[str, Any]] = {}


def generate_token(ctx: SessionContext) -> str:
    """Generate a JWT token for an authenticated user."""
    payload = {
        "user_id": ctx.user_id,
        "org_id": ctx.org_id,
        "display_name": ctx.display_name,
        "iat": datetime.utcnow(),
        "exp": datetime.utcnow() + timedelta(hours=TOKEN_EXPIRY_HOURS),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm="HS256")


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a JWT token and return the decoded payload (or None)."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def _bearer_token() -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ")
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return request.args.get("token") or None


def current_session() -> Optional[Dict[str, Any]]:
    """Return the caller's session data, or None for anonymous callers."""
    token = _bearer_token()
    if not token or not verify_token(token):
        return None
    session_data = sessions.get(token)
    if session_data is not None:
        session_data["last_activity"] = datetime.utcnow()
    return session_data


def token_required(f):
    """Decorator that protects endpoints with JWT authentication."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if "Authorization" in request.headers and len(request.headers["Authorization"].split(" ")) != 2:
            return jsonify({"error": "Invalid authorization header format"}), 401

        token = _bearer_token()
        if not token:
            return jsonify({"error": "Authentication token is missing"}), 401

        if not verify_token(token):
            return jsonify({"error": "Invalid or expired token"}), 401

        if token not in sessions:
            return jsonify({"error": "Session not found. Please login again."}), 401

        request.session_data = sessions[token]
        request.session_data["last_activity"] = datetime.utcnow()
        request.token = token

        return f(*args, **kwargs)

    return decorated


def cleanup_expired_sessions():
    """Remove sessions that have been inactive beyond TOKEN_EXPIRY_HOURS."""
    now = datetime.utcnow()
    expired = [
        tok for tok, data in sessions.items()
        if (now - data["last_activity"]).total_seconds() > TOKEN_EXPIRY_HOURS * 3600
    ]
    for tok in expired:
        del sessions[tok]
    if expired:
        print(f"[cleanup] Removed {len(expired)} expired sessions")
