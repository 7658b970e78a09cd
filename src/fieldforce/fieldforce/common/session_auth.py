from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Login required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"error": "Administrator role required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    role = session.get("role")
    return Role.ADMIN if role == Role.ADMIN.value else Role.USER
