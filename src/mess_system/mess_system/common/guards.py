from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "AUTHENTICATION", "message": "Please log in to continue."}), 401
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "error": "AUTHENTICATION", "message": "Please log in to continue."}), 401
            if session.get("role") != role.value:
                return jsonify({"success": False, "error": "AUTHORIZATION", "message": "You do not have permission."}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
user_required = role_required(Role.USER)
