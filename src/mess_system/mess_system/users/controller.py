from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.guards import login_required
from ..common.responses import request_bool, request_value
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        username = str(request_value("username", "") or "")
        password = str(request_value("password", "") or "")

        try:
            s_user = container.auth_service.authenticate(username, password)
        except (AuthenticationError, ValidationError) as e:
            return jsonify({"success": False, "error": "AUTHENTICATION", "message": str(e)}), 401

        session.clear()
        session.permanent = request_bool("remember_me")

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("User %s logged in as %s", s_user.user_id, s_user.role.value)
        return jsonify(
            {
                "success": True,
                "message": f"Welcome back, {s_user.full_name}!",
                "data": {"user_id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value},
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "data": {"user_id": session["user_id"], "full_name": session.get("name"), "role": session.get("role")},
            }
        )
