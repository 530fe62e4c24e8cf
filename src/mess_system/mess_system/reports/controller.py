from __future__ import annotations

from flask import Flask, session

from ..common.guards import admin_required, user_required
from ..common.responses import client_date_inputs, result_response
from ..core.result import capture
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _today():
        return container.engine.resolve_today(*client_date_inputs()).day

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return result_response(capture(container.report_service.dashboard, today=_today()))

    @app.route("/me/home", methods=["GET"], endpoint="user_home")
    @user_required
    def user_home():
        result = capture(container.report_service.member_home, session["user_id"], today=_today())
        return result_response(result)
