from __future__ import annotations

from flask import Flask, session

from ..common.guards import admin_required, user_required
from ..common.responses import client_date_inputs, request_bool, request_value, result_response, to_json
from ..core.result import capture
from ..dates.resolver import parse_client_date
from ..container import Container
from .service import DailyAttendanceSheet


def _sheet_json(sheet: DailyAttendanceSheet) -> dict:
    return {
        "day": sheet.day.isoformat(),
        "menu": to_json(list(sheet.menu)),
        "users": [
            {
                "user_id": u.user_id,
                "full_name": u.full_name,
                "attended_menu_item_ids": sorted(sheet.attended_ids_for(u.user_id)),
            }
            for u in sheet.users
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _selected_day():
        # An explicit ?date= wins over the resolved business day.
        picked = parse_client_date(request_value("date"))
        if picked is not None:
            return picked
        return container.engine.resolve_today(*client_date_inputs()).day

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance_index")
    @admin_required
    def admin_attendance_index():
        day = _selected_day()
        result = capture(lambda: _sheet_json(container.attendance_service.daily_sheet(day)))
        return result_response(result)

    @app.route("/admin/attendance/mark", methods=["POST"], endpoint="admin_attendance_mark")
    @admin_required
    def admin_attendance_mark():
        result = container.engine.mark_attendance(
            request_value("user_id"),
            request_value("menu_item_id"),
            request_bool("attended"),
        )
        return result_response(result, message="Attendance updated.")

    @app.route("/admin/attendance/auto-mark-drinks", methods=["POST"], endpoint="admin_attendance_auto_mark")
    @admin_required
    def admin_attendance_auto_mark():
        result = container.engine.auto_mark_drinks(*client_date_inputs())
        return result_response(
            result,
            message=lambda outcome: outcome.message,
            extra=lambda outcome: {"warning": outcome.warning},
        )

    @app.route("/admin/attendance/export", methods=["GET"], endpoint="admin_attendance_export")
    @admin_required
    def admin_attendance_export():
        day = _selected_day()
        result = capture(container.attendance_service.export_day, day)
        return result_response(result, extra=lambda _rows: {"day": day.isoformat()})

    @app.route("/me/attendance", methods=["GET"], endpoint="user_attendance_history")
    @user_required
    def user_attendance_history():
        today = container.engine.resolve_today(*client_date_inputs()).day
        result = capture(container.attendance_service.history_for_user, session["user_id"], today=today)
        return result_response(result)
