from __future__ import annotations

from flask import Flask, session

from ..common.guards import admin_required, user_required
from ..common.responses import client_date_inputs, request_value, result_response, to_json
from ..core.enums import BillingPeriod
from ..core.result import capture
from ..container import Container
from .service import summarize


def _with_summary(bills) -> dict:
    return {"summary": to_json(summarize(bills))}


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/bills/generate", methods=["POST"], endpoint="admin_bills_generate")
    @admin_required
    def admin_bills_generate():
        period = BillingPeriod.parse(request_value("period"))
        result = container.engine.generate_bills(period, *client_date_inputs())
        return result_response(result, message=lambda summary: summary.message)

    @app.route("/admin/bills", methods=["GET"], endpoint="admin_bills_index")
    @admin_required
    def admin_bills_index():
        return result_response(container.engine.list_all_bills(), extra=_with_summary)

    @app.route("/admin/bills/<int:bill_id>/paid", methods=["POST"], endpoint="admin_bills_mark_paid")
    @admin_required
    def admin_bills_mark_paid(bill_id: int):
        result = container.engine.set_bill_paid(bill_id, True)
        return result_response(result, message="Bill marked as paid!")

    @app.route("/admin/bills/<int:bill_id>/unpaid", methods=["POST"], endpoint="admin_bills_mark_unpaid")
    @admin_required
    def admin_bills_mark_unpaid(bill_id: int):
        result = container.engine.set_bill_paid(bill_id, False)
        return result_response(result, message="Bill marked as unpaid!")

    @app.route("/admin/bills/<int:bill_id>/delete", methods=["POST"], endpoint="admin_bills_delete")
    @admin_required
    def admin_bills_delete(bill_id: int):
        result = container.engine.delete_bill(bill_id)
        return result_response(result, message="Bill deleted successfully!")

    @app.route("/admin/bills/report/<int:year>/<int:month>", methods=["GET"], endpoint="admin_bills_report")
    @admin_required
    def admin_bills_report(year: int, month: int):
        result = capture(container.bill_service.monthly_report, year=year, month=month)
        return result_response(result, extra=_with_summary)

    @app.route("/me/bills", methods=["GET"], endpoint="user_bills_index")
    @user_required
    def user_bills_index():
        status = request_value("status")
        result = container.engine.list_bills_for_user(session["user_id"], status=status)
        return result_response(result, extra=_with_summary)

    @app.route("/me/bills/monthly/<int:year>/<int:month>", methods=["GET"], endpoint="user_bills_monthly")
    @user_required
    def user_bills_monthly(year: int, month: int):
        result = capture(container.bill_service.monthly_for_user, session["user_id"], year=year, month=month)
        return result_response(result)

    @app.route("/me/bills/<int:bill_id>", methods=["GET"], endpoint="user_bill_details")
    @user_required
    def user_bill_details(bill_id: int):
        result = capture(container.bill_service.details, bill_id, user_id=session["user_id"])
        return result_response(result)
