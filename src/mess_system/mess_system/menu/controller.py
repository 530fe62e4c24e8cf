from __future__ import annotations

from flask import Flask

from ..common.guards import admin_required
from ..common.responses import client_date_inputs, request_bool, request_value, result_response
from ..core.result import capture
from ..dates.resolver import parse_client_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _today():
        return container.engine.resolve_today(*client_date_inputs()).day

    def _form():
        return dict(
            name=str(request_value("name", "") or ""),
            item_date=parse_client_date(request_value("date")),
            price=request_value("price", ""),
            is_food=request_bool("is_food", default=True),
        )

    @app.route("/admin/menu", methods=["GET"], endpoint="admin_menu_index")
    @admin_required
    def admin_menu_index():
        return result_response(capture(container.menu_service.list_all))

    @app.route("/admin/menu", methods=["POST"], endpoint="admin_menu_add")
    @admin_required
    def admin_menu_add():
        result = capture(container.menu_service.add, today=_today(), **_form())
        return result_response(result, message="Menu item added successfully!")

    @app.route("/admin/menu/<int:menu_item_id>", methods=["PUT", "POST"], endpoint="admin_menu_edit")
    @admin_required
    def admin_menu_edit(menu_item_id: int):
        result = capture(container.menu_service.edit, menu_item_id=menu_item_id, today=_today(), **_form())
        return result_response(result, message="Menu item updated successfully!")

    @app.route("/admin/menu/<int:menu_item_id>/delete", methods=["POST"], endpoint="admin_menu_delete")
    @admin_required
    def admin_menu_delete(menu_item_id: int):
        result = capture(container.menu_service.delete, menu_item_id)
        return result_response(result, message="Menu item deleted successfully!")
