from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from flask import current_app, jsonify, request

from ..core.constants import DEFAULT_CLIENT_DATE_COOKIE
from ..core.result import ErrorKind, Failure, Ok, Result

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 503,
}


def to_json(value: Any) -> Any:
    """Plain JSON structure for dataclasses, dates and decimals."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json(v) for v in value]
    return value


def failure_response(failure: Failure):
    body = {"success": False, "error": failure.kind.value, "message": failure.message}
    return jsonify(body), _STATUS_BY_KIND.get(failure.kind, 400)


def result_response(
    result: Result,
    *,
    message: Optional[str | Callable[[Any], str]] = None,
    extra: Optional[Callable[[Any], dict]] = None,
):
    if not isinstance(result, Ok):
        return failure_response(result)

    body: dict[str, Any] = {"success": True, "data": to_json(result.value)}
    if message is not None:
        body["message"] = message(result.value) if callable(message) else message
    if extra is not None:
        body.update(extra(result.value))
    return jsonify(body), 200


def request_value(name: str, default: Any = None) -> Any:
    """Look a parameter up in JSON body, form data, then query string."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict) and name in payload:
        return payload[name]
    if name in request.form:
        return request.form[name]
    return request.args.get(name, default)


def request_bool(name: str, default: bool = False) -> bool:
    value = request_value(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def client_date_inputs() -> tuple[Any, Optional[str]]:
    """(explicit client date, cookie value) for the date resolver."""
    cookie_name = current_app.config.get("CLIENT_DATE_COOKIE", DEFAULT_CLIENT_DATE_COOKIE)
    return request_value("clientDate"), request.cookies.get(cookie_name)
