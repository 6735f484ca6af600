from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_object
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/work-pattern", methods=["GET"], endpoint="work_pattern_get")
    def work_pattern_get(employee_id: str):
        pattern = container.work_pattern_service.get_pattern(employee_id)
        qualifying = container.work_pattern_service.resolve_for_employee(employee_id)
        return jsonify(
            {
                "employee_id": employee_id,
                "days": [d.as_dict() for d in pattern],
                "qualifying_days_per_week": qualifying.days_per_week,
            }
        )

    @app.route("/api/employees/<employee_id>/work-pattern", methods=["PUT"], endpoint="work_pattern_put")
    def work_pattern_put(employee_id: str):
        payload = require_object(request.get_json(silent=True) or {})
        days = payload.get("days")
        if not isinstance(days, list):
            raise ValidationError("'days' must be a list")

        saved = container.work_pattern_service.replace_pattern(employee_id, days)
        return jsonify({"employee_id": employee_id, "days": [d.as_dict() for d in saved]})
