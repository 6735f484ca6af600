from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_object
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .import_validation import summarize_import
from .model import Ok


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: Optional[str], field: str) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field} must be YYYY-MM-DD")

    def _reference_date() -> Optional[date]:
        return _parse_date(request.args.get("reference_date"), "reference_date")

    def _employee(employee_id: str):
        employee = container.employees_repo.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _record_fields(payload: dict) -> dict:
        start = _parse_date(payload.get("start_date"), "start_date")
        if start is None:
            raise ValidationError("start_date is required")
        total_days = payload.get("total_days")
        try:
            total_days = None if total_days in (None, "") else float(total_days)
        except (TypeError, ValueError):
            raise ValidationError("total_days must be a number")
        return {
            "start_date": start,
            "end_date": _parse_date(payload.get("end_date"), "end_date"),
            "total_days": total_days,
            "reason": payload.get("reason"),
            "is_certified": bool(payload.get("is_certified", False)),
            "notes": payload.get("notes"),
        }

    @app.route("/api/employees/<employee_id>/sickness/records", methods=["GET"], endpoint="sickness_records")
    def sickness_records(employee_id: str):
        records = container.sickness_service.get_records(employee_id)
        return jsonify({"records": [r.as_dict() for r in records]})

    @app.route("/api/employees/<employee_id>/sickness/records", methods=["POST"], endpoint="sickness_record_create")
    def sickness_record_create(employee_id: str):
        payload = require_object(request.get_json(silent=True) or {})
        record = container.sickness_service.record_absence(employee_id=employee_id, **_record_fields(payload))
        return jsonify(record.as_dict()), 201

    @app.route("/api/sickness/records/<record_id>", methods=["PUT"], endpoint="sickness_record_update")
    def sickness_record_update(record_id: str):
        payload = require_object(request.get_json(silent=True) or {})
        record = container.sickness_service.update_record(record_id=record_id, **_record_fields(payload))
        return jsonify(record.as_dict())

    @app.route("/api/sickness/records/<record_id>", methods=["DELETE"], endpoint="sickness_record_delete")
    def sickness_record_delete(record_id: str):
        container.sickness_service.delete_record(record_id)
        return "", 204

    @app.route("/api/employees/<employee_id>/sickness/ssp", methods=["GET"], endpoint="sickness_ssp")
    def sickness_ssp(employee_id: str):
        usage = container.sickness_service.calculate_ssp_usage(employee_id, _reference_date())
        return jsonify(usage.as_dict())

    @app.route("/api/employees/<employee_id>/sickness/summary", methods=["GET"], endpoint="sickness_summary")
    def sickness_summary(employee_id: str):
        result = container.sickness_service.calculate_entitlement_summary(_employee(employee_id), _reference_date())
        if isinstance(result, Ok):
            return jsonify({"available": True, "summary": result.summary.as_dict()})
        return jsonify({"available": False, "reason": result.reason})

    @app.route("/api/employees/<employee_id>/sickness/payments", methods=["GET"], endpoint="sickness_payments")
    def sickness_payments(employee_id: str):
        payments = container.sickness_service.calculate_record_payments(_employee(employee_id), _reference_date())
        return jsonify(
            {
                "payments": [
                    {
                        "record_id": p.record_id,
                        "full_pay_days": p.full_pay_days,
                        "half_pay_days": p.half_pay_days,
                        "no_pay_days": p.no_pay_days,
                        "is_historical": p.is_historical,
                        "description": p.payment_description,
                    }
                    for p in payments
                ]
            }
        )

    @app.route("/api/employees/<employee_id>/sickness/opening-balance", methods=["PUT"], endpoint="sickness_opening_balance")
    def sickness_opening_balance(employee_id: str):
        payload = require_object(request.get_json(silent=True) or {})
        try:
            full = float(payload.get("full_pay_days", 0))
            half = float(payload.get("half_pay_days", 0))
        except (TypeError, ValueError):
            raise ValidationError("Opening balance days must be numbers")

        usage = container.sickness_service.set_opening_balance(
            employee_id=employee_id,
            full_pay_days=full,
            half_pay_days=half,
            reference_date=_parse_date(payload.get("reference_date"), "reference_date"),
            notes=payload.get("notes"),
        )
        return jsonify(
            {
                "employee_id": usage.employee_id,
                "opening_balance_full_pay": usage.opening_balance_full_pay,
                "opening_balance_half_pay": usage.opening_balance_half_pay,
            }
        )

    @app.route("/api/sickness/import/validate", methods=["POST"], endpoint="sickness_import_validate")
    def sickness_import_validate():
        payload = require_object(request.get_json(silent=True) or {})
        rows = payload.get("rows")
        if not isinstance(rows, list):
            raise ValidationError("'rows' must be a list")

        checks = container.sickness_service.validate_import_rows(rows)
        return jsonify({"rows": [c.as_dict() for c in checks], "summary": summarize_import(checks)})
