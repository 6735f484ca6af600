from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from .service import ReportFilters, apply_filters, departments


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/sickness", methods=["GET"], endpoint="report_sickness")
    def report_sickness():
        filters = ReportFilters.parse(
            search_term=request.args.get("search"),
            department=request.args.get("department"),
            sort_by=request.args.get("sort_by"),
            sort_order=request.args.get("sort_order"),
        )
        ref_s = request.args.get("reference_date")
        try:
            reference_date = parse_iso_date(ref_s) if ref_s else None
        except ValueError:
            raise ValidationError("reference_date must be YYYY-MM-DD")

        employees = container.employees_repo.list_active()
        rows = container.sickness_report_service.build_rows(employees, reference_date=reference_date)
        filtered = apply_filters(rows, filters)

        return jsonify(
            {
                "rows": [r.as_dict() for r in filtered],
                "departments": departments(rows),
                "total": len(rows),
            }
        )
