from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from src.payroll_hr.payroll_hr.main import create_app
from src.payroll_hr.payroll_hr.reports.service import SicknessReportService
from src.payroll_hr.payroll_hr.sickness.model import EntitlementUsage
from src.payroll_hr.payroll_hr.work_patterns.service import WorkPatternService


@pytest.fixture
def client(monkeypatch, employees_repo, patterns_repo, sickness_service):
    monkeypatch.setenv("APP_ENV", "testing")
    container = SimpleNamespace(
        employees_repo=employees_repo,
        work_pattern_service=WorkPatternService(patterns_repo),
        sickness_service=sickness_service,
        sickness_report_service=SicknessReportService(sickness_service, batch_size=2),
    )
    app = create_app(container=container)
    return app.test_client()


def _usage(employee_id: str) -> EntitlementUsage:
    return EntitlementUsage(
        employee_id=employee_id,
        entitlement_period_start=date(2024, 1, 1),
        entitlement_period_end=date(2024, 12, 31),
        full_pay_entitled_days=10,
        half_pay_entitled_days=10,
    )


def test_work_pattern_round_trip(client):
    resp = client.put(
        "/api/employees/e1/work-pattern",
        json={"days": [{"day": "Monday", "is_working": True}, {"day": "Tuesday", "is_working": True}]},
    )
    assert resp.status_code == 200

    body = client.get("/api/employees/e1/work-pattern").get_json()
    assert body["qualifying_days_per_week"] == 2
    assert [d["day"] for d in body["days"]] == ["Monday", "Tuesday"]


def test_work_pattern_rejects_bad_day(client):
    resp = client.put("/api/employees/e1/work-pattern", json={"days": [{"day": "Caturday", "is_working": True}]})

    assert resp.status_code == 400
    assert "Caturday" in resp.get_json()["error"]


def test_record_crud(client):
    resp = client.post("/api/employees/e1/sickness/records", json={"start_date": "2024-01-15", "end_date": "2024-01-19"})
    assert resp.status_code == 201
    record = resp.get_json()
    assert record["total_days"] == 5

    resp = client.put(f"/api/sickness/records/{record['id']}", json={"start_date": "2024-01-15", "end_date": "2024-01-16"})
    assert resp.get_json()["total_days"] == 2

    assert client.delete(f"/api/sickness/records/{record['id']}").status_code == 204
    assert client.delete(f"/api/sickness/records/{record['id']}").status_code == 404


def test_overlapping_record_is_rejected(client):
    client.post("/api/employees/e1/sickness/records", json={"start_date": "2024-01-15", "end_date": "2024-01-19"})

    resp = client.post("/api/employees/e1/sickness/records", json={"start_date": "2024-01-18"})

    assert resp.status_code == 400


def test_bad_date_is_a_validation_error(client):
    resp = client.post("/api/employees/e1/sickness/records", json={"start_date": "15/01/2024"})

    assert resp.status_code == 400


def test_ssp_endpoint(client):
    client.post("/api/employees/e1/sickness/records", json={"start_date": "2024-01-15", "end_date": "2024-01-19"})

    body = client.get("/api/employees/e1/sickness/ssp?reference_date=2024-06-30").get_json()

    assert body == {
        "qualifying_days_per_week": 5,
        "ssp_entitled_days": 140,
        "ssp_used_current_year": 2,
        "ssp_used_rolling_12": 2,
    }


def test_summary_available_and_unavailable(client, usage_repo):
    body = client.get("/api/employees/e1/sickness/summary?reference_date=2024-06-30").get_json()
    assert body["available"] is False

    usage_repo.upsert(_usage("e1"))
    body = client.get("/api/employees/e1/sickness/summary?reference_date=2024-06-30").get_json()
    assert body["available"] is True
    assert body["summary"]["full_pay_remaining"] == 10
    assert body["summary"]["rolling_period_start"] == "2023-07-01"


def test_summary_for_unknown_employee(client):
    assert client.get("/api/employees/nobody/sickness/summary").status_code == 404


def test_store_failure_maps_to_503(client, records_repo):
    records_repo.fail = True

    resp = client.get("/api/employees/e1/sickness/records")

    assert resp.status_code == 503


def test_import_validation_endpoint(client):
    resp = client.post(
        "/api/sickness/import/validate",
        json={
            "rows": [
                {"employee_id": "e1", "start_date": "2024-01-15", "end_date": "2024-01-19", "total_days": 5},
                {"employee_id": "e1", "start_date": "2024-01-15", "end_date": "2024-01-19", "total_days": 9},
            ]
        },
    )

    body = resp.get_json()
    assert [r["status"] for r in body["rows"]] == ["valid", "error"]
    assert body["summary"]["total"] == 2


def test_report_endpoint(client, usage_repo):
    usage_repo.upsert(_usage("e1"))

    body = client.get("/api/reports/sickness?reference_date=2024-06-30&sort_by=name").get_json()

    assert body["total"] == 2
    assert body["departments"] == ["Ops", "Research"]
    by_id = {r["employee"]["id"]: r for r in body["rows"]}
    assert by_id["e1"]["entitlement_summary"]["half_pay_remaining"] == 10
    assert by_id["e2"]["entitlement_summary"] is None


def test_report_rejects_unknown_sort(client):
    assert client.get("/api/reports/sickness?sort_by=salary").status_code == 400


def test_non_numeric_total_days_is_a_validation_error(client):
    resp = client.post("/api/employees/e1/sickness/records", json={"start_date": "2024-01-15", "total_days": "lots"})

    assert resp.status_code == 400
    assert "total_days" in resp.get_json()["error"]


@pytest.mark.parametrize(
    "method, url",
    [
        ("post", "/api/employees/e1/sickness/records"),
        ("put", "/api/employees/e1/sickness/opening-balance"),
        ("post", "/api/sickness/import/validate"),
        ("put", "/api/employees/e1/work-pattern"),
    ],
)
def test_non_object_body_is_a_validation_error(client, method, url):
    resp = getattr(client, method)(url, json=["2024-01-15"])

    assert resp.status_code == 400
    assert "JSON object" in resp.get_json()["error"]


def test_non_object_import_row_is_a_validation_error(client):
    resp = client.post("/api/sickness/import/validate", json={"rows": [42]})

    assert resp.status_code == 400
    assert "Row 1" in resp.get_json()["error"]


def test_summary_unavailable_on_corrupt_record(client, usage_repo, records_repo):
    usage_repo.upsert(_usage("e1"))
    records_repo.fail = ValueError("corrupt DATE column")

    resp = client.get("/api/employees/e1/sickness/summary?reference_date=2024-06-30")

    assert resp.status_code == 200
    assert resp.get_json() == {"available": False, "reason": "corrupt DATE column"}
