"""Example: entitlement summary through the service layer (no Flask)."""

import importlib

from config import get_settings_module

from src.payroll_hr.payroll_hr.container import build_container
from src.payroll_hr.payroll_hr.sickness.model import Ok


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for employee in container.employees_repo.list_active()[:5]:
        result = container.sickness_service.calculate_entitlement_summary(employee)
        if isinstance(result, Ok):
            s = result.summary
            print(f"{employee.full_name}: {s.full_pay_remaining} full / {s.half_pay_remaining} half, SSP left {s.ssp_remaining_days}")
        else:
            print(f"{employee.full_name}: unavailable ({result.reason})")


if __name__ == "__main__":
    main()
