"""Payroll HR sickness entitlement engine.

Feature modules (work_patterns, sickness, reports, employees) each carry a
model, a repository protocol with a MySQL adapter, a service and a thin Flask
controller. The sickness calculations themselves are pure functions over
records and work patterns.
"""
