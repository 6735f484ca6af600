"""Constants and defaults.

Note: Keep statutory sick pay rules here to avoid magic numbers spread across code.
"""

# Statutory Sick Pay
PIW_MIN_QUALIFYING_DAYS = 4
PIW_LINKING_GAP_DAYS = 56
SSP_WAITING_DAYS = 3
SSP_MAX_WEEKS = 28

# Assumed full-time week when no work pattern exists
DEFAULT_DAYS_PER_WEEK = 5

# Entitlement unit conversion
WEEKS_PER_YEAR = 52.14
MONTHS_PER_YEAR = 12
DAYS_PER_SERVICE_MONTH = 30

# Import validation tolerances (in days)
IMPORT_VALID_TOLERANCE = 0.1
IMPORT_WARNING_TOLERANCE = 1.0

# Reports
DEFAULT_REPORT_BATCH_SIZE = 20
