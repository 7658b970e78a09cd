"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SALES_TARGET = 1000
DEFAULT_REPORT_MONTHS = 6
DEFAULT_SELFIE_RETENTION_DAYS = 3

DEFAULT_EXPENSE_TYPE = "Travel"
LEAVE_EXPENSE_TYPE = "Leave"
LEAVE_FROM_CLAIM_TYPE = "Personal Leave"
LEAVE_FROM_CLAIM_REASON = "Leave request submitted from Expense screen"

LEAVE_TYPES = (
    "Annual Leave",
    "Sick Leave",
    "Personal Leave",
    "Emergency Leave",
    "Unpaid Leave",
)

FARE_SETTINGS_ID = "expense"

# Headquarters -> STP destinations an employee may be given a distance for.
HEADQUARTERS_STPS: dict[str, tuple[str, ...]] = {
    "BHOPAL": ("VIDISHA", "ITARSI", "NARMADAPURAM", "SEHORE", "ASHTA", "INDORE", "JABALPUR", "GWALIOR"),
    "INDORE": ("DEWAS", "MHOW", "KHANDWA", "KHARGONE", "DHAMNOD", "BHOPAL", "JABALPUR", "GWALIOR"),
    "GWALIOR": ("MORENA", "DABRA", "SHIVPURI", "BHIND", "BHOPAL", "INDORE"),
    "JABALPUR": ("SATNA", "KATNI", "REWA", "BHEDAGHAT", "BHOPAL", "INDORE", "GWALIOR"),
}
