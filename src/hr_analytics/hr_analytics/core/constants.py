"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

ABSENT_STATUS = "Absent"

# Biometric devices exist only at this office.
DEFAULT_ELIGIBLE_LOCATIONS = ("Delhi",)

DEFAULT_PAGE_SIZE = 1000
MAX_IN_CLAUSE_ITEMS = 500

EXCLUDED_LEAVE_STATUSES = frozenset({"rejected"})
EXCLUDED_REGULARIZATION_STATUSES = frozenset({"cancelled"})

DEFAULT_LEAVE_LABEL = "Leave"
DEFAULT_REGULARIZATION_LABEL = "Regularized"

DEFAULT_TOP_REQUESTERS = 10

LEVELS = ("N", "N+1", "N+2", "N+3", "N+4", "N+5", "N+6")
