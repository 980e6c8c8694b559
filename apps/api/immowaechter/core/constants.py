"""Shared reminder and risk thresholds.

Eligibility, risk scoring and dashboard display all read from this module so
the cadences and weights cannot drift apart.
"""

# =============================================================================
# Reminder cadence
# =============================================================================

# Days before the due date on which a reminder goes out (0 = due today)
REMINDER_DAYS_BEFORE_DUE: tuple[int, ...] = (30, 14, 7, 3, 1, 0)

# Overdue components are re-notified every N days
OVERDUE_REMINDER_CADENCE_DAYS = 7

# Components due within this many days are candidates for a sweep
NOTIFICATION_LOOKAHEAD_DAYS = 30


# =============================================================================
# Property risk score
# =============================================================================

RISK_SCORE_MIN = 0
RISK_SCORE_MAX = 100

COMPONENT_TYPE_WEIGHTS: dict[str, int] = {
    "heating": 15,
    "electrical": 12,
    "plumbing": 10,
    "security": 8,
    "fire_safety": 20,
    "elevator": 18,
    "roof": 12,
    "facade": 8,
    "basement": 6,
    "garden": 5,
    "parking": 4,
    "other": 5,
}
DEFAULT_COMPONENT_WEIGHT = 5

# Types heavy enough to count as critical on the dashboard
CRITICAL_COMPONENT_WEIGHT = 15
CRITICAL_COMPONENT_TYPES: frozenset[str] = frozenset(
    key for key, weight in COMPONENT_TYPE_WEIGHTS.items() if weight >= CRITICAL_COMPONENT_WEIGHT
)

OVERDUE_PENALTY_PER_DAY = 2
OVERDUE_PENALTY_CAP = 30

STALE_MAINTENANCE_DAYS = 365
STALE_MAINTENANCE_PENALTY = 10

# Checked top-down; anything below the last threshold is "low"
RISK_LEVEL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (80, "critical"),
    (60, "high"),
    (40, "medium"),
)


# =============================================================================
# Component risk bands (days overdue, negative = still ahead)
# =============================================================================

COMPONENT_RISK_BANDS: tuple[tuple[int, str], ...] = (
    (-90, "safe"),
    (0, "warning"),
    (180, "danger"),
    (365, "critical"),
)
COMPONENT_RISK_FALLBACK = "legal"

# Emoji, German label and colour for the dashboard badges
COMPONENT_RISK_DISPLAY: dict[str, tuple[str, str, str]] = {
    "safe": ("🟢", "Sicher", "green"),
    "warning": ("🟡", "Bald fällig", "yellow"),
    "danger": ("🟠", "Überfällig", "orange"),
    "critical": ("⚫", "KRITISCH", "black"),
    "legal": ("⚖️", "RECHTLICH", "purple"),
}

# Message for components without a due problem
RISK_MESSAGE_UP_TO_DATE = "Wartung aktuell"

# Bands that trigger the daily escalation email
ESCALATION_RISK_LEVELS: frozenset[str] = frozenset({"critical", "legal"})

# First day overdue that falls into an escalation band (end of "danger")
ESCALATION_MIN_DAYS_OVERDUE = dict((level, bound) for bound, level in COMPONENT_RISK_BANDS)["danger"]

# Consequence catalog used when the property's country has no entry
DEFAULT_CONSEQUENCE_COUNTRY = "AT"
