"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_STANDARD_START_TIME = "07:30"
DEFAULT_STANDARD_END_TIME = "16:30"
DEFAULT_FRIDAY_END_TIME = "13:00"
DEFAULT_LUNCH_START_TIME = "12:00"
DEFAULT_LUNCH_END_TIME = "12:30"
DEFAULT_GRACE_MINUTES = 5
DEFAULT_LUNCH_OUT_GRACE_MINUTES = 5
DEFAULT_STANDARD_LUNCH_MINUTES = 30

DEFAULT_CLOCK1_MAX_TIME = "11:50"
DEFAULT_CLOCK2_WINDOW = ("12:00", "12:10")
DEFAULT_CLOCK3_WINDOW = ("12:10", "13:00")
DEFAULT_CLOCK4_MIN_TIME = "13:05"

DEFAULT_DAILY_BATHROOM_THRESHOLD_MINUTES = 30
DEFAULT_LONG_BATHROOM_THRESHOLD_MINUTES = 15
DEFAULT_EARLY_BATHROOM_THRESHOLD_MINUTES = 10
DEFAULT_BATHROOM_DUPLICATE_SECONDS = 60
DEFAULT_MAIN_CLOCK_DUPLICATE_MINUTES = 2

DEFAULT_FLAG_OVERTIME_AFTER = "16:30"
DEFAULT_FLAG_LATE_AFTER = "07:35"

# Week ends on Saturday (date.weekday() == 5).
WEEK_ENDING_WEEKDAY = 5

# Friday: an unlabelled punch this close to Morning-In is a re-scan, not an early leave.
FRIDAY_RESCAN_MINUTES = 30
