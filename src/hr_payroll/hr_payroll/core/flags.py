"""Flag and warning texts shown to the payroll reviewer."""

# Paid-time scenarios (Mon-Thu)
MISSING_LUNCH_OUT = "Missing lunch out scan - lunch deducted"
ONLY_MORNING = "Only morning scan - manual adjustment required"
ONLY_AFTERNOON = "Only afternoon scan - manual adjustment required"
NO_LUNCH = "No lunch recorded - investigation required"
MISSING_LUNCH_RETURN = "Missing lunch return - manual adjustment required"
NO_MORNING = "No morning scan - manual adjustment required"
NO_AFTERNOON_OUT = "No afternoon out - manual adjustment required"
ONLY_LUNCH = "Only lunch scans - manual adjustment required"
ONLY_LUNCH_OUT = "Only lunch out scan - manual adjustment required"
ONLY_LUNCH_RETURN = "Only lunch return scan - manual adjustment required"
IRREGULAR = "Irregular punch pattern - manual adjustment required"

# Paid-time scenarios (Friday)
MISSING_FRIDAY_OUT = "Missing Friday out - manual adjustment required"
MISSING_FRIDAY_IN = "Missing Friday in - manual adjustment required"

# Grace / rounding
LATE_ARRIVAL = "Late arrival - review required"
EARLY_ARRIVAL = "Early arrival - manual review"
LATE_LUNCH_RETURN = "Late lunch return - review required"
OVERTIME = "Overtime - manual review"

# Classification / normalisation
POSITIONAL_ASSIGNMENT = "Slot assigned by position - review required"
IMPOSSIBLE_ORDER = "Impossible punch order - manual adjustment required"
UNREADABLE_PUNCH = "Unreadable punch dropped - review required"
UNCLASSIFIED_PUNCH = "Unclassified punch dropped - review required"
WEEKEND_PUNCHES = "Weekend punches - manual review"
PROCESSING_ERROR = "Processing error - manual adjustment required"

# Bathroom
BATHROOM_ENTRY_WITHOUT_EXIT = "Bathroom entry without matching exit"
BATHROOM_EXIT_WITHOUT_ENTRY = "Bathroom exit without matching entry"
EARLY_BATHROOM_MORNING = "Early bathroom after morning clock in"
EARLY_BATHROOM_LUNCH = "Early bathroom after lunch return"


def long_bathroom_break(minutes: int) -> str:
    return f"Long bathroom break: {minutes} minutes"


def daily_bathroom_exceeded(minutes: int) -> str:
    return f"Daily bathroom threshold exceeded: {minutes} minutes"


def merge(*groups) -> tuple[str, ...]:
    """Union of flag groups, keeping first-seen order."""
    out: list[str] = []
    for group in groups:
        for flag in group:
            if flag not in out:
                out.append(flag)
    return tuple(out)
