import os

TIME_RULE_PREFIX = "TIME_RULE_"


def time_rules_from_env(environ=None) -> dict:
    """Collect TIME_RULE_<FIELD> variables as partial time-rule overrides.

    e.g. TIME_RULE_GRACE_MINUTES=10 -> {"grace_minutes": "10"}.
    Values stay strings; the rule builder coerces and validates them.
    """
    environ = os.environ if environ is None else environ
    return {
        key[len(TIME_RULE_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(TIME_RULE_PREFIX) and value != ""
    }


class Config:
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    EMPLOYEES_FILE = os.environ.get("EMPLOYEES_FILE", "data/employees.csv")
    OUTPUT_DIR = os.environ.get("OUTPUT_DIR", "reports")

    PUNCH_COLUMNS = {
        "clock_ref": os.environ.get("PUNCH_COL_REF", "Person"),
        "device": os.environ.get("PUNCH_COL_DEVICE", "Device"),
        "timestamp": os.environ.get("PUNCH_COL_TIME", "Time"),
    }
