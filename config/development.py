from config.config import Config, time_rules_from_env

LOG_LEVEL = "DEBUG"

EMPLOYEES_FILE = Config.EMPLOYEES_FILE
OUTPUT_DIR = Config.OUTPUT_DIR
PUNCH_COLUMNS = Config.PUNCH_COLUMNS

# Partial overrides merged onto the default time rules
TIME_RULES = time_rules_from_env()
