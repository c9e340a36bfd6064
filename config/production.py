from config.config import Config, time_rules_from_env

LOG_LEVEL = Config.LOG_LEVEL

EMPLOYEES_FILE = Config.EMPLOYEES_FILE
OUTPUT_DIR = Config.OUTPUT_DIR
PUNCH_COLUMNS = Config.PUNCH_COLUMNS

TIME_RULES = time_rules_from_env()
