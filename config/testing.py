from config.config import Config

LOG_LEVEL = "WARNING"
TESTING = True

EMPLOYEES_FILE = "tests/data/employees.csv"
OUTPUT_DIR = "/tmp/hr_payroll_reports"
PUNCH_COLUMNS = Config.PUNCH_COLUMNS

# Tests always run against the default rules
TIME_RULES = {}
