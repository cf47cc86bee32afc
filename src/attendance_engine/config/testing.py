AUTHORIZED_ORIGINS = ("10.0.0.1",)

ALLOW_ANY_ORIGIN = False

MIN_SESSION_MINUTES = 15
MAX_SESSION_HOURS = 16
STREAK_WINDOW_DAYS = 30
SKIP_WEEKENDS = False

TIMEZONE = ""

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
