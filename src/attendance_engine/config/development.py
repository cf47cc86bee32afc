import os

from . import split_origins

AUTHORIZED_ORIGINS = split_origins(os.getenv("AUTHORIZED_ORIGINS", ""))

# Explicit opt-in only; never derived from APP_ENV.
ALLOW_ANY_ORIGIN = bool(int(os.getenv("ALLOW_ANY_ORIGIN", "0")))

MIN_SESSION_MINUTES = float(os.getenv("MIN_SESSION_MINUTES", "15"))
MAX_SESSION_HOURS = float(os.getenv("MAX_SESSION_HOURS", "16"))
STREAK_WINDOW_DAYS = int(os.getenv("STREAK_WINDOW_DAYS", "30"))
SKIP_WEEKENDS = bool(int(os.getenv("SKIP_WEEKENDS", "0")))

# IANA zone used for day boundaries of timezone-aware timestamps; empty keeps them as given.
TIMEZONE = os.getenv("TIMEZONE", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
