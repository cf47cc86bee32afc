import os


def get_settings_module() -> str:
    # Environment is chosen by APP_ENV, defaulting to 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendance_engine.config.production"

    if env in {"test", "testing"}:
        return "attendance_engine.config.testing"

    return "attendance_engine.config.development"


def split_origins(value: str) -> tuple:
    """AUTHORIZED_ORIGINS is a comma separated list, blanks ignored."""
    return tuple(part.strip() for part in (value or "").split(",") if part.strip())
