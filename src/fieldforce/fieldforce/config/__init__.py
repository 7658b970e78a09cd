import os


def get_settings_module() -> str:
    """Settings module selected by APP_ENV (development when unset)."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "fieldforce.config.production"

    if env in {"test", "testing"}:
        return "fieldforce.config.testing"

    return "fieldforce.config.development"
