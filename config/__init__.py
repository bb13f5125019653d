import logging
import os

logger = logging.getLogger(__name__)

_ENV_MODULES = {
    "dev": "config.development",
    "develop": "config.development",
    "development": "config.development",
    "local": "config.development",
    "prod": "config.production",
    "production": "config.production",
    "live": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "ci": "config.testing",
}


def get_settings_module() -> str:
    """Settings module for WORKTIME_ENV, else APP_ENV, else development."""
    env = (os.getenv("WORKTIME_ENV") or os.getenv("APP_ENV") or "development").strip().lower()

    module = _ENV_MODULES.get(env)
    if module is None:
        logger.warning("unknown environment %r, using development settings", env)
        return "config.development"
    return module
