import importlib
import os
from types import ModuleType
from typing import Optional

DEFAULT_ENV = "development"

# APP_ENV value -> settings module
ENV_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "testing": "config.testing",
    "test": "config.testing",
    "production": "config.production",
    "prod": "config.production",
}


def get_settings_module(env: Optional[str] = None) -> str:
    """Settings module for `env` (default: APP_ENV). Unknown names fall back to development."""
    env = (env or os.getenv("APP_ENV") or DEFAULT_ENV).strip().lower()
    return ENV_MODULES.get(env, ENV_MODULES[DEFAULT_ENV])


def load_settings(env: Optional[str] = None) -> ModuleType:
    return importlib.import_module(get_settings_module(env))
