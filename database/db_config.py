# FILE: database/db_config.py

import os
import logging

from config import config

LOGGER = logging.getLogger(__name__)

PROJECT_ROOT = os.path.realpath(os.path.join(os.path.dirname(__file__), '..'))
DEFAULT_SQLITE_PATH = os.path.join(PROJECT_ROOT, 'bot_data.db')


def get_database_url() -> str:
    """
    Returns the ASYNCHRONOUS database URL for the application.

    Resolution order: DATABASE_URL, then the DB_* variables (MySQL via
    aiomysql), then a local SQLite file (aiosqlite).
    """
    if config.DATABASE_URL:
        return config.DATABASE_URL

    db_vars = {
        "DB_USER": os.getenv("DB_USER"),
        "DB_PASS": os.getenv("DB_PASSWORD"),
        "DB_HOST": os.getenv("DB_HOST"),
        "DB_NAME": os.getenv("DB_NAME")
    }

    missing_vars = [key for key, value in db_vars.items() if value is None]
    if not missing_vars:
        return f"mysql+aiomysql://{db_vars['DB_USER']}:{db_vars['DB_PASS']}@{db_vars['DB_HOST']}/{db_vars['DB_NAME']}"

    if len(missing_vars) < len(db_vars):
        LOGGER.warning(f"Incomplete MySQL settings (missing: {', '.join(missing_vars)}). Falling back to SQLite.")
    else:
        LOGGER.info("No database configured. Using local SQLite file.")
    return f"sqlite+aiosqlite:///{DEFAULT_SQLITE_PATH}"
