import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load the .env file from the project root so startup does not depend on the
# working directory.
try:
    project_root = Path(__file__).parent.resolve()
    dotenv_path = project_root / '.env'
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)
    else:
        load_dotenv()
except Exception:
    load_dotenv()


LOGGER = logging.getLogger(__name__)


def _split_csv(raw: str) -> list:
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    # --- Telegram Bot Configuration (Critical for startup) ---
    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
    if not TELEGRAM_BOT_TOKEN:
        LOGGER.critical("CRITICAL: TELEGRAM_BOT_TOKEN is not set in the .env file.")
        raise ValueError("CRITICAL: TELEGRAM_BOT_TOKEN is not set in the .env file.")

    # --- Admin User IDs ---
    try:
        raw_ids = os.getenv("AUTHORIZED_USER_IDS")
        AUTHORIZED_USER_IDS = [int(uid) for uid in _split_csv(raw_ids)] if raw_ids else []
        if not AUTHORIZED_USER_IDS:
            LOGGER.warning("AUTHORIZED_USER_IDS is not set or is empty. No admin users will be recognized.")
    except (ValueError, AttributeError):
        AUTHORIZED_USER_IDS = []
        LOGGER.error("AUTHORIZED_USER_IDS contains invalid values. No admin users will be recognized.")

    # --- Support Configuration (Optional) ---
    SUPPORT_USERNAME = os.getenv("SUPPORT_USERNAME")
    SUPPORT_GROUP_LINK = os.getenv("SUPPORT_GROUP_LINK")
    if not SUPPORT_USERNAME and not SUPPORT_GROUP_LINK:
        LOGGER.info("SUPPORT_USERNAME / SUPPORT_GROUP_LINK are not set. Support screen will be minimal.")

    BOT_LANGUAGE = os.getenv("BOT_LANGUAGE", "en")

    # --- Webhook ---
    BOT_DOMAIN = os.getenv("BOT_DOMAIN")
    WEBHOOK_SECRET_TOKEN = os.getenv("WEBHOOK_SECRET_TOKEN")
    WEBHOOK_PATH = os.getenv("WEBHOOK_PATH", "/webhook")
    WEBHOOK_SECRET_HEADER = os.getenv("WEBHOOK_SECRET_HEADER", "X-Telegram-Bot-Api-Secret-Token")
    try:
        BOT_PORT = int(os.getenv("BOT_PORT", 8081))
    except ValueError:
        BOT_PORT = 8081
        LOGGER.error("BOT_PORT is not a number. Falling back to 8081.")

    # Sent as X-Bot-Key on every outbound API request when set.
    BOT_API_KEY = os.getenv("BOT_API_KEY")

    # --- Storage ---
    KV_NAMESPACES = _split_csv(os.getenv("KV_NAMESPACES", "GUIDE_DATA,SALES_DATA"))
    DATABASE_URL = os.getenv("DATABASE_URL")


config = Config()
