# --- START OF FILE bot.py ---
import argparse
import logging
import logging.handlers
import sys

from shared.translator import init_translator

from config import config

init_translator(config.BOT_LANGUAGE)

from telegram import Update
from telegram.ext import Application, ApplicationBuilder, ContextTypes, TypeHandler
from telegram.request import HTTPXRequest

from database import engine as db_engine
from shared import bot_identity
from shared.dispatcher import Dispatcher

LOG_FILE = "bot.log"
LOGGER = logging.getLogger(__name__)


def setup_logging():
    if logging.getLogger().hasHandlers(): return
    log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler = logging.handlers.RotatingFileHandler(LOG_FILE, maxBytes=5*1024*1024, backupCount=5, encoding='utf-8')
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(logging.DEBUG)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    LOGGER.info("Logging configured successfully.")


async def debug_update_logger(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if update.effective_user:
        user_info = f"User(ID:{update.effective_user.id}, Name:'{update.effective_user.full_name}')"
    else:
        user_info = "User:N/A (Channel or System Update)"

    if update.message and (update.message.text or update.message.caption):
        LOGGER.info(f"[DEBUG_LOGGER] Message from {user_info} | Text: '{update.message.text or update.message.caption}'")
    elif update.callback_query:
        LOGGER.info(f"[DEBUG_LOGGER] Callback from {user_info} | Data: '{update.callback_query.data}'")
    else:
        LOGGER.info(f"[DEBUG_LOGGER] Received update {update.update_id} from {user_info}")


def build_dispatcher() -> Dispatcher:
    from modules.general import handler as general_handler
    from modules.guides import handler as guides_handler
    from modules.welcome import handler as welcome_handler
    from modules.menu_buttons import handler as menu_buttons_handler
    from modules.prices import handler as prices_handler

    dispatcher = Dispatcher()
    general_handler.register(dispatcher)
    guides_handler.register(dispatcher)
    welcome_handler.register(dispatcher)
    menu_buttons_handler.register(dispatcher)
    prices_handler.register(dispatcher)
    dispatcher.check_complete()
    LOGGER.info(f"Dispatcher ready with {len(dispatcher.commands)} commands.")
    return dispatcher


def _request(**kwargs) -> HTTPXRequest:
    """Every outbound API call carries X-Bot-Key when BOT_API_KEY is configured."""
    httpx_kwargs = {"headers": {"X-Bot-Key": config.BOT_API_KEY}} if config.BOT_API_KEY else None
    return HTTPXRequest(connect_timeout=30, read_timeout=30, httpx_kwargs=httpx_kwargs, **kwargs)


async def post_init(application: Application):
    await db_engine.init_db()
    username = await bot_identity.get_or_fetch_username(application.bot)
    LOGGER.info(f"Bot identity: @{username}" if username else "Bot identity not available yet.")


async def post_shutdown(application: Application):
    LOGGER.info("Shutdown signal received. Closing resources...")
    await db_engine.close_db()
    LOGGER.info("Database engine (SQLAlchemy) closed gracefully.")


def build_application() -> Application:
    application = (
        ApplicationBuilder()
        .token(config.TELEGRAM_BOT_TOKEN)
        .request(_request())
        .get_updates_request(_request())
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    dispatcher = build_dispatcher()
    application.add_handler(TypeHandler(Update, debug_update_logger), group=-1)
    application.add_handler(TypeHandler(Update, dispatcher.dispatch))
    LOGGER.info("Universal debug logger has been activated.")
    return application


def main() -> None:
    setup_logging()

    parser = argparse.ArgumentParser(description="Guidebook Telegram Bot")
    parser.add_argument("--port", type=int, help="Port to run the webhook on.")
    args = parser.parse_args()

    LOGGER.info("===================================")
    LOGGER.info("🚀 Starting bot...")

    application = build_application()

    if args.port:
        port = args.port
        LOGGER.info(f"Port {port} received from command-line argument.")
    else:
        port = config.BOT_PORT
        LOGGER.info(f"Port {port} loaded from environment or default.")

    if not all([config.BOT_DOMAIN, config.WEBHOOK_SECRET_TOKEN]):
        LOGGER.info("BOT_DOMAIN or WEBHOOK_SECRET_TOKEN not found. Starting in polling mode.")
        application.run_polling(allowed_updates=Update.ALL_TYPES)
        return

    import uvicorn
    from webhook import create_app

    webhook_url = f"https://{config.BOT_DOMAIN}{config.WEBHOOK_PATH}"
    LOGGER.info(f"Starting in webhook mode on port {port}. URL: {webhook_url}")
    app = create_app(application, public_url=webhook_url)
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)


if __name__ == '__main__':
    try:
        main()
    except Exception:
        logging.basicConfig()
        logging.getLogger(__name__).critical("A critical error occurred in the main execution block.", exc_info=True)

# --- END OF FILE bot.py ---
