# FILE: webhook.py

"""
Inbound webhook served with FastAPI.

Telegram POSTs every update to one path. The request must carry the shared
secret in the configured header; anything else that reaches the server gets
a static informational answer.
"""

import hmac
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from telegram import Update
from telegram.ext import Application

from config import config

LOGGER = logging.getLogger(__name__)

INFO_TEXT = "This is a Telegram bot webhook endpoint. Please send POST requests."


def _secret_matches(received: Optional[str], expected: Optional[str]) -> bool:
    if not received or not expected:
        return False
    return hmac.compare_digest(received.encode(), expected.encode())


def create_app(application: Application,
               webhook_path: Optional[str] = None,
               secret_token: Optional[str] = None,
               secret_header: Optional[str] = None,
               public_url: Optional[str] = None) -> FastAPI:
    webhook_path = webhook_path or config.WEBHOOK_PATH
    secret_token = secret_token if secret_token is not None else config.WEBHOOK_SECRET_TOKEN
    secret_header = secret_header or config.WEBHOOK_SECRET_HEADER

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await application.initialize()
        if application.post_init:
            await application.post_init(application)
        await application.start()
        if public_url:
            await application.bot.set_webhook(
                url=public_url,
                secret_token=secret_token,
                allowed_updates=Update.ALL_TYPES,
            )
            LOGGER.info(f"Webhook registered at {public_url}")
        try:
            yield
        finally:
            LOGGER.info("Shutdown signal received. Stopping the application...")
            await application.stop()
            if application.post_shutdown:
                await application.post_shutdown(application)
            await application.shutdown()

    app = FastAPI(title="Guidebook Bot", lifespan=lifespan)

    @app.post(webhook_path)
    async def telegram_webhook(request: Request):
        if not _secret_matches(request.headers.get(secret_header), secret_token):
            client = request.client.host if request.client else "unknown"
            LOGGER.warning(f"Unauthorized webhook request from {client}")
            return PlainTextResponse("Unauthorized", status_code=401)

        try:
            payload = await request.json()
            update = Update.de_json(payload, application.bot)
        except Exception as e:
            LOGGER.error(f"Could not decode webhook payload: {e}", exc_info=True)
            return PlainTextResponse("Bad Request", status_code=400)

        await application.process_update(update)
        return PlainTextResponse("OK")

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"])
    async def info(path: str):
        LOGGER.debug(f"Non-webhook request received for '/{path}'")
        return PlainTextResponse(INFO_TEXT)

    return app
