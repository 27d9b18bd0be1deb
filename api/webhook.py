"""
api/webhook.py
aiohttp webhook endpoint: Telegram → Dispatcher

Telegram always gets 200 {"ok": true}; failures reach the user as chat messages.
"""

import json
from datetime import datetime, timezone

from aiogram import Bot, Dispatcher
from aiogram.types import Update
from aiohttp import web
from pydantic import ValidationError

from config.settings import settings
from utils.logger import get_logger

logger = get_logger("api.webhook")

BOT_KEY = web.AppKey("bot", Bot)
DISPATCHER_KEY = web.AppKey("dispatcher", Dispatcher)

ACK = {"ok": True}
LIVENESS = {"ok": True, "message": "Bot is running."}


async def handle_webhook(request: web.Request) -> web.Response:
    if request.method != "POST":
        return web.json_response(LIVENESS)

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"⚠️ Malformed webhook body: {e}")
        return web.json_response(ACK)

    bot = request.app[BOT_KEY]
    dp = request.app[DISPATCHER_KEY]

    try:
        update = Update.model_validate(body, context={"bot": bot})
    except ValidationError as e:
        logger.warning(f"⚠️ Not a Telegram update: {e.error_count()} validation error(s)")
        return web.json_response(ACK)

    try:
        await dp.feed_update(bot, update)
    except Exception as e:
        logger.exception(f"💥 Webhook error: {e}")

    return web.json_response(ACK)


async def handle_health(request: web.Request) -> web.Response:
    dp = request.app[DISPATCHER_KEY]
    advisory = dp.workflow_data.get("advisory")
    info = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "advisory_providers": advisory.enabled_providers if advisory else [],
        "language_menu": bool(dp.workflow_data.get("language_menu")),
    }
    return web.json_response(info)


def create_app(bot: Bot, dp: Dispatcher, path: str | None = None) -> web.Application:
    app = web.Application()
    app[BOT_KEY] = bot
    app[DISPATCHER_KEY] = dp

    app.router.add_get("/health", handle_health)
    app.router.add_route("*", path or settings.WEBHOOK_PATH, handle_webhook)
    return app
