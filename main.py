"""
main.py
FleetFaults Bot — App Entrypoint

WEBHOOK_URL set   → aiohttp webhook server on PORT
WEBHOOK_URL empty → long polling (local development)
"""

import asyncio
import contextlib

from aiohttp import web

from api.webhook import create_app
from config.settings import settings
from core.bot import create_bot, create_dispatcher, on_shutdown, on_startup
from utils.logger import get_logger, setup_logging

logger = get_logger("main")


async def run_webhook(bot, dp):
    webhook_url = settings.WEBHOOK_URL.rstrip("/") + settings.WEBHOOK_PATH
    await bot.set_webhook(webhook_url, drop_pending_updates=True)
    logger.info(f"🔗 Webhook set to {webhook_url}")

    runner = web.AppRunner(create_app(bot, dp))
    await runner.setup()
    site = web.TCPSite(runner, "0.0.0.0", settings.PORT)
    await site.start()
    logger.info(f"🚀 FleetFaults live on :{settings.PORT} ({settings.WEBHOOK_PATH}, /health)")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()


async def run_polling(bot, dp):
    # Clear old messages so bot doesn't spam on restart
    await bot.delete_webhook(drop_pending_updates=True)
    logger.info("🚀 FleetFaults is LIVE (polling)")
    await dp.start_polling(bot, allowed_updates=["message", "edited_message", "callback_query"])


async def _start():
    """Main startup orchestration."""
    setup_logging()
    settings.validate()

    bot = create_bot()
    dp = create_dispatcher()

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    if settings.WEBHOOK_URL:
        # start_polling emits startup/shutdown itself; the webhook path does it by hand
        await dp.emit_startup(bot=bot, **dp.workflow_data)
        try:
            await run_webhook(bot, dp)
        finally:
            await dp.emit_shutdown(bot=bot, **dp.workflow_data)
    else:
        try:
            await run_polling(bot, dp)
        except Exception as e:
            logger.error(f"💀 Polling crash: {e}")
        finally:
            logger.info("🛑 Polling stopped.")


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt, SystemExit):
        asyncio.run(_start())
        logger.info("🧹 Gracefully stopped FleetFaults bot.")
