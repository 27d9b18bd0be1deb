"""
core/bot.py
Bot initialization and lifecycle helpers for FleetFaults Bot
"""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand

from config.settings import settings
from services.advisory_service import AdvisoryService, advisory_service
from services.language_store import LanguageStore, MemoryLanguageStore
from services.samsara_service import SamsaraService, samsara_service
from utils.logger import get_logger

logger = get_logger("core.bot")


def create_bot(token: str | None = None) -> Bot:
    """Create and configure bot instance."""
    return Bot(
        token=token or settings.TELEGRAM_BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN),
    )


def create_dispatcher(
    samsara: SamsaraService | None = None,
    advisory: AdvisoryService | None = None,
    language_store: LanguageStore | None = None,
    language_menu: bool | None = None,
) -> Dispatcher:
    """Dispatcher setup with services injected as workflow data."""
    dp = Dispatcher()

    dp["samsara"] = samsara or samsara_service
    dp["advisory"] = advisory or advisory_service
    dp["language_store"] = language_store or MemoryLanguageStore(settings.DEFAULT_LANGUAGE)
    dp["language_menu"] = settings.LANGUAGE_MENU if language_menu is None else language_menu

    try:
        from handlers import routers

        for r in routers:
            dp.include_router(r)
    except Exception as e:
        logger.error(f"Router import failed: {e}")
        raise

    return dp


async def setup_bot_commands(bot: Bot) -> None:
    """Setup bot menu commands."""
    commands = [
        BotCommand(command="start", description="🚛 Start / choose language"),
    ]
    await bot.set_my_commands(commands)


async def on_startup(bot: Bot, samsara: SamsaraService, advisory: AdvisoryService) -> None:
    """Logic executed when the bot starts."""
    logger.info("🚀 FleetFaults starting up...")

    await setup_bot_commands(bot)

    if await samsara.test_connection():
        logger.info("✅ Samsara API: Connected")
    else:
        logger.warning("⚠️ Samsara API: Connection Failed")

    enabled = advisory.enabled_providers
    logger.info(f"🤖 Advisory providers: {', '.join(enabled) if enabled else 'none'}")

    me = await bot.get_me()
    logger.info(f"✅ Bot @{me.username} is active.")


async def on_shutdown(bot: Bot, samsara: SamsaraService) -> None:
    """Graceful shutdown sequence."""
    logger.info("🛑 Shutdown sequence initiated...")
    await samsara.close()
    if bot.session:
        await bot.session.close()
    logger.info("✅ Goodbye!")
