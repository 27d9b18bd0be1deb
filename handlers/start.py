"""
handlers/start.py
FleetFaults — /start and language selection
"""

from aiogram import F, Router
from aiogram.filters import CommandStart
from aiogram.types import CallbackQuery, Message

from keyboards import get_language_keyboard
from services.language_store import LanguageStore
from utils.i18n import t
from utils.logger import get_logger
from utils.parsers import parse_language_callback

logger = get_logger("handlers.start")
router = Router()


# ============================================================
# /START
# ============================================================
@router.message(CommandStart())
async def cmd_start(message: Message, language_store: LanguageStore, language_menu: bool = False) -> None:
    chat_id = message.chat.id
    logger.info(f"/start in chat {chat_id}")

    # Always reset the stored language on /start
    await language_store.reset(chat_id)

    if language_menu:
        await message.answer(t("choose_language"), reply_markup=get_language_keyboard())
        return

    await message.answer(t("greeting", await language_store.get(chat_id)))


# ============================================================
# LANGUAGE BUTTONS
# ============================================================
@router.callback_query(F.data.startswith("lang:"))
async def choose_language(callback: CallbackQuery, language_store: LanguageStore) -> None:
    lang = parse_language_callback(callback.data)

    # Dismiss the button spinner first, whatever happens next
    await callback.answer()

    if lang not in {"ru", "en"} or callback.message is None:
        logger.warning(f"Ignoring language callback {callback.data!r}")
        return

    chat_id = callback.message.chat.id
    await language_store.set(chat_id, lang)
    logger.info(f"🌐 chat {chat_id} language -> {lang}")

    await callback.message.answer(f"{t('language_set', lang)}\n\n{t('greeting', lang)}")
