"""
handlers/errors.py
Last-resort handler for exceptions escaping any other handler
"""

from aiogram import Bot, Router
from aiogram.types import ErrorEvent

from utils.i18n import t
from utils.logger import get_logger

logger = get_logger("handlers.errors")
router = Router()


def _chat_id(event: ErrorEvent) -> int | None:
    update = event.update
    message = update.message or update.edited_message
    if message:
        return message.chat.id
    if update.callback_query and update.callback_query.message:
        return update.callback_query.message.chat.id
    return None


@router.errors()
async def on_error(event: ErrorEvent, bot: Bot, language_store=None) -> bool:
    logger.exception(f"💥 Handler error: {event.exception}", exc_info=event.exception)

    chat_id = _chat_id(event)
    if chat_id is None:
        return True

    lang = await language_store.get(chat_id) if language_store else None
    try:
        await bot.send_message(chat_id, t("generic_error", lang))
    except Exception as e:
        logger.error(f"Error sending failure message: {e}")
    return True
