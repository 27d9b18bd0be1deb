from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder


def get_language_keyboard() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.add(InlineKeyboardButton(text="🇷🇺 Русский", callback_data="lang:ru"))
    builder.add(InlineKeyboardButton(text="🇬🇧 English", callback_data="lang:en"))
    builder.adjust(2)
    return builder.as_markup()
