"""
utils/i18n.py
Bot phrases in the two supported languages
"""

LANGUAGES = ("ru", "en")
DEFAULT_LANGUAGE = "ru"

TEXTS: dict[str, dict[str, str]] = {
    "ru": {
        "choose_language": "🌐 Выбери язык / Choose language:",
        "greeting": "🚛 Отправь номер трака (как в Samsara), а я покажу его активные ошибки.",
        "language_set": "✅ Язык: русский.",
        "empty_query": "Отправь номер трака одной строкой.",
        "searching": "🔍 Ищу трак `{query}` в Samsara...",
        "not_found": "❌ Трак `{query}` не найден в Samsara.",
        "lookup_failed": "⚠️ Не удалось выполнить запрос к Samsara. Попробуй позже.",
        "generic_error": "⚠️ Произошла ошибка при запросе к Samsara. Сообщи администратору.",
        "truck": "Трак",
        "vin": "VIN",
        "plate": "Номер",
        "check_engine": "Check Engine",
        "no_faults": "✅ Активных ошибок не найдено.",
        "active_faults": "Активные ошибки",
        "code": "Код",
        "occurrences": "повторений",
        "unknown_fault": "Неизвестная ошибка",
        "more_faults": "… и ещё {count}",
        "advisory": "🤖 Рекомендации",
    },
    "en": {
        "choose_language": "🌐 Выбери язык / Choose language:",
        "greeting": "🚛 Send a truck number (as in Samsara) and I'll show its active fault codes.",
        "language_set": "✅ Language: English.",
        "empty_query": "Send the truck number as a single line.",
        "searching": "🔍 Looking up truck `{query}` in Samsara...",
        "not_found": "❌ Truck `{query}` was not found in Samsara.",
        "lookup_failed": "⚠️ Could not complete the Samsara lookup. Try again later.",
        "generic_error": "⚠️ Something went wrong while querying Samsara. Contact the administrator.",
        "truck": "Truck",
        "vin": "VIN",
        "plate": "Plate",
        "check_engine": "Check Engine",
        "no_faults": "✅ No active faults found.",
        "active_faults": "Active faults",
        "code": "Code",
        "occurrences": "occurrences",
        "unknown_fault": "Unknown fault",
        "more_faults": "… and {count} more",
        "advisory": "🤖 Advice",
    },
}


def normalize_language(lang: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    return lang if lang in LANGUAGES else default


def t(key: str, lang: str | None = None, **kwargs) -> str:
    """Look up a phrase; falls back to the default language."""
    table = TEXTS[normalize_language(lang)]
    text = table.get(key) or TEXTS[DEFAULT_LANGUAGE][key]
    return text.format(**kwargs) if kwargs else text
