"""
Configuration settings for FleetFaults Bot
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _bool(v: str | None, default: bool = False) -> bool:
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}


def _lang(v: str | None, default: str = "ru") -> str:
    tag = (v or "").strip().lower()
    return tag if tag in {"ru", "en"} else default


class Settings:
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

    # SAMSARA_API_TOKEN kept as an alias for older deployments
    SAMSARA_API_KEY: str = os.getenv("SAMSARA_API_KEY") or os.getenv("SAMSARA_API_TOKEN", "")
    SAMSARA_BASE_URL: str = os.getenv("SAMSARA_BASE_URL", "https://api.samsara.com")

    # Advisory providers (each one optional)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
    OPENROUTER_SITE_URL: str = os.getenv("OPENROUTER_SITE_URL", "")
    OPENROUTER_APP_NAME: str = os.getenv("OPENROUTER_APP_NAME", "FleetFaults Bot")

    DEFAULT_LANGUAGE: str = _lang(os.getenv("DEFAULT_LANGUAGE"), "ru")
    LANGUAGE_MENU: bool = _bool(os.getenv("LANGUAGE_MENU", "false"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE: bool = _bool(os.getenv("LOG_TO_FILE", "false"))

    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "/api/telegram-webhook")
    PORT: int = int(os.getenv("PORT", "8080"))

    @classmethod
    def validate(cls) -> bool:
        if not cls.TELEGRAM_BOT_TOKEN:
            raise ValueError("Missing required env vars: TELEGRAM_BOT_TOKEN")
        return True


settings = Settings()
