# keyboards/__init__.py

from .language import get_language_keyboard

__all__ = ["get_language_keyboard"]
