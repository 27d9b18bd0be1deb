"""
Per-chat language preference
"""

from typing import Protocol

from utils.i18n import DEFAULT_LANGUAGE, normalize_language


class LanguageStore(Protocol):
    async def get(self, chat_id: int) -> str: ...

    async def set(self, chat_id: int, lang: str) -> None: ...

    async def reset(self, chat_id: int) -> None: ...


class MemoryLanguageStore:
    """
    Process-local store. Lost on restart and not shared between instances;
    swap in an external key-value store for multi-instance deployments.
    """

    def __init__(self, default: str = DEFAULT_LANGUAGE):
        self.default = normalize_language(default)
        self._langs: dict[int, str] = {}

    async def get(self, chat_id: int) -> str:
        return self._langs.get(chat_id, self.default)

    async def set(self, chat_id: int, lang: str) -> None:
        self._langs[chat_id] = normalize_language(lang, self.default)

    async def reset(self, chat_id: int) -> None:
        self._langs.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._langs)
