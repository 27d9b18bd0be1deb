from .advisory_service import AdvisoryProvider, AdvisoryService, advisory_service
from .language_store import LanguageStore, MemoryLanguageStore
from .samsara_service import SamsaraService, samsara_service

__all__ = [
    "samsara_service",
    "SamsaraService",
    "advisory_service",
    "AdvisoryService",
    "AdvisoryProvider",
    "LanguageStore",
    "MemoryLanguageStore",
]
