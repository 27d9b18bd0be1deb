"""
handlers/lookup.py
Truck number -> active fault codes
"""

from aiogram import F, Router
from aiogram.types import Message

from core.exceptions import ConfigurationError, UpstreamError
from services.advisory_service import AdvisoryService
from services.language_store import LanguageStore
from services.samsara_service import SamsaraService
from utils.fault_formatter import format_faults_message
from utils.helpers import code_span_text
from utils.i18n import t
from utils.logger import get_logger
from utils.parsers import truck_query_candidates

logger = get_logger("handlers.lookup")
router = Router()


async def run_lookup(
    message: Message,
    samsara: SamsaraService,
    advisory: AdvisoryService,
    language_store: LanguageStore,
) -> None:
    chat_id = message.chat.id
    lang = await language_store.get(chat_id)

    candidates = truck_query_candidates(message.text)
    if not candidates:
        await message.answer(t("empty_query", lang))
        return

    shown = code_span_text(candidates[0])
    logger.info(f"🔍 chat {chat_id} looking up {candidates}")
    await message.answer(t("searching", lang, query=shown))

    try:
        async with samsara as svc:
            hit = await svc.resolve_vehicle(candidates)
            if not hit:
                await message.answer(t("not_found", lang, query=shown))
                return
            query, vehicle = hit
            info = await svc.get_vehicle_faults(vehicle["id"])
    except (ConfigurationError, UpstreamError) as e:
        logger.error(f"❌ Lookup for {candidates} failed: {e}")
        await message.answer(t("lookup_failed", lang))
        return

    advice = await advisory.summarize(info.faults, vehicle, query, lang)

    await message.answer(format_faults_message(query, vehicle, info, lang=lang, advisory=advice))


# ============================================================
# ANY TEXT = TRUCK QUERY
# ============================================================
@router.message(F.text)
async def handle_truck_message(
    message: Message,
    samsara: SamsaraService,
    advisory: AdvisoryService,
    language_store: LanguageStore,
) -> None:
    await run_lookup(message, samsara, advisory, language_store)


@router.edited_message(F.text)
async def handle_edited_truck_message(
    message: Message,
    samsara: SamsaraService,
    advisory: AdvisoryService,
    language_store: LanguageStore,
) -> None:
    await run_lookup(message, samsara, advisory, language_store)
