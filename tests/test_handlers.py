from unittest.mock import AsyncMock, MagicMock

from core.exceptions import ConfigurationError, UpstreamError
from handlers.lookup import run_lookup
from handlers.start import choose_language, cmd_start
from models.diagnostics import FaultRecord, FaultsInfo
from services.advisory_service import AdvisoryService
from tests.conftest import FakeProvider, FakeSamsara, make_message, sent_texts

VEHICLE = {"id": "281474977075002", "name": "Spare Unit", "licensePlate": "1234"}


# ============================================================
# /START + LANGUAGE
# ============================================================
async def test_start_sends_greeting_without_menu(language_store):
    message = make_message("/start")
    await language_store.set(42, "en")

    await cmd_start(message, language_store=language_store, language_menu=False)

    # /start resets the chat back to the default language
    assert sent_texts(message) == [
        "🚛 Отправь номер трака (как в Samsara), а я покажу его активные ошибки."
    ]
    assert await language_store.get(42) == "ru"


async def test_start_sends_language_menu(language_store):
    message = make_message("/start")

    await cmd_start(message, language_store=language_store, language_menu=True)

    markup = message.answer.await_args.kwargs["reply_markup"]
    buttons = [b for row in markup.inline_keyboard for b in row]
    assert [b.callback_data for b in buttons] == ["lang:ru", "lang:en"]


async def test_language_callback_stores_choice(language_store):
    callback = MagicMock()
    callback.data = "lang:en"
    callback.answer = AsyncMock()
    callback.message.chat.id = 42
    callback.message.answer = AsyncMock()

    await choose_language(callback, language_store=language_store)

    callback.answer.assert_awaited_once()
    assert await language_store.get(42) == "en"
    assert "Language: English" in callback.message.answer.await_args.args[0]


async def test_unknown_language_callback_is_only_acknowledged(language_store):
    callback = MagicMock()
    callback.data = "lang:de"
    callback.answer = AsyncMock()
    callback.message.chat.id = 42
    callback.message.answer = AsyncMock()

    await choose_language(callback, language_store=language_store)

    callback.answer.assert_awaited_once()
    callback.message.answer.assert_not_awaited()
    assert len(language_store) == 0


# ============================================================
# LOOKUP
# ============================================================
async def test_lookup_happy_path(language_store):
    info = FaultsInfo(faults=[FaultRecord("passenger", code="P0420", short="Catalyst")])
    samsara = FakeSamsara(vehicle=VEHICLE, info=info)
    provider = FakeProvider("llm", answer="Check the catalytic converter.")
    message = make_message("truck 1234 please")

    await run_lookup(message, samsara, AdvisoryService([provider]), language_store)

    assert samsara.queries == [["truck 1234 please", "1234"]]
    assert samsara.fault_requests == ["281474977075002"]

    searching, reply = sent_texts(message)
    assert "`1234`" in searching
    assert "*Трак:* 1234" in reply
    assert "1. Код: `P0420` — Catalyst" in reply
    assert "Check the catalytic converter." in reply


async def test_lookup_uses_chat_language(language_store):
    await language_store.set(42, "en")
    samsara = FakeSamsara(vehicle=VEHICLE, info=FaultsInfo())
    message = make_message("1234")

    await run_lookup(message, samsara, AdvisoryService([]), language_store)

    assert "No active faults found." in sent_texts(message)[-1]


async def test_lookup_not_found(language_store, no_advisory):
    samsara = FakeSamsara(vehicle=None)
    message = make_message("9999")

    await run_lookup(message, samsara, no_advisory, language_store)

    assert sent_texts(message)[-1] == "❌ Трак `9999` не найден в Samsara."
    assert samsara.fault_requests == []


async def test_backtick_in_query_does_not_break_code_span(language_store, no_advisory):
    samsara = FakeSamsara(vehicle=None)
    message = make_message("51`20")

    await run_lookup(message, samsara, no_advisory, language_store)

    searching, not_found = sent_texts(message)
    assert searching == "🔍 Ищу трак `51'20` в Samsara..."
    assert not_found == "❌ Трак `51'20` не найден в Samsara."


async def test_long_query_is_cut_in_messages(language_store, no_advisory):
    samsara = FakeSamsara(vehicle=None)
    message = make_message("x" * 500)

    await run_lookup(message, samsara, no_advisory, language_store)

    assert all(len(text) < 200 for text in sent_texts(message))
    assert samsara.queries == [["x" * 500]]


async def test_lookup_empty_text(language_store, no_advisory):
    samsara = FakeSamsara(vehicle=VEHICLE)
    message = make_message("   ")

    await run_lookup(message, samsara, no_advisory, language_store)

    assert sent_texts(message) == ["Отправь номер трака одной строкой."]
    assert samsara.queries == []


async def test_lookup_upstream_error_reports_once(language_store, no_advisory):
    samsara = FakeSamsara(error=UpstreamError("Samsara", 502, "bad gateway"))
    message = make_message("1234")

    await run_lookup(message, samsara, no_advisory, language_store)

    texts = sent_texts(message)
    assert len(texts) == 2
    assert texts[-1].startswith("⚠️ Не удалось выполнить запрос к Samsara")


async def test_lookup_configuration_error(language_store, no_advisory):
    samsara = FakeSamsara(error=ConfigurationError("SAMSARA_API_KEY is not set"))
    message = make_message("1234")

    await run_lookup(message, samsara, no_advisory, language_store)

    assert "Samsara" in sent_texts(message)[-1]


async def test_no_faults_means_no_advisory_request(language_store):
    provider = FakeProvider("llm", answer="should not appear")
    samsara = FakeSamsara(vehicle=VEHICLE, info=FaultsInfo())
    message = make_message("1234")

    await run_lookup(message, samsara, AdvisoryService([provider]), language_store)

    assert provider.prompts == []
    assert "should not appear" not in sent_texts(message)[-1]


async def test_advisory_failure_does_not_abort_reply(language_store):
    info = FaultsInfo(faults=[FaultRecord("passenger", code="P0300")])
    samsara = FakeSamsara(vehicle=VEHICLE, info=info)
    provider = FakeProvider("llm", error=RuntimeError("timeout"))
    message = make_message("1234")

    await run_lookup(message, samsara, AdvisoryService([provider]), language_store)

    reply = sent_texts(message)[-1]
    assert "P0300" in reply
    assert "Рекомендации" not in reply
