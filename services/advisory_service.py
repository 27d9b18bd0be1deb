"""
Advisory Service for FleetFaults Bot
Plain-language maintenance advice from up to three text-generation providers
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Protocol, Sequence

import aiohttp

from config.settings import settings
from core.exceptions import AdvisoryUnavailable
from models.diagnostics import FaultRecord
from utils.helpers import is_proprietary, truncate_text
from utils.logger import get_logger

logger = get_logger("services.advisory_service")

MAX_TOKENS = 700
TEMPERATURE = 0.3

SYSTEM_PROMPTS = {
    "ru": "Ты опытный механик грузовиков. Отвечай кратко и по делу, на русском языке.",
    "en": "You are an experienced heavy-truck mechanic. Answer briefly and practically, in English.",
}


# =====================================================
# PROMPT
# =====================================================
def _fault_prompt_line(num: int, fault: FaultRecord) -> str:
    parts = [f"source={fault.source}"]
    if fault.code is not None:
        parts.append(f"code={fault.code}")
    if fault.short:
        parts.append(f"description={fault.short}")
    if fault.text:
        parts.append(f"detail={fault.text}")
    if fault.occurrence_count is not None:
        parts.append(f"occurrences={fault.occurrence_count}")
    if is_proprietary(fault):
        parts.append("PROPRIETARY")
    return f"{num}. " + "; ".join(parts)


def build_advisory_prompt(
    faults: Sequence[FaultRecord],
    vehicle: dict[str, Any],
    truck_label: str,
    lang: str = "ru",
) -> str:
    language = "Russian" if lang == "ru" else "English"
    ids = [f"truck={truck_label}"]
    if vehicle.get("vin"):
        ids.append(f"VIN={vehicle['vin']}")
    if vehicle.get("licensePlate"):
        ids.append(f"plate={vehicle['licensePlate']}")

    lines = [
        f"Vehicle: {', '.join(ids)}.",
        "Active diagnostic trouble codes:",
        *(_fault_prompt_line(i, f) for i, f in enumerate(faults, 1)),
        "",
        "For each code explain in plain words what it most likely means, how urgent it is "
        "(can the truck keep driving or not) and what the mechanic should check first.",
    ]
    if any(is_proprietary(f) for f in faults):
        lines.append(
            "Codes marked PROPRIETARY are manufacturer-specific: say explicitly that their exact "
            "meaning cannot be determined without the manufacturer's documentation, "
            "and still give generic guidance for them."
        )
    lines.append(f"Answer in {language}, no more than 15 lines, no Markdown.")
    return "\n".join(lines)


# =====================================================
# PROVIDERS
# =====================================================
class AdvisoryProvider(Protocol):
    name: str

    @property
    def enabled(self) -> bool: ...

    async def generate(self, prompt: str, lang: str = "ru") -> str | None: ...


class _HTTPProvider(ABC):
    name = "provider"
    base_url = ""

    def __init__(self, api_key: str = "", base_url: str | None = None):
        self.api_key = api_key
        if base_url:
            self.base_url = base_url.rstrip("/")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def _post(self, url: str, payload: dict, headers: dict | None = None, params: dict | None = None):
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=30)) as session:
            async with session.post(url, json=payload, headers=headers, params=params) as r:
                if r.status >= 300:
                    body = await r.text()
                    raise AdvisoryUnavailable(
                        f"{self.name} HTTP {r.status}: {truncate_text(body, 200)}"
                    )
                return await r.json(content_type=None)

    @abstractmethod
    async def generate(self, prompt: str, lang: str = "ru") -> str | None:
        """Answer for one prompt; raises AdvisoryUnavailable on transport errors."""


class GeminiProvider(_HTTPProvider):
    """Single-prompt generateContent call."""

    name = "gemini"
    base_url = "https://generativelanguage.googleapis.com"

    def __init__(self, api_key: str = "", model: str = "gemini-2.5-flash", base_url: str | None = None):
        super().__init__(api_key, base_url)
        self.model = model

    async def generate(self, prompt: str, lang: str = "ru") -> str | None:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"maxOutputTokens": MAX_TOKENS, "temperature": TEMPERATURE},
        }
        data = await self._post(
            f"{self.base_url}/v1beta/models/{self.model}:generateContent",
            payload,
            params={"key": self.api_key},
        )
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise AdvisoryUnavailable(f"gemini: unexpected response shape ({e})") from e
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


class ChatCompletionProvider(_HTTPProvider):
    """OpenAI-style /chat/completions call."""

    completions_path = "/v1/chat/completions"

    def __init__(self, api_key: str = "", model: str = "", base_url: str | None = None):
        super().__init__(api_key, base_url)
        self.model = model

    def extra_headers(self) -> dict[str, str]:
        return {}

    async def generate(self, prompt: str, lang: str = "ru") -> str | None:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPTS.get(lang, SYSTEM_PROMPTS["en"])},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", **self.extra_headers()}
        data = await self._post(f"{self.base_url}{self.completions_path}", payload, headers=headers)
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise AdvisoryUnavailable(f"{self.name}: unexpected response shape ({e})") from e


class OpenAIProvider(ChatCompletionProvider):
    name = "openai"
    base_url = "https://api.openai.com"


class OpenRouterProvider(ChatCompletionProvider):
    name = "openrouter"
    base_url = "https://openrouter.ai"
    completions_path = "/api/v1/chat/completions"

    def __init__(
        self,
        api_key: str = "",
        model: str = "",
        site_url: str = "",
        app_name: str = "",
        base_url: str | None = None,
    ):
        super().__init__(api_key, model, base_url)
        self.site_url = site_url
        self.app_name = app_name

    def extra_headers(self) -> dict[str, str]:
        headers = {}
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.app_name:
            headers["X-Title"] = self.app_name
        return headers


def default_providers() -> list[AdvisoryProvider]:
    return [
        GeminiProvider(settings.GEMINI_API_KEY, settings.GEMINI_MODEL),
        OpenAIProvider(settings.OPENAI_API_KEY, settings.OPENAI_MODEL),
        OpenRouterProvider(
            settings.OPENROUTER_API_KEY,
            settings.OPENROUTER_MODEL,
            site_url=settings.OPENROUTER_SITE_URL,
            app_name=settings.OPENROUTER_APP_NAME,
        ),
    ]


# =====================================================
# PUBLIC SERVICE
# =====================================================
class AdvisoryService:
    def __init__(self, providers: Iterable[AdvisoryProvider] | None = None):
        self.providers = list(default_providers() if providers is None else providers)

    @property
    def enabled_providers(self) -> list[str]:
        return [p.name for p in self.providers if p.enabled]

    async def summarize(
        self,
        faults: Sequence[FaultRecord],
        vehicle: dict[str, Any],
        truck_label: str,
        lang: str = "ru",
    ) -> str | None:
        """
        First non-empty answer from the provider chain, or None.

        Never raises: a failing provider just hands over to the next one.
        """
        if not faults:
            return None

        prompt = None
        for provider in self.providers:
            if not provider.enabled:
                continue
            if prompt is None:
                prompt = build_advisory_prompt(faults, vehicle, truck_label, lang)
            try:
                text = await provider.generate(prompt, lang)
            except Exception as e:
                logger.warning(f"⚠️ Advisory via {provider.name} failed: {e}")
                continue

            text = (text or "").strip()
            if text:
                logger.info(f"🤖 Advisory from {provider.name} ({len(text)} chars)")
                return text
            logger.warning(f"⚠️ Advisory via {provider.name} returned nothing")

        return None


advisory_service = AdvisoryService()
