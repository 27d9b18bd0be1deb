"""
Samsara API Service for FleetFaults Bot
Vehicle lookup + active fault codes (read-only)
"""

import asyncio
from typing import Any

import aiohttp

from config.settings import settings
from core.exceptions import ConfigurationError, UpstreamError
from models.diagnostics import FaultsInfo
from utils.helpers import (
    find_maintenance_entry,
    normalize_maintenance_entry,
    resolve_vehicle as resolve_in_fleet,
    truncate_text,
)
from utils.logger import get_logger

logger = get_logger("services.samsara_service")


class SamsaraService:
    VEHICLES_ENDPOINT = "/fleet/vehicles"
    MAINTENANCE_ENDPOINT = "/v1/fleet/maintenance/list"
    VEHICLE_PAGE_LIMIT = 512

    def __init__(self, api_key: str | None = None, base_url: str | None = None):
        self.api_key = settings.SAMSARA_API_KEY if api_key is None else api_key
        self.base_url = (base_url or settings.SAMSARA_BASE_URL).rstrip("/")

        self.session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()
        self._session_refs = 0

    # =====================================================
    # SESSION
    # =====================================================
    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def open(self):
        async with self._session_lock:
            if not self.session or self.session.closed:
                self.session = aiohttp.ClientSession(
                    headers=self.headers,
                    timeout=aiohttp.ClientTimeout(total=30),
                )
                logger.debug("🔌 Samsara session created")

    async def close(self):
        async with self._session_lock:
            if self.session and not self.session.closed:
                await self.session.close()
                logger.debug("🔒 Samsara session closed")
            self.session = None

    async def __aenter__(self):
        self._session_refs += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._session_refs -= 1
        if self._session_refs <= 0:
            self._session_refs = 0
            await self.close()

    def _require_key(self):
        if not self.api_key:
            raise ConfigurationError("SAMSARA_API_KEY is not set")

    async def request(self, endpoint: str, params: dict | None = None) -> dict[str, Any]:
        """GET an endpoint; raises UpstreamError on any non-2xx status."""
        self._require_key()
        if not self.session or self.session.closed:
            await self.open()

        async with self.session.get(f"{self.base_url}{endpoint}", params=params) as r:
            if r.status >= 300:
                body = await r.text()
                logger.error(f"❌ Samsara {endpoint} error {r.status}: {truncate_text(body, 500)}")
                raise UpstreamError("Samsara", r.status, body)
            return await r.json(content_type=None) or {}

    # =====================================================
    # VEHICLES
    # =====================================================
    async def list_vehicles(self) -> list[dict[str, Any]]:
        data = await self.request(self.VEHICLES_ENDPOINT, {"limit": self.VEHICLE_PAGE_LIMIT})
        vehicles = data.get("data") or []
        logger.info(f"🚛 Samsara returned {len(vehicles)} vehicles")
        return vehicles

    async def resolve_vehicle(self, queries: list[str]) -> tuple[str, dict[str, Any]] | None:
        """
        Resolve truck queries (tried in order) to exactly one vehicle.

        Matches name, then licensePlate, then any externalIds value
        (case-insensitive, exact) against a single fresh vehicle list.
        Returns (matched query, vehicle), or None when nothing matches.
        """
        queries = [q for q in queries if str(q or "").strip()]
        if not queries:
            return None

        hit = resolve_in_fleet(await self.list_vehicles(), queries)
        if hit:
            logger.info(f"🎯 '{hit[0]}' -> vehicle id={hit[1].get('id')}")
        else:
            logger.info(f"🤷 {queries} -> no vehicle")
        return hit

    async def find_vehicle(self, query: str) -> dict[str, Any] | None:
        hit = await self.resolve_vehicle([query])
        return hit[1] if hit else None

    # =====================================================
    # FAULTS
    # =====================================================
    async def get_vehicle_faults(self, vehicle_id: Any) -> FaultsInfo:
        """
        Active fault codes for one vehicle.

        The maintenance list is fleet-wide; a vehicle missing from it yields
        an empty FaultsInfo, same as one with no faults.
        """
        data = await self.request(self.MAINTENANCE_ENDPOINT)
        entry = find_maintenance_entry(data.get("vehicles") or [], vehicle_id)
        if entry is None:
            logger.info(f"📭 No maintenance entry for vehicle id={vehicle_id}")
            return FaultsInfo()

        info = normalize_maintenance_entry(entry)
        logger.info(f"🛠 vehicle id={vehicle_id}: {len(info.faults)} fault(s)")
        return info

    # =====================================================
    # HEALTH
    # =====================================================
    async def test_connection(self) -> bool:
        try:
            async with self:
                await self.request(self.VEHICLES_ENDPOINT, {"limit": 1})
            return True
        except Exception as e:
            logger.warning(f"⚠️ Samsara connection check failed: {e}")
            return False


# =====================================================
# SINGLETON
# =====================================================
samsara_service = SamsaraService()
