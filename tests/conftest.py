from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import web

from models.diagnostics import FaultsInfo
from services.advisory_service import AdvisoryService
from services.language_store import MemoryLanguageStore
from services.samsara_service import SamsaraService
from utils.helpers import resolve_vehicle

TEST_TOKEN = "123456:TEST-fleetfaults-token"

VEHICLES = [
    {
        "id": "281474977075001",
        "name": "5120",
        "licensePlate": "TX-9921",
        "vin": "1XKYD49X7KJ254810",
        "externalIds": {"samsara.serial": "GFRV-43N-VGX", "samsara.vin": "1XKYD49X7KJ254810"},
    },
    {
        "id": "281474977075002",
        "name": "Spare Unit",
        "licensePlate": "1234",
        "vin": "3AKJHHDR5JSJV1234",
        "externalIds": {},
    },
    {
        "id": "281474977075003",
        "licensePlate": None,
        "externalIds": {"fleet.unit": "U-77"},
    },
]

MAINTENANCE = {
    "vehicles": [
        {
            "id": 281474977075001,
            "j1939": {
                "checkEngineLight": {"warningIsOn": True, "stopIsOn": False, "protectIsOn": True},
                "diagnosticTroubleCodes": [
                    {
                        "spnId": None,
                        "txId": 42,
                        "spnDescription": "Coolant level",
                        "fmiText": "low",
                        "occurrenceCount": 3,
                    },
                    {
                        "spnId": 3226,
                        "txId": 0,
                        "spnDescription": "Aftertreatment 1 Outlet NOx",
                        "fmiText": "Data erratic",
                        "occurrenceCount": 1,
                    },
                ],
            },
            "passenger": {
                "checkEngineLight": {"isOn": True},
                "diagnosticTroubleCodes": [
                    {"dtcShortCode": "P0420", "dtcDescription": "Catalyst efficiency below threshold"},
                ],
            },
        },
        {
            "id": 281474977075002,
            "j1939": {"diagnosticTroubleCodes": []},
            "passenger": {"diagnosticTroubleCodes": []},
        },
    ]
}


@pytest.fixture
def samsara_app():
    """Fake Samsara API. Records every request in app['calls']."""
    app = web.Application()
    app["calls"] = []
    app["status"] = 200
    app["vehicles"] = VEHICLES
    app["maintenance"] = MAINTENANCE

    async def vehicles(request):
        request.app["calls"].append(request)
        if request.app["status"] != 200:
            return web.Response(status=request.app["status"], text="upstream is down")
        return web.json_response({"data": request.app["vehicles"], "pagination": {"hasNextPage": False}})

    async def maintenance(request):
        request.app["calls"].append(request)
        if request.app["status"] != 200:
            return web.Response(status=request.app["status"], text="upstream is down")
        return web.json_response(request.app["maintenance"])

    app.router.add_get("/fleet/vehicles", vehicles)
    app.router.add_get("/v1/fleet/maintenance/list", maintenance)
    return app


@pytest.fixture
async def samsara(aiohttp_server, samsara_app):
    server = await aiohttp_server(samsara_app)
    service = SamsaraService(api_key="samsara-test-key", base_url=str(server.make_url("")))
    yield service
    await service.close()


class FakeSamsara:
    """Stand-in for SamsaraService in handler tests."""

    def __init__(self, vehicle=None, info=None, error=None):
        self.vehicle = vehicle
        self.info = info or FaultsInfo()
        self.error = error
        self.queries = []
        self.fault_requests = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def resolve_vehicle(self, candidates):
        self.queries.append(list(candidates))
        if self.error:
            raise self.error
        if self.vehicle is None:
            return None
        return resolve_vehicle([self.vehicle], candidates)

    async def get_vehicle_faults(self, vehicle_id):
        self.fault_requests.append(vehicle_id)
        return self.info


class FakeProvider:
    def __init__(self, name, answer=None, error=None, enabled=True):
        self.name = name
        self.answer = answer
        self.error = error
        self.enabled = enabled
        self.prompts = []

    async def generate(self, prompt, lang="ru"):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.answer


def make_message(text, chat_id=42):
    message = MagicMock()
    message.text = text
    message.chat.id = chat_id
    message.answer = AsyncMock()
    return message


def sent_texts(message) -> list[str]:
    return [c.args[0] for c in message.answer.await_args_list]


@pytest.fixture
def language_store():
    return MemoryLanguageStore("ru")


@pytest.fixture
def no_advisory():
    return AdvisoryService(providers=[])
