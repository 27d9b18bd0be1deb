"""
models/diagnostics.py
Normalized diagnostic data for a single vehicle
"""

from dataclasses import dataclass, field
from typing import Any

# Samsara flag key -> label shown in the reply
CHECK_ENGINE_FLAGS = (
    ("warningIsOn", "Warning"),
    ("emissionsIsOn", "Emissions"),
    ("protectIsOn", "Protect"),
    ("stopIsOn", "Stop"),
    ("isOn", "Check Engine"),
)


@dataclass
class FaultRecord:
    source: str  # "j1939" | "passenger"
    code: int | str | None = None
    short: str | None = None
    text: str | None = None
    occurrence_count: int | None = None


@dataclass
class CheckEngineStatus:
    type: str  # "j1939" | "passenger"
    data: dict[str, Any] = field(default_factory=dict)

    def active_flags(self) -> list[str]:
        return [label for key, label in CHECK_ENGINE_FLAGS if self.data.get(key)]


@dataclass
class FaultsInfo:
    faults: list[FaultRecord] = field(default_factory=list)
    check_engine: CheckEngineStatus | None = None
