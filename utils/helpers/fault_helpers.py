from typing import Any, Dict, List, Optional

from models.diagnostics import CheckEngineStatus, FaultRecord, FaultsInfo

# J1939 SPN range 520192–524287 is left to the manufacturer; Samsara labels it this way
PROPRIETARY_MARKER = "manufacturer assignable"


def _first_not_none(*values: Any) -> Any:
    for v in values:
        if v is not None:
            return v
    return None


def _codes(branch: Dict[str, Any]) -> List[Dict[str, Any]]:
    codes = branch.get("diagnosticTroubleCodes")
    if not isinstance(codes, list):
        return []
    return [c for c in codes if isinstance(c, dict)]


def j1939_fault(code: Dict[str, Any]) -> FaultRecord:
    return FaultRecord(
        source="j1939",
        code=_first_not_none(code.get("spnId"), code.get("txId")),
        short=code.get("spnDescription") or None,
        text=code.get("fmiText") or None,
        occurrence_count=code.get("occurrenceCount"),
    )


def passenger_fault(code: Dict[str, Any]) -> FaultRecord:
    return FaultRecord(
        source="passenger",
        code=code.get("dtcShortCode") or None,
        short=code.get("dtcDescription") or None,
    )


def normalize_maintenance_entry(entry: Optional[Dict[str, Any]]) -> FaultsInfo:
    """
    Reshape one /v1/fleet/maintenance/list vehicle into FaultsInfo.

    Heavy-duty (j1939) faults come first. When both branches carry a
    check-engine light, the passenger one is kept.
    """
    info = FaultsInfo()
    if not entry:
        return info

    j1939 = entry.get("j1939")
    if isinstance(j1939, dict):
        if isinstance(j1939.get("checkEngineLight"), dict):
            info.check_engine = CheckEngineStatus("j1939", j1939["checkEngineLight"])
        info.faults.extend(j1939_fault(c) for c in _codes(j1939))

    passenger = entry.get("passenger")
    if isinstance(passenger, dict):
        if isinstance(passenger.get("checkEngineLight"), dict):
            info.check_engine = CheckEngineStatus("passenger", passenger["checkEngineLight"])
        info.faults.extend(passenger_fault(c) for c in _codes(passenger))

    return info


def find_maintenance_entry(
    vehicles: List[Dict[str, Any]], vehicle_id: Any
) -> Optional[Dict[str, Any]]:
    target = str(vehicle_id)
    return next((v for v in vehicles if str(v.get("id")) == target), None)


def is_proprietary(fault: FaultRecord) -> bool:
    haystack = f"{fault.short or ''} {fault.text or ''}".lower()
    return PROPRIETARY_MARKER in haystack
