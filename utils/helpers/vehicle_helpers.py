from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from utils.parsers import normalize_query


def _folded(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def vehicle_matches(vehicle: Dict[str, Any], query: str) -> bool:
    """Exact, case-insensitive match on name, plate, then any externalIds value."""
    if _folded(vehicle.get("name")) == query:
        return True
    if _folded(vehicle.get("licensePlate")) == query:
        return True

    external_ids = vehicle.get("externalIds") or {}
    return any(_folded(v) == query for v in external_ids.values())


def resolve_vehicle(
    vehicles: Iterable[Dict[str, Any]], queries: Sequence[str]
) -> Optional[Tuple[str, Dict[str, Any]]]:
    """
    Try each query in order against the whole fleet.

    Returns (matched query, vehicle) for the first query that hits, else None.
    """
    fleet = list(vehicles)
    for query in queries:
        q = normalize_query(query)
        if not q:
            continue
        for v in fleet:
            if vehicle_matches(v, q):
                return query, v
    return None


def match_vehicle(vehicles: Iterable[Dict[str, Any]], *queries: str) -> Optional[Dict[str, Any]]:
    """Return the first vehicle matching the queries (tried in order), or None."""
    hit = resolve_vehicle(vehicles, queries)
    return hit[1] if hit else None
