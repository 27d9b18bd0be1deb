from .fault_helpers import (
    PROPRIETARY_MARKER,
    find_maintenance_entry,
    is_proprietary,
    normalize_maintenance_entry,
)
from .text_helpers import code_span_text, escape_markdown, truncate_text
from .vehicle_helpers import match_vehicle, resolve_vehicle, vehicle_matches

__all__ = [
    "PROPRIETARY_MARKER",
    "normalize_maintenance_entry",
    "find_maintenance_entry",
    "is_proprietary",
    "truncate_text",
    "escape_markdown",
    "code_span_text",
    "match_vehicle",
    "resolve_vehicle",
    "vehicle_matches",
]
