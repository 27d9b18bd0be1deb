# utils/parsers.py
import re

# ─────────────────────────────────────────────
# REGEX DEFINITIONS
# ─────────────────────────────────────────────

# Standalone 3–4 digit unit number ("truck 1234 please" -> "1234")
UNIT_RE = re.compile(r"\b(\d{3,4})\b")

LANG_CALLBACK_RE = re.compile(r"^lang:([a-z]{2})$")


# ─────────────────────────────────────────────
# PARSERS
# ─────────────────────────────────────────────

def truck_query_candidates(text: str | None) -> list[str]:
    """
    Truck identifiers to try, in order.

    The message as typed (trimmed) comes first so names and plates such as
    "TX-9921" resolve exactly; the first standalone 3–4 digit run follows
    as a fallback for chatty messages ("truck 5120 please").
    """
    raw = (text or "").strip()
    if not raw:
        return []

    candidates = [raw]
    m = UNIT_RE.search(raw)
    if m and m.group(1) != raw:
        candidates.append(m.group(1))
    return candidates


def normalize_query(query: str | None) -> str:
    return str(query or "").strip().lower()


def parse_language_callback(data: str | None) -> str | None:
    """'lang:en' -> 'en'; anything else -> None."""
    m = LANG_CALLBACK_RE.match(data or "")
    return m.group(1) if m else None
