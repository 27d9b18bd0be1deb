"""
utils/fault_formatter.py
Formatter for the fault-code reply
"""

from typing import Any, Dict, Optional

from models.diagnostics import FaultRecord, FaultsInfo
from utils.helpers.text_helpers import code_span_text, escape_markdown, truncate_text
from utils.i18n import t

MAX_FAULTS_SHOWN = 20
PART_SEPARATOR = " — "

# Telegram rejects longer messages
MAX_MESSAGE_LENGTH = 4096
MAX_PART_LENGTH = 64
MAX_LABEL_LENGTH = 64
# Room kept for the "… and N more" line
MORE_LINE_RESERVE = 40
# Advice shorter than this is not worth sending
MIN_ADVISORY_LENGTH = 120


def format_fault_line(fault: FaultRecord, lang: str = "ru") -> str:
    parts = []
    if fault.code is not None and fault.code != "":
        parts.append(f"{t('code', lang)}: `{code_span_text(fault.code)}`")
    if fault.short:
        parts.append(escape_markdown(truncate_text(fault.short, MAX_PART_LENGTH)))
    if fault.text:
        parts.append(escape_markdown(truncate_text(fault.text, MAX_PART_LENGTH)))
    if fault.occurrence_count is not None:
        parts.append(f"({t('occurrences', lang)}: {fault.occurrence_count})")

    return PART_SEPARATOR.join(parts) if parts else t("unknown_fault", lang)


def _fit_escaped(text: str, budget: int) -> str:
    """Trim text so that its escaped form fits in budget characters."""
    limit = budget
    while limit > 0:
        escaped = escape_markdown(truncate_text(text, limit))
        if len(escaped) <= budget:
            return escaped
        limit -= len(escaped) - budget
    return ""


def format_faults_message(
    truck_label: str,
    vehicle: Dict[str, Any],
    info: FaultsInfo,
    lang: str = "ru",
    advisory: Optional[str] = None,
) -> str:
    """
    Render the reply for one truck.

    Args:
        truck_label: what the user asked for (shown as the truck name)
        vehicle: Samsara vehicle record
        info: normalized faults + check-engine status
        lang: "ru" or "en"
        advisory: optional model-written guidance

    Returns:
        Markdown string, at most MAX_MESSAGE_LENGTH characters
    """

    def field(value: Any) -> str:
        return escape_markdown(truncate_text(value, MAX_LABEL_LENGTH))

    header = [f"*{t('truck', lang)}:* {field(truck_label)}"]
    if vehicle.get("vin"):
        header.append(f"*{t('vin', lang)}:* {field(vehicle['vin'])}")
    if vehicle.get("licensePlate"):
        header.append(f"*{t('plate', lang)}:* {field(vehicle['licensePlate'])}")

    lines = ["\n".join(header)]

    if info.check_engine:
        flags = info.check_engine.active_flags()
        if flags:
            lines.append(f"\n*{t('check_engine', lang)}:* " + ", ".join(flags))

    if not info.faults:
        lines.append("\n" + t("no_faults", lang))
    else:
        lines.append(f"\n*{t('active_faults', lang)}:*")
        length = len("\n".join(lines))
        shown = 0
        for num, fault in enumerate(info.faults[:MAX_FAULTS_SHOWN], 1):
            line = f"{num}. {format_fault_line(fault, lang)}"
            if length + 1 + len(line) > MAX_MESSAGE_LENGTH - MORE_LINE_RESERVE:
                break
            lines.append(line)
            length += 1 + len(line)
            shown += 1

        hidden = len(info.faults) - shown
        if hidden > 0:
            lines.append(t("more_faults", lang, count=hidden))

    if advisory:
        heading = f"\n*{t('advisory', lang)}:*\n"
        budget = MAX_MESSAGE_LENGTH - len("\n".join(lines)) - 1 - len(heading)
        if budget >= MIN_ADVISORY_LENGTH:
            lines.append(heading + _fit_escaped(advisory, budget))

    return "\n".join(lines)
