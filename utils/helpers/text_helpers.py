from typing import Optional


def truncate_text(text: Optional[str], max_length: int = 50) -> str:
    if text is None:
        return ""
    text = str(text)
    return text if len(text) <= max_length else text[: max_length - 1] + "…"


def escape_markdown(text: Optional[str]) -> str:
    """Escape legacy-Markdown control characters in user or API text."""
    if text is None:
        return ""
    out = str(text)
    for ch in ("_", "*", "`", "["):
        out = out.replace(ch, f"\\{ch}")
    return out


def code_span_text(text: Optional[str], max_length: int = 64) -> str:
    """Text safe to put between backticks: no backticks, bounded length."""
    return truncate_text("" if text is None else str(text).replace("`", "'"), max_length)
