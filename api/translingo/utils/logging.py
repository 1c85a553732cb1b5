import re

_WHITESPACE = re.compile(r"\s+")


def log_sample(text: str | None, max_length: int = 200) -> str:
    """
    Shorten user-supplied text for log lines.

    Collapses whitespace (so multi-line input stays on one log line) and
    truncates to ``max_length`` characters, appending the original length
    when anything was cut.
    """
    if not text:
        return ""
    collapsed = _WHITESPACE.sub(" ", text).strip()
    if len(collapsed) <= max_length:
        return collapsed
    return f"{collapsed[:max_length]}... ({len(collapsed)} chars)"
