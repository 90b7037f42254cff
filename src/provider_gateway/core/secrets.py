"""
Helpers that keep API keys out of logs and error messages.
"""

import logging
import re
from typing import Optional

REDACTED = "***"

# Gemini takes the key as a query parameter, and httpx logs request URLs.
_KEY_PARAM = re.compile(r"([?&]key=)[^&\s\"']+")


def mask_key(api_key: Optional[str]) -> str:
    """Short form of a key for request logs, e.g. ``***a1b2``."""
    if not api_key:
        return "MISSING"
    if len(api_key) <= 8:
        return REDACTED
    return REDACTED + api_key[-4:]


def redact(text: str, api_key: Optional[str]) -> str:
    """Replace every occurrence of ``api_key`` inside ``text``."""
    if not text or not api_key:
        return text
    return text.replace(api_key, REDACTED)


class QueryKeyFilter(logging.Filter):
    """Redacts ``key=`` query parameters from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _KEY_PARAM.sub(r"\g<1>" + REDACTED, message)
        if redacted != message:
            record.msg, record.args = redacted, ()
        return True


logging.getLogger("httpx").addFilter(QueryKeyFilter())
