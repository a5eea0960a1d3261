import re
from typing import Any

from site_api.domain.coerce import to_integer

_SCRIPT_OR_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^<>]*>")
_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE = re.compile(r"\s+")


def _strip_once(text: str) -> str:
    text = _SCRIPT_OR_STYLE.sub("", text)
    text = _TAG.sub("", text)
    text = _OCTET.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def sanitize_text_field(value: Any) -> str:
    """
    Sanitize a single-line text value from user input.

    Strips HTML tags (dropping script/style bodies entirely), removes
    percent-encoded octets, collapses line breaks, tabs and runs of spaces
    into a single space, and trims the result.
    Stripping repeats until the text stops changing, so that removing one
    tag can never reveal another one.
    """
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        text = "1" if value else ""
    else:
        text = str(value)

    text = text.replace("\x00", "")
    while True:
        stripped = _strip_once(text)
        if stripped == text:
            return stripped
        text = stripped


def absint(value: Any) -> int:
    """Non-negative integer from any input."""
    return abs(to_integer(value))
