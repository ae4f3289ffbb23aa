"""Input normalizers (int, plain text, URL) and output escapers for markup."""
import html
import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")
INT_MAX = 2**63 - 1
INT_MIN = -(2**63)

_SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")
# Unterminated tag at end of string ("a <b"); a bare "<" followed by a space is kept
_OPEN_TAG_TAIL = re.compile(r"<[a-zA-Z/!?][^>]*$")
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE = re.compile(r"[\r\n\t ]+")

_URL_ILLEGAL = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\u0080-\U0010ffff]")
_URL_CRLF = re.compile(r"%0[dDaA]")
_URL_SCHEME = re.compile(r"^([^/?#:]+):")
_PHP_PATH = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)

ALLOWED_PROTOCOLS = (
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "gopher", "nntp",
    "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel", "fax", "xmpp",
    "webcal", "urn",
)


def _saturate(value: int) -> int:
    return max(INT_MIN, min(INT_MAX, value))


def _digits_to_int(digits: str) -> int:
    negative = digits.startswith("-")
    magnitude = digits.lstrip("+-").lstrip("0")
    # More digits than INT_MAX: out of range, saturate without converting
    if len(magnitude) > len(str(INT_MAX)):
        return INT_MIN if negative else INT_MAX
    return _saturate(int(digits))


def to_int(value: Any) -> int:
    """Best-effort integer: leading digits of strings, truncated floats, else 0. Never raises.

    Results saturate at the 64-bit bounds.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _saturate(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return _saturate(int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return _digits_to_int(match.group(1)) if match else 0
    return 0


def _text_pass(value: str) -> str:
    value = _SCRIPT_STYLE.sub("", value)
    value = _TAG.sub("", value)
    value = _OPEN_TAG_TAIL.sub("", value)
    value = _CONTROL.sub("", value)
    value = _OCTET.sub("", value)
    value = _WHITESPACE.sub(" ", value)
    return value.strip()


def sanitize_text_field(value: Any) -> str:
    """Plain text from user input: no tags, no control chars or octets, single-spaced, trimmed."""
    if value is None:
        return ""
    current = str(value)
    # Stripping can expose new tags/octets ("<<b>i>"), so repeat until stable
    while True:
        cleaned = _text_pass(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def _url_pass(url: str) -> str:
    url = url.strip().replace(" ", "%20")
    url = _URL_ILLEGAL.sub("", url)
    while _URL_CRLF.search(url):
        url = _URL_CRLF.sub("", url)
    return url


def sanitize_url(value: Any) -> str:
    """URL from user input: illegal characters removed, scheme checked against ALLOWED_PROTOCOLS.

    Returns "" for empty input or a disallowed scheme (javascript:, data:, ...).
    Scheme-less absolute values get an http:// prefix; relative paths are kept.
    """
    if value is None:
        return ""
    url = _url_pass(str(value))
    if not url:
        return ""
    if ":" not in url and not url.startswith(("/", "#", "?")) and not _PHP_PATH.match(url):
        url = "http://" + url
    match = _URL_SCHEME.match(url)
    if match and match.group(1).lower() not in ALLOWED_PROTOCOLS:
        return ""
    return url


def esc_html(value: Any) -> str:
    """Escape text content for HTML output."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def esc_attr(value: Any) -> str:
    """Escape a value placed inside a double-quoted attribute."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def esc_url(value: Any) -> str:
    """Sanitize then escape a URL for an href/src attribute."""
    return html.escape(sanitize_url(value), quote=True)
