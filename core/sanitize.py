# ============================================================================
# INPUT SANITIZERS
# ============================================================================
# STATUS: Core - Field-level sanitizers applied before the handler runs
# PURPOSE: Plain-text, raw-URL and absolute-integer coercion of request params
# ============================================================================
"""
Input Sanitizers

Field sanitizers matching the host platform's behavior, so a value stored
through this service compares equal to a value stored through the host UI:

- sanitize_text_field: plain text, no tags, no line breaks, no %XX octets
- esc_url_raw: URL safe for storage, "" for disallowed protocols
- absint: absolute integer
"""

import re
from typing import Any, Optional, Tuple

ALLOWED_PROTOCOLS: Tuple[str, ...] = (
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs",
    "gopher", "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel",
    "fax", "xmpp", "webcal", "urn",
)

_LESS_THAN_RE = re.compile(r"<[^>]*?((?=<)|>|$)")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")
_OCTET_RE = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)
_SPACES_RE = re.compile(r" +")
_TRIM_CHARS = " \t\n\r\0\x0b"

_URL_DISALLOWED_RE = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\ud7ff\ue000-\U0010ffff]", re.IGNORECASE)
_PHP_PATH_RE = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)
_CRLF_OCTETS = ("%0d", "%0a", "%0D", "%0A")


def _esc_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def _escape_lone_less_than(text: str) -> str:
    """Encode '<' characters that do not open a complete tag."""
    def _replace(match: "re.Match[str]") -> str:
        chunk = match.group(0)
        return chunk if ">" in chunk else _esc_html(chunk)

    return _LESS_THAN_RE.sub(_replace, text)


def _strip_all_tags(text: str) -> str:
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)
    return _TAG_RE.sub("", text)


def check_invalid_utf8(value: str) -> str:
    """
    The value unchanged if it encodes as UTF-8, else "".

    Bytes decoded with errors="surrogateescape" (and lone surrogates from
    JSON escapes) fail the encode, so the whole value is dropped.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return ""
    return value


def sanitize_text_field(value: str) -> str:
    """
    Sanitize a string for storage as plain text.

    - Encodes lone '<' characters
    - Strips all tags (script/style bodies included)
    - Collapses line breaks, tabs and runs of whitespace to one space
    - Removes percent-encoded octets
    - Trims ASCII whitespace and NUL only, so a non-breaking space survives

    Returns "" for a value that is not valid UTF-8.
    """
    filtered = check_invalid_utf8(value)

    if "<" in filtered:
        filtered = _escape_lone_less_than(filtered)
        filtered = _strip_all_tags(filtered)
        filtered = filtered.replace("<\n", "&lt;\n")

    filtered = _WHITESPACE_RE.sub(" ", filtered).strip(_TRIM_CHARS)

    found = False
    match = _OCTET_RE.search(filtered)
    while match:
        filtered = filtered.replace(match.group(0), "")
        found = True
        match = _OCTET_RE.search(filtered)

    if found:
        filtered = _SPACES_RE.sub(" ", filtered).strip(_TRIM_CHARS)

    return filtered


def _deep_replace(search: Tuple[str, ...], subject: str) -> str:
    """Replace until none of the search strings remain."""
    found = True
    while found:
        found = False
        for needle in search:
            if needle in subject:
                subject = subject.replace(needle, "")
                found = True
    return subject


def _has_allowed_protocol(url: str) -> bool:
    scheme, sep, _ = url.partition(":")
    # A colon after "/?" sits in the query, not after a scheme
    if not sep or "/?" in scheme:
        return True
    # Control characters and whitespace are ignored when reading the scheme
    scheme = re.sub(r"[\x00-\x20]", "", scheme).lower()
    return scheme in ALLOWED_PROTOCOLS


def esc_url_raw(value: str) -> str:
    """
    Sanitize a URL for storage.

    Returns "" when the URL uses a protocol outside ALLOWED_PROTOCOLS.
    Scheme-less URLs that are not relative get "http://" prepended.
    """
    if value == "":
        return value

    url = value.lstrip(_TRIM_CHARS).replace(" ", "%20")
    url = _URL_DISALLOWED_RE.sub("", url)
    if url == "":
        return url

    if not url.lower().startswith("mailto:"):
        url = _deep_replace(_CRLF_OCTETS, url)

    url = url.replace(";//", "://")

    if ":" not in url and url[0] not in ("/", "#", "?") and not _PHP_PATH_RE.match(url):
        url = "http://" + url

    if url[0] == "/":
        return url

    if not _has_allowed_protocol(url):
        return ""

    return url


def absint(value: Any) -> int:
    """Absolute integer of a value that parses as an integer."""
    return abs(int(value))


def parse_non_negative_int(value: Any) -> Optional[int]:
    """
    Parse a request value as a non-negative integer.

    Accepts ints and strings of digits (surrounding whitespace allowed).
    Returns None for anything else, including booleans and negatives.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isascii() and stripped.isdigit():
            return int(stripped)
    return None


__all__ = [
    "ALLOWED_PROTOCOLS",
    "check_invalid_utf8",
    "sanitize_text_field",
    "esc_url_raw",
    "absint",
    "parse_non_negative_int",
]
