"""
Location: python/payto_sdk/url.py

Summary:
    URI substrate for payto strings. Parsing and query reads are delegated
    to httpx.URL / httpx.QueryParams. Query writes edit the raw query text
    pair by pair, so parameters a write does not touch keep their original
    encoding. Also holds the path-segment primitives the field accessors
    are built from and the table of query parameter names.

Usage:
    Used by payto.py and rails.py. httpx.URL is immutable, so every helper
    that changes a URL returns a new one. httpx lowercases the host when it
    parses, so "payto://XCB/..." prints back as "payto://xcb/...".

Example:
    from payto_sdk.url import parse_url, set_path_segment

    url = parse_url("payto://xcb/cb71...?amount=ctn:10.01")
    set_path_segment(url.path, "cb72...", 1)   # "/cb72..."
"""

from typing import Optional
from urllib.parse import quote, unquote_plus

import httpx

from .validators import PaytoError


# Query parameter names keyed by field name
QUERY_KEYS = {
    "AMOUNT": "amount",
    "BARCODE": "barcode",
    "COLOR_BACKGROUND": "color-b",
    "COLOR_FOREGROUND": "color-f",
    "DEADLINE": "dl",
    "DONATE": "donate",
    "FIAT": "fiat",
    "ITEM": "item",
    "LANG": "lang",
    "LOCATION": "loc",
    "MESSAGE": "message",
    "MODE": "mode",
    "ORGANIZATION": "org",
    "RECEIVER_NAME": "receiver-name",
    "RECURRING": "rc",
    "RTL": "rtl",
    "SPLIT": "split",
    "SWAP": "swap",
}

PAYTO_SCHEME = "payto"

# Characters written literally in query values; "&", "=", "+" and "#" are always escaped
QUERY_SAFE = ":@,/!$'()*;"


def parse_url(text: str) -> httpx.URL:
    """
    Parse a URI string.

    Args:
        text: The URI string

    Returns:
        The parsed httpx.URL

    Raises:
        InvalidURIError: If httpx cannot parse the string at all
    """
    try:
        return httpx.URL(text)
    except httpx.InvalidURL as exc:
        raise InvalidURIError(f"Invalid URI: {exc}") from exc


def copy_url(url: httpx.URL, **kwargs) -> httpx.URL:
    """Return a modified copy, surfacing httpx parse failures as InvalidURIError."""
    try:
        return url.copy_with(**kwargs)
    except httpx.InvalidURL as exc:
        raise InvalidURIError(f"Invalid URI component: {exc}") from exc


def encode_query_value(value: str) -> str:
    """Percent-encode a query key or value, leaving ":", "@" and "," literal."""
    return quote(value, safe=QUERY_SAFE)


def encode_query(query: str) -> str:
    """Percent-encode a whole query string, keeping separators and existing escapes."""
    return quote(query, safe=QUERY_SAFE + "&=+%?")


def replace_param(url: httpx.URL, key: str, value: Optional[str]) -> httpx.URL:
    """
    Set or remove one query parameter without touching the others.

    Only the raw "key=value" pairs for key are rewritten; every other pair
    keeps its original bytes. A first occurrence that already decodes to
    value is kept verbatim. Repeats of key are dropped.

    Args:
        url: The current URL
        key: Decoded parameter name
        value: New decoded value, or None to remove the parameter

    Returns:
        The URL with the rewritten query (the same object if nothing changed)
    """
    raw_query = url.query.decode("ascii")
    pairs = raw_query.split("&") if raw_query else []

    result = []
    placed = value is None
    for pair in pairs:
        name, _, raw_value = pair.partition("=")
        if unquote_plus(name) != key:
            result.append(pair)
            continue
        if not placed:
            if unquote_plus(raw_value) == value:
                result.append(pair)
            else:
                result.append(f"{encode_query_value(key)}={encode_query_value(value)}")
            placed = True
    if not placed:
        result.append(f"{encode_query_value(key)}={encode_query_value(value)}")

    if result == pairs:
        return url
    query = "&".join(result)
    return copy_url(url, query=query.encode("ascii") if query else None)


def with_param(url: httpx.URL, key: str, value: Optional[str]) -> httpx.URL:
    """Set one query parameter; a falsy value removes it."""
    return replace_param(url, key, value or None)


def path_segments(pathname: str) -> list[str]:
    """
    Split a pathname on "/".

    Index 0 is the (empty) text before the leading slash, so the first
    real segment sits at index 1.
    """
    return pathname.split("/")


def join_path_segments(segments: list[str]) -> str:
    """Rejoin segments, dropping empty ones, always with one leading slash."""
    return "/" + "/".join(segment for segment in segments if segment)


def set_path_segment(pathname: str, value: Optional[str], position: int) -> str:
    """
    Write or remove the segment at a position.

    Args:
        pathname: The current pathname
        value: New segment text; None or "" removes the segment
        position: Index into path_segments(pathname)

    Returns:
        The normalized pathname
    """
    segments = path_segments(pathname)
    if value:
        if position < len(segments):
            segments[position] = value
        else:
            segments.extend([""] * (position - len(segments)))
            segments.append(value)
    elif position < len(segments):
        del segments[position]
    return join_path_segments(segments)


def hostpath_segment(
    hostname: str,
    pathname: str,
    kind: Optional[str],
    position: int,
) -> Optional[str]:
    """
    Read a segment of the host-prefixed path.

    The hostname is treated as segment 0 followed by the path segments.
    When kind is given the hostname must equal it (case-insensitive).

    Args:
        hostname: The URI hostname
        pathname: The URI pathname
        kind: Required hostname, or None to skip the check
        position: 0 for the hostname, 1 for the first path segment, ...

    Returns:
        The segment, or None on mismatch, empty segment or out-of-range
    """
    parts = [hostname] + path_segments(pathname)[1:]
    if kind is not None and (parts[0] or "").lower() != kind:
        return None
    if position < len(parts):
        return parts[position] or None
    return None


def filled_segments(pathname: str) -> list[str]:
    """The non-empty path segments in order."""
    return [segment for segment in path_segments(pathname) if segment]


class InvalidURIError(PaytoError):
    """Exception raised when a string cannot be parsed as a URI."""
    pass
