"""Request URL signing with HMAC-SHA1."""

from __future__ import annotations

import hashlib
import hmac
import re
from urllib.parse import SplitResult, unquote, unquote_plus, unquote_to_bytes, urlsplit

from bizauth.common.errors import (
    DecodeError,
    InvalidKeyEncodingError,
    MalformedQueryError,
    MalformedUrlError,
    MissingClientParameterError,
    UnexpectedSignatureParameterError,
)
from bizauth.urlsign.codec import decode_urlsafe_b64, encode_urlsafe_b64

CLIENT_PARAM = "client"
SIGNATURE_PARAM = "signature"

QueryParams = dict[str, list[str]]

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_url(raw_url: str) -> SplitResult:
    """
    Split a URL into its components, keeping path and query exactly as given.

    Raises:
        MalformedUrlError: If the URL contains control characters, text that
            cannot be UTF-8 encoded, an invalid path escape or an invalid
            host/port
    """
    if _CONTROL_CHARS.search(raw_url):
        raise MalformedUrlError(raw_url, "invalid control character in URL")
    try:
        raw_url.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedUrlError(raw_url, "invalid character") from e
    try:
        parts = urlsplit(raw_url)
        # Accessing port validates it.
        parts.port
    except ValueError as e:
        raise MalformedUrlError(raw_url, str(e)) from e
    if _BAD_ESCAPE.search(parts.path):
        raise MalformedUrlError(raw_url, "invalid escape in path")
    return parts


def _unescape(component: str, query: str) -> str:
    if _BAD_ESCAPE.search(component):
        raise MalformedQueryError(query, f"invalid escape in {component!r}")
    return unquote_plus(component)


def parse_query(raw_query: str) -> QueryParams:
    """
    Parse a raw query string into a multi-valued parameter mapping.

    Parameters keep the order in which they appear, and repeated names keep
    every value. A field without '=' maps to an empty value.

    Raises:
        MalformedQueryError: On ';' separators or invalid percent escapes
    """
    params: QueryParams = {}
    for field in raw_query.split("&"):
        if not field:
            continue
        if ";" in field:
            raise MalformedQueryError(raw_query, "invalid semicolon separator in query")
        name, _, value = field.partition("=")
        params.setdefault(_unescape(name, raw_query), []).append(_unescape(value, raw_query))
    return params


def string_to_sign(url: SplitResult) -> str:
    """Build the canonical string covered by the signature: decoded path?raw_query."""
    return unquote(url.path) + "?" + url.query


def _message(url: SplitResult) -> bytes:
    # Escaped path bytes that are not UTF-8 are signed as the raw bytes.
    return unquote_to_bytes(url.path) + b"?" + url.query.encode("utf-8")


def create_signature(url: SplitResult, key: str) -> str:
    """
    Compute the signature of a URL's decoded path and raw query.

    Args:
        url: Parsed URL carrying a client parameter and no signature
        key: URL-safe base64 encoded shared secret

    Returns:
        URL-safe base64 encoded HMAC-SHA1 digest

    Raises:
        MalformedQueryError: If the query cannot be parsed
        MissingClientParameterError: If the query has no client parameter
        UnexpectedSignatureParameterError: If the query is already signed
        InvalidKeyEncodingError: If the key is not valid base64
    """
    params = parse_query(url.query)
    if CLIENT_PARAM not in params:
        raise MissingClientParameterError(url.geturl())
    if SIGNATURE_PARAM in params:
        raise UnexpectedSignatureParameterError(url.geturl())

    # Never re-serialize params here: urlencode would reorder and re-escape.
    message = _message(url)

    try:
        decoded_key = decode_urlsafe_b64(key)
    except DecodeError as e:
        raise InvalidKeyEncodingError(e.reason) from e

    digest = hmac.new(decoded_key, message, hashlib.sha1).digest()
    return encode_urlsafe_b64(digest)


def sign_url(raw_url: str, key: str) -> str:
    """
    Sign a URL and append the signature as its final query parameter.

    The URL must carry a client parameter, which the receiving side uses
    to look up the key.

    Returns:
        scheme://host/path?query&signature=<signature>, with the path
        decoded and any user:password@ part dropped
    """
    url = parse_url(raw_url)
    signature = create_signature(url, key)
    host = url.netloc.rpartition("@")[2]
    return f"{url.scheme}://{host}{unquote(url.path)}?{url.query}&{SIGNATURE_PARAM}={signature}"
