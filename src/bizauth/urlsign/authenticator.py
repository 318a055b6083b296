"""Authentication of incoming signed request URLs."""

from __future__ import annotations

import hmac
from collections.abc import Mapping
from urllib.parse import SplitResult

from bizauth.common.errors import (
    BizAuthError,
    MalformedSignedUrlError,
    SignatureMismatchError,
    UnknownClientError,
)
from bizauth.common.logging import get_logger
from bizauth.urlsign.signer import (
    CLIENT_PARAM,
    SIGNATURE_PARAM,
    QueryParams,
    create_signature,
    parse_url,
)
from bizauth.urlsign.validator import check_signed_url

logger = get_logger(__name__)

SIGNATURE_MARKER = f"&{SIGNATURE_PARAM}="


def _verify(repository: Mapping[str, str], raw_url: str) -> tuple[SplitResult, QueryParams]:
    url, params = check_signed_url(raw_url)

    client = params[CLIENT_PARAM][0]
    key = repository.get(client)
    if key is None:
        raise UnknownClientError(client)

    attached = params[SIGNATURE_PARAM][0]

    # The signature is always appended last, so everything before the
    # marker is exactly what the client signed.
    boundary = raw_url.rfind(SIGNATURE_MARKER)
    if boundary == -1:
        raise MalformedSignedUrlError(raw_url)
    trailer = raw_url[boundary + len(SIGNATURE_MARKER) :].split("#", 1)[0]
    if "&" in trailer:
        raise MalformedSignedUrlError(raw_url, "parameters after signature")

    unsigned = parse_url(raw_url[:boundary])
    computed = create_signature(unsigned, key)

    if not hmac.compare_digest(attached.encode("utf-8"), computed.encode("utf-8")):
        raise SignatureMismatchError(client, attached, computed)

    return url, params


def authenticate(repository: Mapping[str, str], raw_url: str) -> tuple[SplitResult, QueryParams]:
    """
    Check that a request URL's signature matches its client's registered key.

    Args:
        repository: Client id to URL-safe base64 key mapping
        raw_url: Request URL exactly as received

    Returns:
        Parsed URL and its query parameters; the caller finds the
        authenticated client id under params["client"][0]

    Raises:
        BizAuthError: One of the structural, lookup, key encoding or
            signature mismatch errors. Callers should answer untrusted
            requesters with a generic rejection regardless of the kind.
    """
    try:
        url, params = _verify(repository, raw_url)
    except BizAuthError as e:
        # Error messages can embed the signed URL; keep them out of the log.
        logger.warning("Rejected signed URL", code=e.code, client=getattr(e, "client", None))
        raise

    logger.debug("Authenticated signed URL", client=params[CLIENT_PARAM][0], path=url.path)
    return url, params
