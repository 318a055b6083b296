"""Structural checks for incoming signed URLs."""

from urllib.parse import SplitResult

from bizauth.common.errors import MissingOrDuplicateClientError, MissingOrDuplicateSignatureError
from bizauth.urlsign.signer import CLIENT_PARAM, SIGNATURE_PARAM, QueryParams, parse_query, parse_url


def check_signed_url(raw_url: str) -> tuple[SplitResult, QueryParams]:
    """
    Check that a URL carries exactly one client and one signature parameter.

    No key material is touched; this only rejects URLs that cannot
    possibly authenticate.

    Raises:
        MalformedUrlError: If the URL cannot be parsed
        MalformedQueryError: If the query cannot be parsed
        MissingOrDuplicateClientError: Unless exactly one client value
        MissingOrDuplicateSignatureError: Unless exactly one signature value
    """
    url = parse_url(raw_url)
    params = parse_query(url.query)

    clients = params.get(CLIENT_PARAM, [])
    if len(clients) != 1:
        raise MissingOrDuplicateClientError(raw_url, len(clients))

    signatures = params.get(SIGNATURE_PARAM, [])
    if len(signatures) != 1:
        raise MissingOrDuplicateSignatureError(raw_url, len(signatures))

    return url, params
