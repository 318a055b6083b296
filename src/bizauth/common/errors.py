"""Error taxonomy and HTTP error helpers."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse


class ErrorCode:
    ENCODING_ERROR = "encoding_error"
    DECODE_ERROR = "decode_error"
    INVALID_KEY_ENCODING = "invalid_key_encoding"
    KEY_GENERATION_FAILED = "key_generation_failed"
    MALFORMED_URL = "malformed_url"
    MALFORMED_QUERY = "malformed_query"
    MISSING_CLIENT_PARAMETER = "missing_client_parameter"
    UNEXPECTED_SIGNATURE_PARAMETER = "unexpected_signature_parameter"
    MISSING_OR_DUPLICATE_CLIENT = "missing_or_duplicate_client"
    MISSING_OR_DUPLICATE_SIGNATURE = "missing_or_duplicate_signature"
    MALFORMED_REPOSITORY_LINE = "malformed_repository_line"
    UNKNOWN_CLIENT = "unknown_client"
    MALFORMED_SIGNED_URL = "malformed_signed_url"
    SIGNATURE_MISMATCH = "signature_mismatch"
    UNAUTHORIZED = "unauthorized"


class BizAuthError(Exception):
    """Base class for all signing and authentication errors."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EncodingError(BizAuthError):
    """Base64 encoding or decoding failed."""

    code = ErrorCode.ENCODING_ERROR


class DecodeError(EncodingError):
    """Text is not valid URL-safe base64."""

    code = ErrorCode.DECODE_ERROR

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid URL-safe base64 {value!r}: {reason}")
        self.value = value
        self.reason = reason


class InvalidKeyEncodingError(EncodingError):
    """A shared secret key could not be decoded."""

    code = ErrorCode.INVALID_KEY_ENCODING

    def __init__(self, reason: str) -> None:
        # The key itself is secret material and stays out of the message.
        super().__init__(f"Key is not valid URL-safe base64: {reason}")
        self.reason = reason


class KeyGenerationError(BizAuthError):
    """Generating or serializing a new key failed."""

    code = ErrorCode.KEY_GENERATION_FAILED


class MalformedUrlError(BizAuthError):
    """URL could not be parsed."""

    code = ErrorCode.MALFORMED_URL

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Malformed URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class MalformedQueryError(BizAuthError):
    """Query string could not be parsed."""

    code = ErrorCode.MALFORMED_QUERY

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Malformed query {query!r}: {reason}")
        self.query = query
        self.reason = reason


class MissingClientParameterError(BizAuthError):
    """URL to sign has no client parameter."""

    code = ErrorCode.MISSING_CLIENT_PARAMETER

    def __init__(self, url: str) -> None:
        super().__init__(f"URL to sign must have a 'client' parameter: {url}")
        self.url = url


class UnexpectedSignatureParameterError(BizAuthError):
    """URL to sign already carries a signature parameter."""

    code = ErrorCode.UNEXPECTED_SIGNATURE_PARAMETER

    def __init__(self, url: str) -> None:
        super().__init__(f"URL to sign must not have a 'signature' parameter: {url}")
        self.url = url


class MissingOrDuplicateClientError(BizAuthError):
    """Signed URL does not carry exactly one client parameter."""

    code = ErrorCode.MISSING_OR_DUPLICATE_CLIENT

    def __init__(self, url: str, count: int) -> None:
        super().__init__(
            f"Request URL must contain exactly one 'client' parameter, found {count}: {url}"
        )
        self.url = url
        self.count = count


class MissingOrDuplicateSignatureError(BizAuthError):
    """Signed URL does not carry exactly one signature parameter."""

    code = ErrorCode.MISSING_OR_DUPLICATE_SIGNATURE

    def __init__(self, url: str, count: int) -> None:
        super().__init__(
            f"Request URL must contain exactly one 'signature' parameter, found {count}: {url}"
        )
        self.url = url
        self.count = count


class MalformedRepositoryLineError(BizAuthError):
    """Key repository line is not '<client> <key>'."""

    code = ErrorCode.MALFORMED_REPOSITORY_LINE

    def __init__(self, line: str, line_number: int) -> None:
        super().__init__(
            f"Line {line_number} must contain two fields separated by a space: {line!r}"
        )
        self.line = line
        self.line_number = line_number


class UnknownClientError(BizAuthError):
    """Client is not registered in the key repository."""

    code = ErrorCode.UNKNOWN_CLIENT

    def __init__(self, client: str) -> None:
        super().__init__(f"Unknown client: {client}")
        self.client = client


class MalformedSignedUrlError(BizAuthError):
    """Signed URL does not end with a '&signature=' parameter."""

    code = ErrorCode.MALFORMED_SIGNED_URL

    def __init__(self, url: str, reason: str = "cannot find '&signature='") -> None:
        super().__init__(f"Malformed signed URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class SignatureMismatchError(BizAuthError):
    """Attached signature differs from the recomputed one."""

    code = ErrorCode.SIGNATURE_MISMATCH

    def __init__(self, client: str, attached: str, computed: str) -> None:
        super().__init__(f"Attached signature {attached!r} does not match for client {client}")
        self.client = client
        self.attached = attached
        self.computed = computed


def error_response(
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    payload = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        payload["error"]["details"] = details
    return JSONResponse(payload, status_code=status_code)
