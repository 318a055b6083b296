"""URL-safe base64 encoding for keys and signatures."""

import base64
import binascii

from bizauth.common.errors import DecodeError

_TO_URLSAFE = str.maketrans("+/", "-_")
_FROM_URLSAFE = str.maketrans("-_", "+/")


def encode_urlsafe_b64(data: bytes) -> str:
    """
    Encode bytes as standard base64 with '+' and '/' replaced by '-' and '_'.

    Padding is kept, so the result can be placed in a URL without escaping
    and decoded by any standard base64 decoder once the alphabet is reversed.
    """
    return base64.b64encode(data).decode("ascii").translate(_TO_URLSAFE)


def decode_urlsafe_b64(text: str) -> bytes:
    """
    Decode text produced by encode_urlsafe_b64.

    Raises:
        DecodeError: If the text is not valid padded base64
    """
    standard = text.translate(_FROM_URLSAFE)
    try:
        return base64.b64decode(standard.encode("ascii"), validate=True)
    except UnicodeEncodeError as e:
        raise DecodeError(text, "non-ASCII character") from e
    except binascii.Error as e:
        raise DecodeError(text, str(e)) from e
