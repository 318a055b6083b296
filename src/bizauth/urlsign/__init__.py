"""Signed URL authentication: key generation, signing and verification."""

from bizauth.urlsign.authenticator import authenticate
from bizauth.urlsign.codec import decode_urlsafe_b64, encode_urlsafe_b64
from bizauth.urlsign.keygen import generate_key, generate_rsa_key
from bizauth.urlsign.repository import load_key_repository, load_key_repository_file
from bizauth.urlsign.signer import create_signature, parse_query, parse_url, sign_url
from bizauth.urlsign.validator import check_signed_url

__all__ = [
    "authenticate",
    "check_signed_url",
    "create_signature",
    "decode_urlsafe_b64",
    "encode_urlsafe_b64",
    "generate_key",
    "generate_rsa_key",
    "load_key_repository",
    "load_key_repository_file",
    "parse_query",
    "parse_url",
    "sign_url",
]
