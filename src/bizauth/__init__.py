"""
bizauth: Signed request-URL authentication for web APIs.

Clients sign the path and query of each request with a shared HMAC-SHA1
secret; the service recomputes the signature against its key repository
before processing the request.
"""

__version__ = "1.0.0"
