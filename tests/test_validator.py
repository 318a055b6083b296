"""Tests for signed URL structural checks."""

import pytest

from bizauth.common.errors import (
    MalformedQueryError,
    MalformedUrlError,
    MissingOrDuplicateClientError,
    MissingOrDuplicateSignatureError,
)
from bizauth.urlsign.validator import check_signed_url
from tests.conftest import MAPS_SIGNATURE, MAPS_SIGNED_URL


class TestCheckSignedUrl:
    """Test check_signed_url."""

    def test_valid(self):
        """Signed URL passes and returns its parameters."""
        url, params = check_signed_url(MAPS_SIGNED_URL)

        assert url.netloc == "maps.googleapis.com"
        assert params["client"] == ["clientID"]
        assert params["signature"] == [MAPS_SIGNATURE]
        assert params["address"] == ["New York"]

    def test_missing_client(self):
        """URL without client fails."""
        with pytest.raises(MissingOrDuplicateClientError) as exc_info:
            check_signed_url("http://company.com?signature=xxx")

        assert exc_info.value.count == 0

    def test_missing_signature(self):
        """URL without signature fails."""
        with pytest.raises(MissingOrDuplicateSignatureError):
            check_signed_url("http://company.com?client=xxx")

    def test_duplicate_client(self):
        """URL with two clients fails."""
        with pytest.raises(MissingOrDuplicateClientError) as exc_info:
            check_signed_url("http://company.com?client=a&client=b&signature=xxx")

        assert exc_info.value.count == 2

    def test_duplicate_signature(self):
        """URL with two signatures fails."""
        with pytest.raises(MissingOrDuplicateSignatureError):
            check_signed_url("http://company.com?client=a&signature=x&signature=y")

    def test_malformed_url(self):
        """Unparsable URL fails."""
        with pytest.raises(MalformedUrlError):
            check_signed_url("http://[::1?client=a&signature=x")

    def test_malformed_query(self):
        """Unparsable query fails."""
        with pytest.raises(MalformedQueryError):
            check_signed_url("http://company.com?client=a&signature=%G0")
