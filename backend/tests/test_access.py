"""Password gate unit tests."""

import pytest

from zogakzip.exceptions import ForbiddenError, UnauthorizedError
from zogakzip.services.access import ensure_public, verify_secret


class TestVerifySecret:

    def test_exact_match_passes(self):
        verify_secret("group", 1, "secret", "secret")

    def test_mismatch_raises(self):
        with pytest.raises(UnauthorizedError, match="Incorrect password"):
            verify_secret("group", 1, "wrong", "secret")

    def test_missing_secret_raises(self):
        with pytest.raises(UnauthorizedError):
            verify_secret("post", 7, None, "secret")

    def test_comparison_is_exact(self):
        """No trimming or case folding."""
        with pytest.raises(UnauthorizedError):
            verify_secret("comment", 3, "Secret", "secret")
        with pytest.raises(UnauthorizedError):
            verify_secret("comment", 3, "secret ", "secret")

    def test_error_context_names_resource(self):
        with pytest.raises(UnauthorizedError) as excinfo:
            verify_secret("post", 42, "x", "y")
        assert excinfo.value.context == {"resource": "post", "resource_id": "42"}


class TestEnsurePublic:

    def test_public_passes(self):
        ensure_public("group", 1, True)

    def test_private_raises(self):
        with pytest.raises(ForbiddenError, match="private"):
            ensure_public("group", 1, False)
