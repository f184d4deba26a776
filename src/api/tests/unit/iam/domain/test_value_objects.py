"""Unit tests for IAM domain value objects."""

import pytest

from iam.domain.value_objects import (
    SessionId,
    Subdomain,
    TenantId,
    UserId,
    is_valid_email,
    normalize_email,
)


class TestIdentifiers:
    """Tests for ULID-based identifiers."""

    def test_generate_produces_unique_ids(self):
        """Generated ids should not collide."""
        assert TenantId.generate() != TenantId.generate()
        assert UserId.generate() != UserId.generate()
        assert SessionId.generate() != SessionId.generate()

    def test_from_string_round_trips_generated_value(self):
        """from_string should accept a generated ULID."""
        tenant_id = TenantId.generate()

        assert TenantId.from_string(tenant_id.value) == tenant_id

    def test_from_string_canonicalizes_case(self):
        """Lower-case ULIDs should be stored upper-cased."""
        user_id = UserId.generate()

        assert UserId.from_string(user_id.value.lower()) == user_id

    def test_from_string_rejects_garbage(self):
        """Non-ULID input should raise ValueError."""
        with pytest.raises(ValueError, match="Invalid TenantId"):
            TenantId.from_string("not-a-ulid")

    def test_str_returns_value(self):
        """str() should expose the raw value."""
        user_id = UserId.generate()
        assert str(user_id) == user_id.value


class TestSubdomain:
    """Tests for the Subdomain value object."""

    def test_normalizes_case_and_whitespace(self):
        """Subdomain should be trimmed and lower-cased on construction."""
        assert Subdomain("  AcMe ").value == "acme"

    def test_equal_after_normalization(self):
        """Differently written subdomains should compare equal."""
        assert Subdomain("ACME") == Subdomain("acme")

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_rejects_empty(self, raw):
        """Blank subdomains should raise ValueError."""
        with pytest.raises(ValueError):
            Subdomain(raw)

    @pytest.mark.parametrize(
        "raw", ["acme.evil", "acme:8080", "ac_me", "ac me", "acmé", "acme/x"]
    )
    def test_rejects_non_label_characters(self, raw):
        """Only letters, digits and hyphens form a subdomain label."""
        with pytest.raises(ValueError):
            Subdomain(raw)

    def test_allows_hyphens_and_digits(self):
        assert Subdomain("Acme-2").value == "acme-2"

    def test_is_immutable(self):
        """Subdomain should be frozen."""
        subdomain = Subdomain("acme")
        with pytest.raises(AttributeError):
            subdomain.value = "other"  # type: ignore[misc]


class TestEmail:
    """Tests for email helpers."""

    def test_normalize_trims_and_lowercases(self):
        """normalize_email should produce the stored form."""
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize(
        "email",
        ["alice@example.com", "a.b+c@mail.example.org", "x@y.z"],
    )
    def test_accepts_valid_shapes(self, email):
        """Addresses of the form local@domain.tld should be accepted."""
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["alice", "alice@example", "@example.com", "al ice@example.com", ""],
    )
    def test_rejects_invalid_shapes(self, email):
        """Malformed addresses should be rejected."""
        assert not is_valid_email(email)
