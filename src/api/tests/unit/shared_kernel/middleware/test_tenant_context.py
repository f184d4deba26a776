"""Unit tests for host parsing and the tenant value objects."""

import pytest

from shared_kernel.middleware.tenant_context import (
    TenantCandidate,
    TenantContext,
    extract_subdomain,
)


class TestExtractSubdomain:
    """Tests for extract_subdomain."""

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("acme.app.com", "acme"),
            ("acme.app.com:3000", "acme"),
            ("ACME.App.Com", "acme"),
            ("a.b.c.d", "a"),
            ("app.com", None),
            ("localhost", None),
            ("localhost:3000", None),
            ("127.0.0.1:8000", None),
            ("", None),
            (None, None),
        ],
    )
    def test_examples(self, host, expected):
        """Hosts with three or more labels yield the first label."""
        assert extract_subdomain(host) == expected

    def test_custom_loopback_hosts(self):
        """Configured loopback aliases never carry a tenant."""
        assert extract_subdomain("dev.local.test", ["dev.local.test"]) is None
        assert extract_subdomain("acme.local.test", ["dev.local.test"]) == "acme"

    def test_empty_first_label(self):
        """A host starting with a dot carries no tenant."""
        assert extract_subdomain(".app.com") is None


class TestTenantValueObjects:
    """Tests for TenantCandidate and TenantContext."""

    def test_candidate_is_not_a_context(self):
        """An unverified candidate is a distinct type from a verified tenant."""
        candidate = TenantCandidate(subdomain="acme")

        assert not isinstance(candidate, TenantContext)

    def test_context_is_immutable(self):
        """TenantContext should be a frozen dataclass."""
        context = TenantContext(tenant_id="t1", subdomain="acme", name="Acme")

        with pytest.raises(AttributeError):
            context.tenant_id = "t2"  # type: ignore[misc]
