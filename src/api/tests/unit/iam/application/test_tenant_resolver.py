"""Unit tests for TenantResolver."""

from unittest.mock import MagicMock

import pytest

from iam.application.services import TenantResolver
from shared_kernel.middleware.tenant_context import TenantCandidate, TenantContext


@pytest.fixture
def probe():
    return MagicMock()


@pytest.fixture
def resolver(directory, probe):
    return TenantResolver(directory=directory, probe=probe)


class TestResolve:
    """Tests for resolving from the Host header."""

    @pytest.mark.asyncio
    async def test_resolves_tenant_host(self, resolver, tenant_a):
        """A tenant host with a port resolves to the tenant."""
        assert await resolver.resolve("acme.app.com:3000") == tenant_a

    @pytest.mark.asyncio
    @pytest.mark.parametrize("host", ["app.com", "localhost:3000", None])
    async def test_host_without_tenant(self, resolver, probe, host):
        """Hosts that carry no candidate resolve to None."""
        assert await resolver.resolve(host) is None
        probe.host_without_tenant.assert_called_once_with(host)

    @pytest.mark.asyncio
    async def test_unknown_subdomain(self, resolver, probe):
        """A well-formed but unknown subdomain resolves to None."""
        assert await resolver.resolve("initech.app.com") is None
        probe.candidate_unresolved.assert_called_once_with("initech")

    @pytest.mark.asyncio
    async def test_custom_loopback_hosts(self, directory):
        """Configured loopback aliases never resolve."""
        resolver = TenantResolver(directory=directory, loopback_hosts=["acme.app.com"])

        assert await resolver.resolve("acme.app.com") is None


class TestResolveCandidate:
    """Tests for upgrading a forwarded candidate."""

    @pytest.mark.asyncio
    async def test_upgrades_known_candidate(self, resolver, tenant_b):
        """A known candidate becomes a verified tenant."""
        tenant = await resolver.resolve_candidate(TenantCandidate(subdomain="globex"))

        assert tenant == tenant_b

    @pytest.mark.asyncio
    async def test_missing_candidate(self, resolver, probe):
        """No forwarded header resolves to None."""
        assert await resolver.resolve_candidate(None) is None
        probe.forwarded_candidate_missing.assert_called_once()

    def test_to_context(self, tenant_a):
        """A tenant is described by id, subdomain and name."""
        assert TenantResolver.to_context(tenant_a) == TenantContext(
            tenant_id=tenant_a.id.value, subdomain="acme", name="Acme Corp"
        )
