"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers within
the IAM bounded context, and keep the shared kernel independent of it.
"""

from pytest_archon import archrule


class TestIAMDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        Aggregates and value objects hold the tenancy rules; they must not
        know about SQL tables or sessions.
        """
        (
            archrule("domain_no_infrastructure")
            .match("iam.domain*")
            .should_not_import("iam.infrastructure*", "infrastructure*", "sqlalchemy*")
            .check("iam")
        )

    def test_domain_does_not_import_application(self):
        """Domain layer should not depend on application layer."""
        (
            archrule("domain_no_application")
            .match("iam.domain*")
            .should_not_import("iam.application*")
            .check("iam")
        )

    def test_domain_does_not_import_fastapi(self):
        """Domain layer should be framework-agnostic."""
        (
            archrule("domain_no_fastapi")
            .match("iam.domain*")
            .should_not_import("fastapi*", "starlette*")
            .check("iam")
        )


class TestIAMPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces, not implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("iam.ports*")
            .should_not_import("iam.infrastructure*", "infrastructure*")
            .check("iam")
        )

    def test_ports_does_not_import_application(self):
        """Ports are used by the application layer, not the other way around."""
        (
            archrule("ports_no_application")
            .match("iam.ports*")
            .should_not_import("iam.application*")
            .check("iam")
        )


class TestIAMApplicationLayerBoundaries:
    """Tests that the application layer has appropriate dependencies."""

    def test_application_does_not_import_infrastructure(self):
        """Application services depend on ports, not repositories.

        The session store and authentication gate only see the
        repository protocols and the tenant-scoped data access facade.
        """
        (
            archrule("application_no_infrastructure")
            .match("iam.application*")
            .should_not_import("iam.infrastructure*", "infrastructure*")
            .check("iam")
        )

    def test_application_does_not_import_presentation(self):
        """Application services know nothing about HTTP."""
        (
            archrule("application_no_presentation")
            .match("iam.application*")
            .should_not_import("iam.presentation*", "iam.dependencies*", "fastapi*")
            .check("iam")
        )


class TestIAMInfrastructureLayerBoundaries:
    """Tests that infrastructure has appropriate dependencies."""

    def test_infrastructure_does_not_import_application(self):
        """Repositories are used by application services, not vice versa."""
        (
            archrule("infrastructure_no_application")
            .match("iam.infrastructure*")
            .should_not_import("iam.application*")
            .check("iam")
        )


class TestSharedKernelBoundaries:
    """The shared kernel must not depend on any bounded context."""

    def test_shared_kernel_does_not_import_iam(self):
        """Tenant value objects and the edge middleware stand alone."""
        (
            archrule("shared_kernel_no_iam")
            .match("shared_kernel*")
            .should_not_import("iam*")
            .check("shared_kernel")
        )
