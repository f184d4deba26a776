"""Provision a tenant out of band.

Request handling never creates tenants; operators add them here:

    uv run python scripts/provision_tenant.py acme "Acme Corporation"
"""

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from iam.domain.aggregates import Tenant  # noqa: E402
from iam.infrastructure.tenant_repository import TenantRepository  # noqa: E402
from iam.ports.exceptions import DuplicateSubdomainError  # noqa: E402
from infrastructure.database.dependencies import (  # noqa: E402
    close_database_connections,
    get_session_factory,
)
from infrastructure.logging import configure_logging  # noqa: E402

console = Console()


async def provision(subdomain: str, name: str) -> Tenant:
    tenant = Tenant.create(subdomain=subdomain, name=name)
    factory = get_session_factory()
    try:
        async with factory() as session:
            async with session.begin():
                await TenantRepository(session=session).save(tenant)
    finally:
        await close_database_connections()
    return tenant


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("subdomain", help="Subdomain the tenant is reached on")
    parser.add_argument("name", help="Display name of the organization")
    args = parser.parse_args()

    name = args.name.strip()
    if not name:
        parser.error("name must not be empty")

    try:
        tenant = asyncio.run(provision(args.subdomain, name))
    except ValueError as e:
        parser.error(str(e))
    except DuplicateSubdomainError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1

    console.print(
        f"[green]✓[/green] Provisioned tenant {tenant.id} "
        f"at subdomain [bold]{tenant.subdomain}[/bold]"
    )
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
