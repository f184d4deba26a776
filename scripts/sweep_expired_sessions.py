"""Delete every expired session across all tenants.

One-shot counterpart of the in-process sweeper, meant for cron:

    uv run python scripts/sweep_expired_sessions.py
"""

import asyncio
import sys
from pathlib import Path

from rich.console import Console

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from iam.dependencies.session import sweep_expired_sessions  # noqa: E402
from infrastructure.database.dependencies import close_database_connections  # noqa: E402
from infrastructure.logging import configure_logging  # noqa: E402

console = Console()


async def main() -> int:
    try:
        return await sweep_expired_sessions()
    finally:
        await close_database_connections()


if __name__ == "__main__":
    configure_logging()
    removed = asyncio.run(main())
    console.print(f"[green]✓[/green] Removed {removed} expired session(s)")
