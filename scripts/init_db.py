"""Create the tasks schema from scripts/init_db.sql.

Usage:
    python -m scripts.init_db [path/to/schema.sql]
If the path is omitted, DB_INIT_FILE_PATH (default scripts/init_db.sql) is used.
Requires Postgres reachable through DATABASE_URL or the POSTGRES_* settings.
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

import task_manager.infrastructure.persistence.database as database
from task_manager.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Apply the schema file in one transaction, then close the pool."""
    setup_logging()
    path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        count = await database.init_schema(path)
    except FileNotFoundError as e:
        print(f"Schema file not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (SQLAlchemyError, OSError) as e:
        print(f"Schema initialization failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()
    print(f"Applied {count} statements")


if __name__ == "__main__":
    asyncio.run(main())
