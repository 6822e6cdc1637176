"""Prepare the database without starting the web app.

Connects (with retries), creates the mapping and auth tables if missing and
seeds the default account on an empty deployment.

Exit code 0 when the database is ready, 1 on a fatal bootstrap failure.

Env: DB_HOST / DB_PORT / DB_USER / DB_PASSWORD or DATABASE_URL, CI, DEBUG
"""

from __future__ import annotations

import asyncio
import logging

from redirector.core.config import settings
from redirector.core.log import configure_logging
from redirector.services.bootstrap import bootstrap_or_exit

log = logging.getLogger("redirector.scripts.bootstrap_db")


def main() -> int:
    configure_logging(settings.LOG_LEVEL)
    engine = asyncio.run(bootstrap_or_exit(settings))
    engine.dispose()
    log.info("Database ready")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
