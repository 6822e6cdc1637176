"""Startup sequence: connect, make sure the tables exist, seed the first account.

Every step either finishes or raises BootstrapError. Only bootstrap_or_exit
turns that into process termination.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from redirector.auth.passwords import hash_password
from redirector.core.config import Settings
from redirector.core.db import Base, is_already_exists
from redirector.core.retry import retry_call
from redirector.models import Account, Mapping
from redirector.services.errors import BootstrapError
from redirector.services.seed import ensure_default_admin

log = logging.getLogger("redirector.bootstrap")

Opener = Callable[["str | URL"], Engine]


def open_engine(url: str | URL) -> Engine:
    """Create an engine and prove the server answers."""
    engine = create_engine(url, pool_pre_ping=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return engine


def connect(settings: Settings, *, opener: Opener = open_engine) -> Engine:
    url = settings.connection_url()
    outcome = retry_call(
        lambda: opener(url),
        retries=settings.CONNECT_RETRIES,
        label="connect to the database",
        delay=settings.RETRY_DELAY_SECONDS,
    )
    if not outcome.succeeded:
        raise BootstrapError(
            "connect",
            f"Could not connect to the database after {outcome.attempts} attempts: {outcome.error!r}",
        ) from outcome.error

    log.info("Connected to the database (attempts=%d)", outcome.attempts)
    return outcome.value  # type: ignore[return-value]


def ensure_collection(engine: Engine, name: str, *, retries: int = 3, delay: float = 0.0) -> None:
    """Create table ``name``; an existing table counts as success.

    An existing table still gets any of its indexes that are missing, so a
    failure between CREATE TABLE and CREATE INDEX heals on the next try.
    """
    table = Base.metadata.tables.get(name)
    if table is None:
        raise BootstrapError("ensure_collection", f"Unknown collection {name!r}")

    def create() -> None:
        with engine.begin() as conn:
            table.create(bind=conn, checkfirst=False)

    outcome = retry_call(
        create,
        retries=retries,
        label=f"create collection {name!r}",
        delay=delay,
        is_benign=is_already_exists,
    )
    if not outcome.succeeded:
        raise BootstrapError(
            "ensure_collection",
            f"Could not create collection {name!r}: {outcome.error!r}",
        ) from outcome.error

    if outcome.benign:
        log.info("Collection '%s' already exists", name)
        try:
            with engine.begin() as conn:
                for index in table.indexes:
                    index.create(bind=conn, checkfirst=True)
        except SQLAlchemyError as exc:
            raise BootstrapError(
                "ensure_collection",
                f"Could not create indexes of {name!r}: {exc!r}",
            ) from exc
    else:
        log.info("Created collection %s", name)


async def prepare_database(
    settings: Settings,
    *,
    opener: Opener = open_engine,
    hasher: Callable[[str], str] = hash_password,
) -> Engine:
    engine = await asyncio.to_thread(connect, settings, opener=opener)

    try:
        # independent tables, no ordering between them; wait for both
        # before reporting a failure so nothing runs after dispose()
        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    ensure_collection,
                    engine,
                    name,
                    retries=settings.COLLECTION_RETRIES,
                    delay=settings.RETRY_DELAY_SECONDS,
                )
                for name in (Mapping.__tablename__, Account.__tablename__)
            ),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        await asyncio.to_thread(
            ensure_default_admin,
            engine,
            name=settings.DEFAULT_ADMIN_NAME,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            hasher=hasher,
        )
    except BootstrapError:
        engine.dispose()
        raise
    return engine


async def bootstrap_or_exit(settings: Settings, **kwargs) -> Engine:
    try:
        return await prepare_database(settings, **kwargs)
    except BootstrapError as exc:
        log.critical("%s: %s. Terminating process", exc.step, exc)
        sys.exit(1)
