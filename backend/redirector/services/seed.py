from __future__ import annotations

import logging
from typing import Callable
from uuid import uuid4

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from redirector.auth.passwords import hash_password
from redirector.core.permissions import SEED_PERMISSION
from redirector.models import Account
from redirector.services.errors import BootstrapError

log = logging.getLogger("redirector.seed")


def ensure_default_admin(
    engine: Engine,
    *,
    name: str = "admin",
    password: str = "pass",
    hasher: Callable[[str], str] = hash_password,
) -> Account | None:
    """Create the seed account when the auth table is empty.

    Returns the created account, or None when nothing was seeded. A failed
    count means "don't seed"; a failed hash or insert raises BootstrapError.
    """
    with Session(engine, expire_on_commit=False) as db:
        try:
            count = db.scalar(select(func.count()).select_from(Account))
        except SQLAlchemyError as exc:
            log.warning("Could not count auths, skipping default auth: %s", exc)
            return None

        if count != 0:
            return None

        try:
            password_hash = hasher(password)
        except Exception as exc:
            raise BootstrapError("seed", f"Could not hash. {exc!r}") from exc

        account = Account(
            id=str(uuid4()),
            name=name,
            password_hash=password_hash,
            permission=SEED_PERMISSION.encode(),
        )
        db.add(account)
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise BootstrapError("seed", f"Could not create default user. {exc!r}") from exc

        log.info("No auth found, created new auth name=%s permission=%s", name, account.permission)
        return account
