from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from redirector.models import Mapping

log = logging.getLogger("redirector.resolver")


def resolve(db: Session, name: str, fallback: str) -> str:
    """Target URL stored for ``name``, or ``fallback``. Never raises."""
    try:
        target = db.scalars(
            select(Mapping.target_url).where(Mapping.name == name).limit(1)
        ).first()
    except Exception as exc:
        log.warning("Lookup of %r failed, using fallback: %s", name, exc)
        return fallback

    if target is None:
        return fallback
    return target
