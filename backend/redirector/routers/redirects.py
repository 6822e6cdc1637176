from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from redirector.core.config import settings
from redirector.core.db import get_db
from redirector.services.resolver import resolve

# change REDIRECT_PREFIX to move redirects, e.g. /go/<name>
router = APIRouter(prefix=settings.REDIRECT_PREFIX, tags=["redirects"])


@router.get("/{name}")
def redirector(name: str, db: Session = Depends(get_db)):
    return RedirectResponse(resolve(db, name, settings.FALLBACK_URL), status_code=303)
