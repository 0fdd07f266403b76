"""Append-only audit log service. Never update or delete - immutable audit trail.

Writes are non-fatal: each record is inserted inside a SAVEPOINT on the caller's
transaction, so a failed insert rolls back only itself, is logged, and the
primary mutation still commits with the request.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.audit_log import ActionType, Audit
from app.services.lifecycle import utcnow

log = logging.getLogger("uvicorn.error")

# Column limits (match model)
_IP_LEN = 64
_DESCRIPTION_LEN = 10_000


def record(
    db: Session,
    user_id: int,
    action: ActionType,
    description: str,
    ip_address: str | None = None,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> Audit | None:
    """Append one audit record for `user_id`. Returns None when the write failed."""
    desc = (description or "")[:_DESCRIPTION_LEN].strip() or "-"
    ip = (ip_address or "").strip()[:_IP_LEN] or get_settings().audit_ip_sentinel

    entry = Audit(
        user_id=user_id,
        action=action,
        description=desc,
        ip_address=ip,
        timestamp=clock(),
    )
    try:
        with db.begin_nested():
            db.add(entry)
    except SQLAlchemyError:
        log.warning("Audit write failed for user_id=%s action=%s", user_id, action.value, exc_info=True)
        return None
    return entry


def list_for_user(db: Session, user_id: int) -> list[Audit]:
    return db.query(Audit).filter(Audit.user_id == user_id).order_by(Audit.id).all()
