# modules/security/deps.py
from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.exceptions import UnauthenticatedError
from database.connection import get_db
from modules.security.model import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def session_user_id(session: dict | None) -> int | None:
    if not session:
        return None
    uid = session.get(SESSION_USER_KEY)
    return int(uid) if uid else None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Current user from the session cookie; 401 when not logged in.
    """
    uid = session_user_id(request.session)
    if not uid:
        raise UnauthenticatedError("LOGIN_REQUIRED")

    user = db.get(User, uid)
    if not user or not user.is_active:
        # stale session: the user was removed or disabled
        logger.info("Clearing stale session for user %s", uid)
        request.session.clear()
        raise UnauthenticatedError("LOGIN_REQUIRED")

    # keep session role in line with the DB
    if request.session.get("role") != user.role.value:
        request.session["role"] = user.role.value
    return user


def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    return user.id
