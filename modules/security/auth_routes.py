# modules/security/auth_routes.py
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from config.settings import settings
from core.exceptions import UnauthenticatedError
from database.connection import get_db
from modules.security.deps import SESSION_USER_KEY, get_current_user
from modules.security.model import User
from modules.security.passwords import verify_password
from modules.security.schemas import CurrentUserOut, LoginIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _default_domain() -> str:
    return settings.DEFAULT_ADMIN_EMAIL.split("@", 1)[-1]


@router.post("/login", response_model=CurrentUserOut)
def do_login(payload: LoginIn, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip()
    # allow typing only the user part, the default domain is appended
    if "@" not in email:
        email = f"{email}@{_default_domain()}"

    user = db.query(User).filter(func.lower(User.email) == email.lower()).first()
    if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise UnauthenticatedError("Invalid email or password")

    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    request.session["email"] = user.email
    request.session["role"] = user.role.value
    logger.info("User %s logged in", user.email)
    return user


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"ok": True}


@router.get("/me", response_model=CurrentUserOut)
def me(user: User = Depends(get_current_user)):
    return user
