# modules/security/bootstrap.py
import logging

from config.settings import settings
from database.connection import SessionLocal
from modules.security.model import User, UserRole
from modules.security.passwords import hash_password

logger = logging.getLogger(__name__)


def ensure_default_admin() -> User:
    """
    Create the default admin from settings if no user with that email exists.
    """
    email = settings.DEFAULT_ADMIN_EMAIL.lower()
    with SessionLocal() as db:
        admin = db.query(User).filter(User.email == email).first()
        if admin:
            return admin

        admin = User(
            email=email,
            full_name=settings.DEFAULT_ADMIN_NAME,
            password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("Created default admin %s", email)
        return admin
