# modules/security/passwords.py
from __future__ import annotations
from typing import Optional

from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password: str) -> str:
    """PBKDF2-SHA256 hash (werkzeug)"""
    return generate_password_hash(password or "", method="pbkdf2:sha256", salt_length=16)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # unknown hash format
        return False
