# modules/security/schemas.py
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from modules.security.model import UserRole


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1, description="email, or the part before @")
    password: str = Field(..., min_length=1)


class CurrentUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    # plain str: the bootstrap admin lives on a .local domain
    email: str
    full_name: Optional[str] = None
    role: UserRole = UserRole.USER
