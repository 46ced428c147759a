# app/schemas/auth.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, constr

from app.schemas.user import UserOut


# ──────────────── Register ────────────────
class RegisterRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthPayload(BaseModel):
    token: str
    user: UserOut


# ──────────────── Token claims ────────────────
class TokenPayload(BaseModel):
    sub: str
    role: str
    exp: int | datetime
    jti: str
    iat: Optional[int | datetime] = None
    nbf: Optional[int | datetime] = None
    iss: Optional[str] = None
    aud: Optional[str] = None
