from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel, EmailStr, Field


class UserProfile(BaseModel):
    """Profile document stored under the account id in the `users` collection."""

    id: Optional[str] = None
    email: EmailStr
    first_name: str
    last_name: str
    gender: str
    country: str
    language: str
    role: str = "user"
    resume_url: Optional[str] = None
    cover_letter_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Account(BaseModel):
    """Local email/password credentials; `id` is shared with the profile."""

    id: Optional[str] = None
    email: EmailStr
    password_hash: str
    created_at: Optional[datetime] = None

    @staticmethod
    def generate_hash(password: str) -> str:
        """Generate a hashed password using bcrypt."""
        salt = bcrypt.gensalt(8)
        return bcrypt.hashpw(password.encode(), salt).decode()

    def valid_password(self, password: str) -> bool:
        """Verify if the provided password matches the stored hash."""
        if not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode(), self.password_hash.encode())

    def generate_jwt(self, secret: str, expire_minutes: int) -> str:
        expiration = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
        payload = {
            "sub": self.id,
            "email": self.email,
            "exp": int(expiration.timestamp()),
        }
        return jwt.encode(payload, secret, algorithm="HS256")


class ContactSubmission(BaseModel):
    id: Optional[str] = None
    name: str
    email: EmailStr
    message: str
    timestamp: datetime
    status: str = "new"
    type: str = "contact_form"
