from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class ProfileData(BaseModel):
    first_name: str
    last_name: str
    gender: str
    country: str
    language: str
    resume_url: Optional[str] = None
    cover_letter_url: Optional[str] = None


class UserDocumentCreate(ProfileData):
    email: EmailStr


class SignUpRequest(ProfileData):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    user_id: str
    access_token: str
    token_type: str = "bearer"
