from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SendEmailRequest(BaseModel):
    # Presence of to/subject/body is checked by EmailService so the error
    # carries the same message for API and internal callers.
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[str] = None
    from_email: Optional[str] = Field(None, alias="from")
    subject: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None


class SendEmailResponse(BaseModel):
    success: bool = True


class ContactRequest(BaseModel):
    name: str
    email: EmailStr
    message: str


class ContactResponse(BaseModel):
    success: bool = True
    id: str
    emailed: bool
