import html
import logging
from typing import Dict, Optional

from jobboard.core.config import settings
from jobboard.models import ContactSubmission
from .email_service import EmailService
from .exceptions import EmailDeliveryError, ServiceUnavailableError
from .store import translate_store_errors, utcnow

logger = logging.getLogger(__name__)

CONTACT_EMAIL_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #333;">New Contact Form Submission</h2>
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Email:</strong> {email}</p>
  <div style="margin-top: 20px;">
    <strong>Message:</strong>
    <p style="white-space: pre-wrap; background: #f5f5f5; padding: 15px; border-radius: 5px;">{message}</p>
  </div>
</div>
"""


class ContactService:
    """Contact form submissions: stored in the `store` collection and forwarded by email."""

    def __init__(self, db: object, email_service: EmailService, to_email: Optional[str] = None):
        self.db = db
        self.email_service = email_service
        self.to_email = to_email if to_email is not None else settings.CONTACT_TO_EMAIL

    async def save_contact_submission(self, name: str, email: str, message: str) -> Dict[str, object]:
        submission = ContactSubmission(name=name, email=email, message=message, timestamp=utcnow())
        async with translate_store_errors("save to database"):
            result = await self.db.store.insert_one(submission.model_dump(exclude={"id"}))
        return {"success": True, "id": str(result.inserted_id)}

    async def send_contact_form_email(self, name: str, from_email: str, message: str, to: Optional[str] = None):
        recipient = to or self.to_email or self.email_service.from_email
        if not recipient:
            raise ServiceUnavailableError("Email service not configured")

        text = f"New contact form submission:\n\nName: {name}\nEmail: {from_email}\n\nMessage:\n{message}"
        body = CONTACT_EMAIL_TEMPLATE.format(
            name=html.escape(name),
            email=html.escape(from_email),
            message=html.escape(message),
        )
        return await self.email_service.send_email(
            to=recipient,
            subject=f"New Contact Form Submission from {name}",
            text=text,
            html=body,
            reply_to=from_email,
        )

    async def submit(self, name: str, email: str, message: str) -> Dict[str, object]:
        """Store the submission, then try to forward it; the stored copy survives a failed send."""
        saved = await self.save_contact_submission(name, email, message)
        emailed = False
        if self.email_service.configured:
            try:
                await self.send_contact_form_email(name, email, message)
                emailed = True
            except (ServiceUnavailableError, EmailDeliveryError) as e:
                logger.warning(f"Contact submission {saved['id']} stored but not emailed: {e.message}")
        return {"success": True, "id": saved["id"], "emailed": emailed}
