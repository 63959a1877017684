import logging
from typing import Any, Dict, Optional

import httpx

from jobboard.core.config import settings
from .exceptions import (
    EmailDeliveryError,
    InvalidArgumentError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


class EmailService:
    """Transactional email through the SendGrid v3 mail/send endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        api_url: Optional[str] = None,
    ):
        self.client = client
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.from_email = from_email if from_email is not None else settings.SENDGRID_FROM_EMAIL
        self.api_url = api_url or settings.SENDGRID_API_URL

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.from_email)

    def build_payload(
        self,
        to: str,
        from_email: str,
        subject: str,
        text: Optional[str],
        html: Optional[str],
        reply_to: Optional[str] = None,
    ) -> Dict[str, Any]:
        # SendGrid requires text/plain to precede text/html
        content = []
        if text:
            content.append({"type": "text/plain", "value": text})
        content.append({"type": "text/html", "value": html or text})

        payload: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": from_email},
            "subject": subject,
            "content": content,
        }
        if reply_to:
            payload["reply_to"] = {"email": reply_to}
        return payload

    async def send_email(
        self,
        to: Optional[str],
        subject: Optional[str],
        text: Optional[str] = None,
        html: Optional[str] = None,
        from_email: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> Dict[str, bool]:
        """
        Send one email. `html` defaults to `text` when omitted.

        Raises:
            ServiceUnavailableError: If SendGrid is not configured or cannot be reached
            InvalidArgumentError: If to, from, subject or both bodies are missing
            EmailDeliveryError: If SendGrid rejects the message; `details` holds its errors array
        """
        if not self.configured:
            logger.error("SendGrid not configured. Missing SENDGRID_API_KEY or SENDGRID_FROM_EMAIL")
            raise ServiceUnavailableError("Email service not configured")

        sender = from_email or self.from_email
        if not to or not sender or not subject or not (text or html):
            raise InvalidArgumentError(
                "Missing required fields: to, from, subject, and at least one of text or html"
            )

        payload = self.build_payload(to, sender, subject, text, html, reply_to=reply_to)
        try:
            response = await self.client.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.RequestError as e:
            logger.error(f"SendGrid request to {self.api_url} failed: {e}", exc_info=True)
            raise ServiceUnavailableError(
                f"Could not reach the email service at {self.api_url}. "
                "Make sure it is reachable from this server."
            ) from e

        if response.is_success:
            logger.info(f"Email sent successfully to {to}: {subject}")
            return {"success": True}

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"SendGrid returned HTTP {response.status_code} with a non-JSON body: {response.text[:200]}")
            raise ServiceUnavailableError(
                f"Unexpected response from the email service at {self.api_url} "
                f"(HTTP {response.status_code}). Check that SENDGRID_API_URL points to the mail/send endpoint."
            ) from e

        errors = body.get("errors") if isinstance(body, dict) else None
        logger.error(f"SendGrid error (HTTP {response.status_code}): {errors}")
        first_message = None
        if errors and isinstance(errors[0], dict):
            first_message = errors[0].get("message")
        raise EmailDeliveryError(
            f"Failed to send email: {first_message}" if first_message else None,
            details=errors,
            provider_status=response.status_code,
        )
