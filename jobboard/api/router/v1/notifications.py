from fastapi import APIRouter, Depends, status

from jobboard.api.dependencies import get_contact_service, get_current_user_id, get_email_service
from jobboard.schemas import ContactRequest, ContactResponse, SendEmailRequest, SendEmailResponse
from jobboard.services import ContactService, EmailService

notification_router = APIRouter()


@notification_router.post("/email/send", response_model=SendEmailResponse)
async def send_email(
    payload: SendEmailRequest,
    user_id: str = Depends(get_current_user_id),
    service: EmailService = Depends(get_email_service),
):
    return await service.send_email(
        to=payload.to,
        subject=payload.subject,
        text=payload.text,
        html=payload.html,
        from_email=payload.from_email,
    )


@notification_router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(payload: ContactRequest, service: ContactService = Depends(get_contact_service)):
    return await service.submit(payload.name, payload.email, payload.message)
