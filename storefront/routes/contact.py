"""Contact and newsletter form actions"""

import html
import logging
from textwrap import dedent

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..core.config import settings
from ..core.forms import ActionError, FormError, error_response, success_response, validate_form
from ..models.forms import ContactForm, NewsletterForm
from ..services.mailer import DeliveryError, NewsletterClient, ResendMailer
from ..services.turnstile import TurnstileVerifier
from .deps import client_ip, get_mailer, get_newsletter_client, get_turnstile_verifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forms"])


def render_contact_email(submission: ContactForm) -> str:
    """HTML body of the contact form notification"""
    fields = {
        "Name": f"{submission.first_name} {submission.last_name}",
        "Email": submission.email,
        "Phone": submission.phone_number,
        "Subject": submission.subject,
        "Message": submission.message,
    }
    items = "\n".join(
        f"        <li>{label}: {html.escape(value)}</li>" for label, value in fields.items()
    )
    return dedent(f"""\
    <div>
      <h1>New GLF Online Contact Form Submission</h1>
      <ul>
{items}
      </ul>
    </div>""")


@router.post("/contact")
async def contact(
    request: Request,
    verifier: TurnstileVerifier = Depends(get_turnstile_verifier),
    mailer: ResendMailer = Depends(get_mailer),
) -> Response:
    """Forward a contact form submission to the shop's inbox"""
    form = await request.form()

    try:
        submission = validate_form(ContactForm, form)

        if not await verifier.verify(submission.token, client_ip(request)):
            raise ActionError("Failed to verify token")

        if not settings.contact_email_to:
            raise ActionError("Contact form is not configured")

        try:
            await mailer.send(
                sender=settings.contact_email_from,
                to=settings.contact_email_to,
                subject=f"New GLF Online Contact Form Submission from {submission.first_name}",
                html=render_contact_email(submission),
            )
        except DeliveryError as e:
            raise ActionError(str(e)) from e
    except FormError as e:
        logger.info(f"Contact form rejected: {e}")
        return error_response(e)

    return success_response()


@router.post("/newsletter")
async def newsletter(
    request: Request,
    verifier: TurnstileVerifier = Depends(get_turnstile_verifier),
    client: NewsletterClient = Depends(get_newsletter_client),
) -> Response:
    """Sign a shopper up to the newsletter"""
    form = await request.form()

    try:
        signup = validate_form(NewsletterForm, form)

        if not await verifier.verify(signup.token, client_ip(request)):
            raise ActionError("Failed to verify token")

        try:
            await client.subscribe(
                email=signup.email,
                first_name=signup.first_name,
                last_name=signup.last_name,
                gender=signup.gender,
            )
        except DeliveryError as e:
            raise ActionError(str(e)) from e
    except FormError as e:
        logger.info(f"Newsletter signup rejected: {e}")
        return error_response(e)

    return success_response()
