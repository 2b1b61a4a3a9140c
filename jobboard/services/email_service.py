# jobboard/services/email_service.py
from flask import current_app, render_template
from flask_mail import Message
from ..extensions import mail
from ..errors import ProviderError
import logging

log = logging.getLogger(__name__)

def send_email(*, to, subject, template, **ctx) -> None:
    """Send a plain-text email rendered from templates/email/<template>.

    Raises ProviderError with the provider's message when delivery fails.
    """
    recipients = [to] if isinstance(to, str) else list(to)
    body = render_template(f"email/{template}", **ctx)
    sender = current_app.config.get("MAIL_DEFAULT_SENDER")

    msg = Message(subject=subject, recipients=recipients, sender=sender, body=body)

    if current_app.config.get("MAIL_SUPPRESS_SEND"):
        log.info("[MAIL_SUPPRESS_SEND=1] would send: %s | %s", recipients, subject)
        return

    try:
        mail.send(msg)
    except Exception as e:
        log.exception("send_email failed: %s", e)
        raise ProviderError("Email provider error", detail=str(e)) from e
    log.info("Email sent to %s | subject=%s", recipients, subject)

def send_application_email(application: dict, job: dict) -> None:
    subject = f"New application: {job.get('title')} - {application.get('full_name')}"
    send_email(
        to=current_app.config["APPLICATION_EMAIL_TO"],
        subject=subject,
        template="application_notification.txt",
        app=application,
        job=job,
    )
