"""
Email Service using Resend

Sends owner notifications when a moderator changes the status of a
submission. Without an API key, messages are logged instead of sent.
"""

import asyncio
import logging
from html import escape

import resend

from innohub.core.config import settings

logger = logging.getLogger(__name__)

resend.api_key = settings.resend_api_key


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent (or logged), False if the provider failed
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Resend's client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_status_changed(
    to_email: str,
    owner_name: str,
    kind_label: str,
    title: str,
    new_status: str,
    path: str,
    notes: str | None = None,
) -> bool:
    """
    Tell an owner that a moderator moved their submission to a new status.

    Args:
        to_email: Owner's email address
        owner_name: Owner's display name
        kind_label: Human name of the record kind ("project", "startup")
        title: Title or name of the record
        new_status: Status the record moved to
        path: Frontend path of the record, appended to ``settings.frontend_url``
        notes: Moderator feedback, if any
    """
    safe_owner_name = escape(owner_name)
    safe_title = escape(title)
    safe_status = escape(new_status)

    record_url = f"{settings.frontend_url}{path}"
    notes_block = ""
    if notes:
        notes_block = f"""
            <div class="info-box">
                <p><strong>Moderator notes:</strong></p>
                <p>{escape(notes)}</p>
            </div>
        """

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .header {{ color: #14532d; margin-bottom: 24px; }}
            .button {{ display: inline-block; background-color: #14532d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }}
            .info-box {{ background-color: #f3f4f6; padding: 16px; border-radius: 8px; margin: 16px 0; }}
            .footer {{ margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">Your {kind_label} was reviewed</h1>

            <p>Hello {safe_owner_name},</p>

            <p>Your {kind_label} <strong>{safe_title}</strong> is now <strong>{safe_status}</strong>.</p>
            {notes_block}
            <a href="{record_url}" class="button">View {kind_label}</a>

            <div class="footer">
                <p>InnoHub</p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"Your {kind_label} \"{safe_title}\" is now {safe_status}",
        html_content=html_content,
    )
