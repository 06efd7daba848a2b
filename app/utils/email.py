"""
Email Utility

Helper functions for sending emails.

Backends (settings.EMAIL_BACKEND):
- smtp: SMTP server from config
- resend: Resend HTTP API
- console: log the message instead of sending (local development)

Every send raises EmailDeliveryError on failure so callers can report it.
"""

import asyncio
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List
import logging

import httpx

from app.core.config import settings
from app.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


# ============================================================
# Backends
# ============================================================

def _send_smtp(recipients: List[str], subject: str, html: str, text: str) -> None:
    if not settings.SMTP_SERVER or not settings.SMTP_EMAIL:
        raise EmailDeliveryError("SMTP settings not configured")

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_EMAIL
    msg["To"] = ", ".join(recipients)

    # Plain part first: clients show the last alternative they support
    msg.attach(MIMEText(text, "plain"))
    msg.attach(MIMEText(html, "html"))

    port = int(settings.SMTP_PORT) if settings.SMTP_PORT else 587

    try:
        with smtplib.SMTP(settings.SMTP_SERVER, port, timeout=10) as server:
            server.starttls()
            if settings.SMTP_PASSWORD:
                server.login(settings.SMTP_EMAIL, settings.SMTP_PASSWORD)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailDeliveryError(f"SMTP delivery failed: {e}", cause=e) from e


def _resend_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=10.0)


async def _send_resend(recipients: List[str], subject: str, html: str) -> None:
    if not settings.RESEND_API_KEY:
        raise EmailDeliveryError("RESEND_API_KEY is not configured")

    payload = {
        "from": settings.EMAIL_FROM,
        "to": recipients,
        "subject": subject,
        "html": html,
    }

    try:
        async with _resend_client() as client:
            response = await client.post(
                settings.RESEND_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
            )
    except httpx.HTTPError as e:
        raise EmailDeliveryError(f"Resend request failed: {e}", cause=e) from e

    if response.status_code >= 400:
        raise EmailDeliveryError(
            f"Resend API error {response.status_code}: {response.text[:300]}"
        )


async def send_email(
    recipients: List[str],
    subject: str,
    html: str,
    text: str,
) -> None:
    """
    Send an email through the configured backend.

    Args:
        recipients: List of email addresses
        subject: Email subject
        html: HTML body
        text: Plain-text body

    Raises:
        EmailDeliveryError: If the backend is unconfigured or delivery fails
    """
    backend = settings.EMAIL_BACKEND

    if backend == "console":
        logger.warning(f"Console email: To={recipients}, Subject={subject}\n{text}")
        return

    if backend == "resend":
        await _send_resend(recipients, subject, html)
    else:
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(_send_smtp, recipients, subject, html, text)

    logger.info(f"Email sent to {recipients} via {backend}")


# ============================================================
# Password reset code
# ============================================================

def render_password_reset_code(code: str, expires_in_minutes: int) -> tuple:
    """Return (subject, html, text) for a reset code email."""
    name = settings.PROJECT_NAME
    subject = f"Your Password Reset Code - {name}"

    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: linear-gradient(135deg, #10b981 0%, #059669 100%); padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
        <h1 style="color: white; margin: 0; font-size: 28px;">{name}</h1>
    </div>

    <div style="background: #ffffff; padding: 40px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 10px 10px;">
        <h2 style="color: #1f2937; margin-top: 0;">Reset Your Password</h2>

        <p style="color: #4b5563; font-size: 16px;">
        We received a request to reset the password for your {name} account.
        Enter the code below to continue:
        </p>

        <div style="margin: 28px 0; padding: 20px; text-align: center; background: #f3f4f6; border: 2px dashed #10b981; border-radius: 10px;">
        <div style="font-size: 36px; font-weight: 700; letter-spacing: 10px; color: #059669; font-family: 'Courier New', Courier, monospace;">
            {code}
        </div>
        </div>

        <p style="color: #6b7280; font-size: 14px;">
        This code expires in <strong>{expires_in_minutes} minutes</strong>.
        </p>

        <div style="margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
        <p style="color: #9ca3af; font-size: 13px; margin: 0;">
            If you didn't request a password reset, you can safely ignore this email.
            Your password will remain unchanged.
        </p>
        </div>
    </div>
    </body>
    </html>
    """

    text = f"""
    {name} - Password Reset Request

    Your password reset code is: {code}

    This code will expire in {expires_in_minutes} minutes.

    If you did not request this password reset, please ignore this email.
    Your password will remain unchanged.
    """

    return subject, html, text


async def send_password_reset_code(email: str, code: str, expires_in_minutes: int) -> None:
    """
    Send a password reset code email.

    Args:
        email: Recipient address
        code: 6-digit reset code
        expires_in_minutes: Code expiration time in minutes

    Raises:
        EmailDeliveryError: If the email could not be sent
    """
    subject, html, text = render_password_reset_code(code, expires_in_minutes)
    await send_email([email], subject, html, text)
