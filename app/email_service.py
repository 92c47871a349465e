"""
Email Service
Sends notification emails through SMTP when configured, otherwise through Resend
"""

import logging
import smtplib
import ssl
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import (
    ADMIN_EMAIL,
    EMAIL_FROM_ADDRESS,
    RESEND_API_KEY,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USER,
)
from .email_templates import booking_created_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


def smtp_configured() -> bool:
    return bool(SMTP_USER and SMTP_PASSWORD)


def send_via_smtp(
    to: Union[str, list[str]],
    subject: str,
    html_content: str,
) -> dict:
    """Send email via the configured SMTP server"""
    sender = f"eBhangar Notifications <{SMTP_USER}>"

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to if isinstance(to, str) else ", ".join(to)
    msg.attach(MIMEText(html_content, "html"))

    recipients = [to] if isinstance(to, str) else to

    try:
        # Port 465 uses implicit TLS, everything else upgrades with STARTTLS
        context = ssl.create_default_context()
        if SMTP_PORT == 465:
            server = smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, context=context, timeout=30)
        else:
            server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=30)

        with server:
            if SMTP_PORT != 465:
                server.starttls(context=context)
            server.login(SMTP_USER, SMTP_PASSWORD)
            server.sendmail(SMTP_USER, recipients, msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"❌ SMTP send failed via {SMTP_HOST}: {e}")
        raise

    logger.info(f"✅ SMTP email sent successfully via {SMTP_HOST}")
    return {"id": f"smtp-{datetime.utcnow().timestamp()}", "success": True}


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    result = mjml_to_html(mjml_content)
    # mjml_to_html returns a dict with "html" and "errors" keys
    if result.get("errors"):
        logger.warning(f"MJML compilation warnings: {result['errors']}")
    return result.get("html", "")


def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> Optional[dict]:
    """
    Send an email using SMTP (if configured) or Resend (fallback)

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address for Resend

    Returns:
        Send response dict, or None when no transport is configured
    """
    if not smtp_configured() and not RESEND_API_KEY:
        logger.info(f"📭 No email transport configured - skipped '{subject}' to {to}")
        return None

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    if smtp_configured():
        logger.info(f"📧 Sending email via SMTP to: {to}")
        return send_via_smtp(recipients, subject, html_content)

    logger.info(f"📧 Sending email via Resend to: {to}")
    response = resend.Emails.send(
        {
            "from": from_address or EMAIL_FROM_ADDRESS,
            "to": recipients,
            "subject": subject,
            "html": html_content,
        }
    )
    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


def send_booking_created_notification(summary: dict) -> Optional[dict]:
    """Tell the admin a new booking is waiting for a vendor"""
    return send_email(
        to=ADMIN_EMAIL,
        subject=f"🔔 New Booking: {summary['customer_name']} - ₹{summary['total_value']}",
        mjml_content=booking_created_template(summary),
    )
