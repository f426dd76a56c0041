"""
Email Service

Sends reminder emails over SMTP when the user has email reminders enabled.
"""

import smtplib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from config import EmailConfig

logger = logging.getLogger(__name__)

def is_email_configured(email_config: EmailConfig) -> bool:
    return email_config.configured

def send_reminder_email(email_config: EmailConfig, to_name, to_email, subject, message):
    """
    Send one reminder email.

    Args:
        email_config (EmailConfig): SMTP settings
        to_name (str): Recipient display name
        to_email (str): Recipient address
        subject (str): Subject line
        message (str): Plain-text body

    Returns:
        bool: True if the email was sent, False otherwise
    """
    if not is_email_configured(email_config):
        logger.warning("Email not configured. Set SENDER_EMAIL and SENDER_PASSWORD environment variables.")
        return False

    body = f"""Hi {to_name},

{message}

---
This is an automated reminder from HealthMate. Please do not reply to this email.
"""

    mime = MIMEMultipart()
    mime["From"] = email_config.sender_email
    mime["To"] = to_email
    mime["Subject"] = subject
    mime.attach(MIMEText(body, "plain"))

    try:
        with smtplib.SMTP(email_config.smtp_server, email_config.smtp_port) as server:
            server.starttls()
            server.login(email_config.sender_email, email_config.sender_password)
            server.send_message(mime)

        logger.info(f"Reminder email sent to {to_email}")
        return True

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False

class EmailChannel:
    """Delivery channel: mail a fired reminder to the logged-in user"""

    def __init__(self, email_config: EmailConfig, settings_service, auth_service):
        self.email_config = email_config
        self.settings_service = settings_service
        self.auth_service = auth_service

    def send(self, reminder, notification) -> bool:
        if not self.settings_service.settings.email_notifications:
            return False

        user = self.auth_service.current_user
        if user is None:
            return False

        return send_reminder_email(
            self.email_config,
            to_name=user.name,
            to_email=user.email,
            subject=f"Reminder: {notification.title}",
            message=notification.body
        )
