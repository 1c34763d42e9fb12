"""
Email Service for the Alumni Portal
===================================
Plain SMTP delivery (aiosmtplib) for:
- Registration confirmation (auto-approved or pending)
- Temporary passwords from forgot-password
"""

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from app.core.config import settings
from app.core.logging_config import logger


class EmailService:
    """Async email service over SMTP"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.organization = settings.ORGANIZATION_NAME

    @property
    def is_configured(self) -> bool:
        """Check if SMTP credentials are present"""
        return bool(self.smtp_user and self.smtp_password)

    async def send_email(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        html_content: Optional[str] = None
    ) -> bool:
        """
        Send an email asynchronously.

        Returns True if successful, False otherwise.
        """
        if not self.is_configured:
            logger.warning("[Email] Email service not configured, skipping email send")
            return False

        try:
            message = MIMEMultipart("alternative")
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = to_email
            message["Subject"] = subject

            message.attach(MIMEText(text_content, "plain"))
            if html_content:
                message.attach(MIMEText(html_content, "html"))

            # Port 465 is implicit TLS, anything else upgrades with STARTTLS
            implicit_tls = self.use_tls and self.smtp_port == 465
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                use_tls=implicit_tls,
                start_tls=self.use_tls and not implicit_tls,
            )

            logger.info(f"[Email/SMTP] Successfully sent email to {to_email}: {subject}")
            return True

        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send email to {to_email}: {e}")
            return False

    async def send_registration_confirmation(self, to_email: str, name: str,
                                             auto_verified: bool) -> bool:
        if auto_verified:
            body = (
                "Thank you for registering with us. Your account has been automatically "
                "verified based on our records. You can now log in to your account."
            )
        else:
            body = (
                "Thank you for registering with us. Your registration is successful, and it "
                "is pending verification. We will notify you once your account is approved."
            )

        text_content = f"Dear {name},\n\n{body}\n\nBest regards,\n{self.organization}"
        return await self.send_email(to_email, "Registration Confirmation", text_content)

    async def send_temporary_password(self, to_email: str, temporary_password: str) -> bool:
        """Mail the password generated by forgot-password"""
        text_content = f"Your new temporary password is: {temporary_password}"
        return await self.send_email(to_email, "Password Reset", text_content)


# Singleton instance
email_service = EmailService()
