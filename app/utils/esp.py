"""Email sending helpers."""

from __future__ import annotations

import asyncio
import base64
import logging
import os
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage as MIMEMessage

import httpx

from app.reports.errors import DeliveryError

logger = logging.getLogger(__name__)

DEFAULT_SENDER = "noreply@uber-eats-analytics.com"
RESEND_ENDPOINT = "https://api.resend.com/emails"


@dataclass(slots=True)
class EmailAttachment:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass(slots=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    attachments: list[EmailAttachment] = field(default_factory=list)


class EmailProvider:
    def __init__(self) -> None:
        self.provider = os.environ.get("ESP_PROVIDER", "log")
        self.sender = os.environ.get("EMAIL_FROM", DEFAULT_SENDER)
        self.resend_api_key = os.environ.get("RESEND_API_KEY")
        self.smtp_host = os.environ.get("SMTP_HOST", "smtp.gmail.com")
        self.smtp_port = int(os.environ.get("SMTP_PORT", "587"))
        self.smtp_user = os.environ.get("SMTP_USER")
        self.smtp_password = os.environ.get("SMTP_PASS")

    async def send(self, message: EmailMessage) -> None:
        """Deliver ``message``; any provider failure raises DeliveryError."""
        if self.provider == "resend" and self.resend_api_key:
            await self._send_resend(message)
        elif self.provider == "smtp":
            await asyncio.get_running_loop().run_in_executor(None, self._send_smtp, message)
        else:
            logger.info(
                "Email (log) → %s: %s (%d attachments)",
                message.to,
                message.subject,
                len(message.attachments),
            )

    async def _send_resend(self, message: EmailMessage) -> None:
        payload = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "attachments": [
                {
                    "filename": attachment.filename,
                    "content": base64.b64encode(attachment.content).decode("ascii"),
                }
                for attachment in message.attachments
            ],
        }
        headers = {"Authorization": f"Bearer {self.resend_api_key}"}
        try:
            async with httpx.AsyncClient(timeout=15.0) as client:
                response = await client.post(RESEND_ENDPOINT, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Resend rejected email to {message.to}: {exc}") from exc

    def _send_smtp(self, message: EmailMessage) -> None:
        mime = MIMEMessage()
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content("This report is best viewed in an HTML capable mail client.")
        mime.add_alternative(message.html, subtype="html")
        for attachment in message.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            mime.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP delivery to {message.to} failed: {exc}") from exc
