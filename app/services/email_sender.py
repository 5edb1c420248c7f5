"""SMTP email sender service."""

from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.core.config import Config, get_config

logger = logging.getLogger(__name__)


class EmailSender:
    """Service for sending transactional emails via SMTP."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    def send_email(self, to_email: str, subject: str, body: str, is_html: bool = False) -> bool:
        if not self.config.SMTP_SERVER:
            logger.warning("email.smtp_not_configured", extra={"event": "email.smtp_not_configured"})
            return False

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = self.config.SMTP_FROM
            message["To"] = to_email
            message.attach(MIMEText(body, "html" if is_html else "plain"))

            with smtplib.SMTP(self.config.SMTP_SERVER, self.config.SMTP_PORT) as server:
                server.starttls()
                if self.config.SMTP_USERNAME:
                    server.login(self.config.SMTP_USERNAME, self.config.SMTP_PASSWORD or "")
                server.send_message(message)
            return True
        except (smtplib.SMTPException, OSError):
            logger.exception("email.send_failed", extra={"event": "email.send_failed", "to_email": to_email})
            return False


class ContractNotifier:
    """Tells a customer that a contract is waiting for their signature."""

    def __init__(self, sender: EmailSender | None = None, portal_base_url: str | None = None) -> None:
        self.sender = sender or EmailSender()
        self.portal_base_url = (portal_base_url or self.sender.config.PORTAL_BASE_URL).rstrip("/")

    def contract_sent(self, to_email: str, recipient_name: str, contract_id: str, title: str) -> bool:
        link = f"{self.portal_base_url}/portal/contracts/{contract_id}"
        body = (
            f"Hi {recipient_name},\n\n"
            f'The contract "{title}" is ready for your review and signature.\n\n'
            f"Open it in your portal: {link}\n\n"
            "Thanks,\nThe Collab team"
        )
        return self.sender.send_email(to_email, subject=f"Contract ready to sign: {title}", body=body)
