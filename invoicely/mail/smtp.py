from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage as MIMEMessage

from invoicely.mail.base import EmailMessage, EmailSender

logger = logging.getLogger(__name__)


def build_mime(message: EmailMessage) -> MIMEMessage:
    mime = MIMEMessage()
    mime["Subject"] = message.subject
    mime["From"] = message.from_email
    mime["To"] = message.to
    mime.set_content(message.text or "This message requires an HTML-capable email client.")
    mime.add_alternative(message.html, subtype="html")
    for attachment in message.attachments:
        maintype, _, subtype = attachment.content_type.partition("/")
        mime.add_attachment(
            attachment.content,
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=attachment.filename,
        )
    return mime


class SMTPEmailSender(EmailSender):
    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, message: EmailMessage) -> None:
        mime = build_mime(message)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(mime)
        logger.info("Email sent via SMTP to %s: %s", message.to, message.subject)
