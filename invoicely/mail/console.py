import logging

from invoicely.mail.base import EmailMessage, EmailSender

logger = logging.getLogger(__name__)


class ConsoleEmailSender(EmailSender):
    """Logs messages instead of delivering them. Default for development."""

    def __init__(self) -> None:
        self.outbox: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.outbox.append(message)
        logger.info(
            "Email (console) to=%s subject=%r attachments=%d",
            message.to,
            message.subject,
            len(message.attachments),
        )
        logger.debug("Email text body:\n%s", message.text)
