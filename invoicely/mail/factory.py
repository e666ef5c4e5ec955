import logging

from invoicely.mail.base import EmailSender
from invoicely.settings import settings

logger = logging.getLogger(__name__)


def get_email_sender() -> EmailSender:
    backend = settings.email_backend

    if backend == "console":
        from invoicely.mail.console import ConsoleEmailSender

        logger.info("Using email backend: console")
        return ConsoleEmailSender()

    if backend == "smtp":
        from invoicely.mail.smtp import SMTPEmailSender

        logger.info("Using email backend: smtp host=%s port=%s", settings.smtp_host, settings.smtp_port)
        return SMTPEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )

    raise ValueError(f"Unsupported email backend: {backend}")
