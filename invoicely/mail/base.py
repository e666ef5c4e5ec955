from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class Attachment(BaseModel):
    filename: str
    content: bytes
    content_type: str = "application/pdf"


class EmailMessage(BaseModel):
    to: str
    from_email: str
    subject: str
    html: str
    text: str = ""
    attachments: list[Attachment] = []


class EmailSender(ABC):
    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Deliver a message. Raises on delivery failure."""
        ...
