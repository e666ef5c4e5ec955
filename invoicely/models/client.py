from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Client(BaseModel):
    id: int | None = None
    uuid: str = ""
    name: str
    email: str
    address: str = ""
    phone: str = ""
    tax_id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
