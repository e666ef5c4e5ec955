from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel

from invoicely.constants import DEFAULT_INVOICE_PREFIX, DEFAULT_NEXT_INVOICE_NUMBER, DEFAULT_PRIMARY_COLOR

_IFSC_RE = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")
_BANK_PREFIX_RE = re.compile(r"^[A-Z]{4}")


class Company(BaseModel):
    id: int | None = None
    uuid: str = ""
    company_name: str
    email: str
    phone: str = ""
    address: str = ""
    tax_id: str = ""
    logo: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    invoice_prefix: str = DEFAULT_INVOICE_PREFIX
    next_invoice_number: int = DEFAULT_NEXT_INVOICE_NUMBER
    bank_name: str = ""
    account_number: str = ""
    routing_code: str = ""
    swift_code: str = ""
    is_primary: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def has_bank_details(self) -> bool:
        return bool(self.bank_name or self.account_number or self.routing_code or self.swift_code)

    @property
    def routing_code_label(self) -> str:
        code = self.routing_code
        if len(code) == 11 and _IFSC_RE.match(code):
            return "IFSC Code"
        if 8 <= len(code) <= 11 and _BANK_PREFIX_RE.match(code):
            return "IFSC Code"
        return "Routing Code"
