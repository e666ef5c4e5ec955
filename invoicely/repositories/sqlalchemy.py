from __future__ import annotations

from datetime import datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from invoicely.constants import UTC
from invoicely.models import decimal_to_str, parse_decimal
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import DiscountType, Invoice, InvoiceStatus, InvoiceTemplate, LineItem
from invoicely.repositories.base import ClientRepository, CompanyRepository, InvoiceRepository


def _now() -> datetime:
    return datetime.now(UTC)


def _in_clause(prefix: str, values: list) -> tuple[str, dict]:
    placeholders = ", ".join(f":{prefix}{i}" for i in range(len(values)))
    params = {f"{prefix}{i}": value for i, value in enumerate(values)}
    return placeholders, params


class SQLAlchemyClientRepository(ClientRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, client: Client) -> Client:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO clients (uuid, name, email, address, phone, tax_id, created_at, updated_at) "
                "VALUES (:uuid, :name, :email, :address, :phone, :tax_id, :created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "name": client.name,
                "email": client.email,
                "address": client.address,
                "phone": client.phone,
                "tax_id": client.tax_id,
                "created_at": now,
                "updated_at": now,
            },
        )
        client_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(client_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve client after create (id={client_id})")
        return created

    @staticmethod
    def _build_client(row: RowMapping) -> Client:
        return Client(
            id=row["id"],
            uuid=row["uuid"],
            name=row["name"],
            email=row["email"],
            address=row["address"] or "",
            phone=row["phone"] or "",
            tax_id=row["tax_id"] or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def get_by_id(self, client_id: int) -> Client | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM clients WHERE id = :id AND deleted_at IS NULL"),
                {"id": client_id},
            )
            .mappings()
            .fetchone()
        )
        return self._build_client(row) if row else None

    def get_by_uuid(self, uuid: str) -> Client | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM clients WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        return self._build_client(row) if row else None

    def list_all(self) -> list[Client]:
        rows = (
            self.conn.execute(text("SELECT * FROM clients WHERE deleted_at IS NULL ORDER BY name"))
            .mappings()
            .fetchall()
        )
        return [self._build_client(row) for row in rows]

    def update(self, client: Client) -> Client:
        if client.id is None:
            raise ValueError("Cannot update client without an id")
        self.conn.execute(
            text(
                "UPDATE clients SET name = :name, email = :email, address = :address, "
                "phone = :phone, tax_id = :tax_id, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "name": client.name,
                "email": client.email,
                "address": client.address,
                "phone": client.phone,
                "tax_id": client.tax_id,
                "updated_at": _now(),
                "id": client.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(client.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve client after update (id={client.id})")
        return result

    def delete(self, client_id: int) -> None:
        self.conn.execute(
            text("UPDATE clients SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": client_id},
        )
        self.conn.commit()


_COMPANY_FIELDS = (
    "company_name",
    "email",
    "phone",
    "address",
    "tax_id",
    "logo",
    "primary_color",
    "invoice_prefix",
    "next_invoice_number",
    "bank_name",
    "account_number",
    "routing_code",
    "swift_code",
)


class SQLAlchemyCompanyRepository(CompanyRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, company: Company) -> Company:
        now = _now()
        columns = ", ".join(_COMPANY_FIELDS)
        values = ", ".join(f":{name}" for name in _COMPANY_FIELDS)
        params = {name: getattr(company, name) for name in _COMPANY_FIELDS}
        params.update(
            {
                "uuid": str(ULID()),
                "is_primary": int(company.is_primary),
                "created_at": now,
                "updated_at": now,
            }
        )
        result = self.conn.execute(
            text(
                f"INSERT INTO companies (uuid, {columns}, is_primary, created_at, updated_at) "
                f"VALUES (:uuid, {values}, :is_primary, :created_at, :updated_at)"
            ),
            params,
        )
        company_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(company_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve company after create (id={company_id})")
        return created

    @staticmethod
    def _build_company(row: RowMapping) -> Company:
        return Company(
            id=row["id"],
            uuid=row["uuid"],
            company_name=row["company_name"],
            email=row["email"],
            phone=row["phone"] or "",
            address=row["address"] or "",
            tax_id=row["tax_id"] or "",
            logo=row["logo"] or "",
            primary_color=row["primary_color"],
            invoice_prefix=row["invoice_prefix"],
            next_invoice_number=row["next_invoice_number"],
            bank_name=row["bank_name"] or "",
            account_number=row["account_number"] or "",
            routing_code=row["routing_code"] or "",
            swift_code=row["swift_code"] or "",
            is_primary=bool(row["is_primary"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _fetch_one(self, where: str, params: dict) -> Company | None:
        row = (
            self.conn.execute(
                text(f"SELECT * FROM companies WHERE {where} AND deleted_at IS NULL"),
                params,
            )
            .mappings()
            .fetchone()
        )
        return self._build_company(row) if row else None

    def get_by_id(self, company_id: int) -> Company | None:
        return self._fetch_one("id = :id", {"id": company_id})

    def get_by_uuid(self, uuid: str) -> Company | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def get_primary(self) -> Company | None:
        return self._fetch_one("is_primary = 1", {})

    def list_all(self) -> list[Company]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM companies WHERE deleted_at IS NULL ORDER BY is_primary DESC, company_name")
            )
            .mappings()
            .fetchall()
        )
        return [self._build_company(row) for row in rows]

    def update(self, company: Company) -> Company:
        if company.id is None:
            raise ValueError("Cannot update company without an id")
        assignments = ", ".join(f"{name} = :{name}" for name in _COMPANY_FIELDS)
        params = {name: getattr(company, name) for name in _COMPANY_FIELDS}
        params.update({"updated_at": _now(), "id": company.id})
        self.conn.execute(
            text(f"UPDATE companies SET {assignments}, updated_at = :updated_at WHERE id = :id"),
            params,
        )
        self.conn.commit()
        result = self.get_by_id(company.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve company after update (id={company.id})")
        return result

    def set_primary(self, company_id: int) -> None:
        self.conn.execute(text("UPDATE companies SET is_primary = 0 WHERE is_primary = 1"))
        self.conn.execute(
            text("UPDATE companies SET is_primary = 1, updated_at = :updated_at WHERE id = :id"),
            {"updated_at": _now(), "id": company_id},
        )
        self.conn.commit()

    def increment_invoice_number(self, company_id: int) -> int:
        """Reserve the company's next invoice number and return it."""
        current = self.conn.execute(
            text("SELECT next_invoice_number FROM companies WHERE id = :id"),
            {"id": company_id},
        ).scalar()
        if current is None:
            raise ValueError(f"Company not found (id={company_id})")
        self.conn.execute(
            text("UPDATE companies SET next_invoice_number = :next, updated_at = :updated_at WHERE id = :id"),
            {"next": current + 1, "updated_at": _now(), "id": company_id},
        )
        self.conn.commit()
        return current

    def delete(self, company_id: int) -> None:
        self.conn.execute(
            text("UPDATE companies SET deleted_at = :deleted_at, is_primary = 0 WHERE id = :id"),
            {"deleted_at": _now(), "id": company_id},
        )
        self.conn.commit()


class SQLAlchemyInvoiceRepository(InvoiceRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def _insert_items(self, invoice_id: int, items: list[LineItem]) -> None:
        for i, item in enumerate(items):
            self.conn.execute(
                text(
                    "INSERT INTO line_items (invoice_id, description, quantity, unit_price, "
                    "discount, discount_type, tax_rate, sort_order) "
                    "VALUES (:invoice_id, :description, :quantity, :unit_price, "
                    ":discount, :discount_type, :tax_rate, :sort_order)"
                ),
                {
                    "invoice_id": invoice_id,
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": decimal_to_str(item.unit_price),
                    "discount": decimal_to_str(item.discount),
                    "discount_type": item.discount_type.value,
                    "tax_rate": decimal_to_str(item.tax_rate),
                    "sort_order": i,
                },
            )

    def create(self, invoice: Invoice) -> Invoice:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO invoices (uuid, invoice_number, client_id, company_id, issue_date, due_date, "
                "currency, status, template, notes, payment_amount, created_at, updated_at) "
                "VALUES (:uuid, :invoice_number, :client_id, :company_id, :issue_date, :due_date, "
                ":currency, :status, :template, :notes, :payment_amount, :created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "invoice_number": invoice.invoice_number,
                "client_id": invoice.client_id,
                "company_id": invoice.company_id,
                "issue_date": invoice.issue_date.isoformat(),
                "due_date": invoice.due_date.isoformat(),
                "currency": invoice.currency,
                "status": invoice.status.value,
                "template": invoice.template.value,
                "notes": invoice.notes,
                "payment_amount": (
                    decimal_to_str(invoice.payment_amount) if invoice.payment_amount is not None else None
                ),
                "created_at": now,
                "updated_at": now,
            },
        )
        invoice_id = result.lastrowid
        self._insert_items(invoice_id, invoice.items)
        self.conn.commit()
        created = self.get_by_id(invoice_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve invoice after create (id={invoice_id})")
        return created

    @staticmethod
    def _build_item(row: RowMapping) -> LineItem:
        return LineItem(
            id=row["id"],
            invoice_id=row["invoice_id"],
            description=row["description"],
            quantity=row["quantity"],
            unit_price=parse_decimal(row["unit_price"]),
            discount=parse_decimal(row["discount"]),
            discount_type=DiscountType(row["discount_type"] or DiscountType.PERCENTAGE.value),
            tax_rate=parse_decimal(row["tax_rate"]),
            sort_order=row["sort_order"],
        )

    @classmethod
    def _build_invoice(cls, row: RowMapping, item_rows: list[RowMapping]) -> Invoice:
        payment_amount = row["payment_amount"]
        return Invoice(
            id=row["id"],
            uuid=row["uuid"],
            invoice_number=row["invoice_number"],
            client_id=row["client_id"],
            company_id=row["company_id"],
            issue_date=row["issue_date"],
            due_date=row["due_date"],
            currency=row["currency"],
            status=InvoiceStatus(row["status"]),
            template=InvoiceTemplate(row["template"] or InvoiceTemplate.MODERN.value),
            notes=row["notes"] or "",
            payment_amount=parse_decimal(payment_amount) if payment_amount is not None else None,
            pdf_path=row["pdf_path"],
            items=[cls._build_item(item_row) for item_row in item_rows],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _row_to_invoice(self, row: RowMapping) -> Invoice:
        items = (
            self.conn.execute(
                text("SELECT * FROM line_items WHERE invoice_id = :invoice_id ORDER BY sort_order"),
                {"invoice_id": row["id"]},
            )
            .mappings()
            .fetchall()
        )
        return self._build_invoice(row, list(items))

    def _build_invoices_from_rows(self, rows: list[RowMapping]) -> list[Invoice]:
        if not rows:
            return []
        placeholders, params = _in_clause("id", [row["id"] for row in rows])
        all_items = (
            self.conn.execute(
                text(f"SELECT * FROM line_items WHERE invoice_id IN ({placeholders}) ORDER BY sort_order"),
                params,
            )
            .mappings()
            .fetchall()
        )
        items_by_invoice: dict[int, list[RowMapping]] = {}
        for item_row in all_items:
            items_by_invoice.setdefault(item_row["invoice_id"], []).append(item_row)
        return [self._build_invoice(row, items_by_invoice.get(row["id"], [])) for row in rows]

    def _fetch_one(self, where: str, params: dict) -> Invoice | None:
        row = (
            self.conn.execute(
                text(f"SELECT * FROM invoices WHERE {where} AND deleted_at IS NULL"),
                params,
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_invoice(row)

    def get_by_id(self, invoice_id: int) -> Invoice | None:
        return self._fetch_one("id = :id", {"id": invoice_id})

    def get_by_uuid(self, uuid: str) -> Invoice | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def get_by_number(self, company_id: int, invoice_number: str) -> Invoice | None:
        return self._fetch_one(
            "company_id = :company_id AND invoice_number = :number",
            {"company_id": company_id, "number": invoice_number},
        )

    def list_all(self) -> list[Invoice]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM invoices WHERE deleted_at IS NULL ORDER BY issue_date DESC, id DESC")
            )
            .mappings()
            .fetchall()
        )
        return self._build_invoices_from_rows(list(rows))

    def list_by_client(self, client_id: int) -> list[Invoice]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM invoices WHERE client_id = :client_id AND deleted_at IS NULL "
                    "ORDER BY issue_date DESC, id DESC"
                ),
                {"client_id": client_id},
            )
            .mappings()
            .fetchall()
        )
        return self._build_invoices_from_rows(list(rows))

    def list_by_status(self, statuses: list[InvoiceStatus]) -> list[Invoice]:
        if not statuses:
            return []
        placeholders, params = _in_clause("status", [status.value for status in statuses])
        rows = (
            self.conn.execute(
                text(
                    f"SELECT * FROM invoices WHERE status IN ({placeholders}) AND deleted_at IS NULL "
                    "ORDER BY issue_date DESC, id DESC"
                ),
                params,
            )
            .mappings()
            .fetchall()
        )
        return self._build_invoices_from_rows(list(rows))

    def update(self, invoice: Invoice) -> Invoice:
        if invoice.id is None:
            raise ValueError("Cannot update invoice without an id")
        self.conn.execute(
            text(
                "UPDATE invoices SET invoice_number = :invoice_number, client_id = :client_id, "
                "company_id = :company_id, issue_date = :issue_date, due_date = :due_date, "
                "currency = :currency, status = :status, template = :template, notes = :notes, "
                "payment_amount = :payment_amount, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "invoice_number": invoice.invoice_number,
                "client_id": invoice.client_id,
                "company_id": invoice.company_id,
                "issue_date": invoice.issue_date.isoformat(),
                "due_date": invoice.due_date.isoformat(),
                "currency": invoice.currency,
                "status": invoice.status.value,
                "template": invoice.template.value,
                "notes": invoice.notes,
                "payment_amount": (
                    decimal_to_str(invoice.payment_amount) if invoice.payment_amount is not None else None
                ),
                "updated_at": _now(),
                "id": invoice.id,
            },
        )
        self.conn.execute(
            text("DELETE FROM line_items WHERE invoice_id = :invoice_id"),
            {"invoice_id": invoice.id},
        )
        self._insert_items(invoice.id, invoice.items)
        self.conn.commit()
        result = self.get_by_id(invoice.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve invoice after update (id={invoice.id})")
        return result

    def update_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        self.conn.execute(
            text("UPDATE invoices SET status = :status, updated_at = :updated_at WHERE id = :id"),
            {"status": status.value, "updated_at": _now(), "id": invoice_id},
        )
        self.conn.commit()

    def update_pdf_path(self, invoice_id: int, pdf_path: str) -> None:
        self.conn.execute(
            text("UPDATE invoices SET pdf_path = :pdf_path WHERE id = :id"),
            {"pdf_path": pdf_path, "id": invoice_id},
        )
        self.conn.commit()

    def delete(self, invoice_id: int) -> None:
        self.conn.execute(
            text("UPDATE invoices SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": invoice_id},
        )
        self.conn.commit()
