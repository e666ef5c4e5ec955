"""Seed the database with demo data for local development.

Usage:
    python -m invoicely.scripts.seed
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from invoicely.constants import STATUS_LABELS
from invoicely.db import get_connection, initialize_db
from invoicely.formatting import format_money, format_multi_currency
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import DiscountType, InvoiceStatus, InvoiceTemplate, LineItem
from invoicely.repositories.factory import (
    get_client_repository,
    get_company_repository,
    get_invoice_repository,
)
from invoicely.services.client_service import ClientService
from invoicely.services.company_service import CompanyService
from invoicely.services.dashboard_service import DashboardService
from invoicely.services.invoice_service import InvoiceService
from invoicely.storage.factory import get_storage

console = Console()
fake = Faker("en_US")

NUM_CLIENTS = 6
NUM_INVOICES = 18

TABLES_TO_CLEAR = [
    "line_items",
    "invoices",
    "clients",
    "companies",
]

CURRENCY_WEIGHTS = [("USD", 6), ("EUR", 2), ("GBP", 1), ("INR", 1)]

# (description, unit price)
SERVICE_CATALOG = [
    ("Web design", Decimal("85.00")),
    ("Backend development", Decimal("120.00")),
    ("Code review", Decimal("95.00")),
    ("Technical consulting", Decimal("150.00")),
    ("Hosting (monthly)", Decimal("49.99")),
    ("Support retainer", Decimal("500.00")),
    ("UX research session", Decimal("250.00")),
]

INVOICE_NOTES = [
    "",
    "",
    "Payment via bank transfer within 30 days.",
    "Thank you for the continued partnership.",
    "",
    "Late payments incur a 1.5% monthly fee.",
]


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing all tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()
    console.print("[green]All tables cleared.[/green]\n")


def _create_company(company_service: CompanyService) -> Company:
    console.print("[cyan]Creating company...[/cyan]")
    company = company_service.save_company(
        Company(
            company_name=fake.company(),
            email=fake.company_email(),
            phone=fake.phone_number(),
            address=fake.address().replace("\n", ", "),
            tax_id=fake.ein(),
            bank_name=f"{fake.last_name()} Bank",
            account_number=fake.bban(),
            routing_code=fake.aba(),
            swift_code=fake.swift(),
        )
    )
    console.print(f"  [bold green]Company:[/bold green] {company.company_name} (primary={company.is_primary})\n")
    return company


def _create_clients(client_service: ClientService) -> list[Client]:
    console.print("[cyan]Creating clients...[/cyan]")
    clients = []
    for _ in range(NUM_CLIENTS):
        client = client_service.create_client(
            name=fake.company(),
            email=fake.company_email(),
            address=fake.address().replace("\n", ", "),
            phone=fake.phone_number(),
        )
        console.print(f"  Created client: {client.name}")
        clients.append(client)
    console.print(f"[green]{len(clients)} clients created.[/green]\n")
    return clients


def _random_items() -> list[LineItem]:
    items = []
    for i, (description, price) in enumerate(random.sample(SERVICE_CATALOG, random.randint(1, 4))):
        discount_type = random.choice([DiscountType.PERCENTAGE, DiscountType.FIXED])
        if discount_type == DiscountType.PERCENTAGE:
            discount = Decimal(random.choice([0, 0, 5, 10]))
        else:
            discount = Decimal(random.choice([0, 0, 25, 50]))
        items.append(
            LineItem(
                description=description,
                quantity=random.randint(1, 40),
                unit_price=price,
                discount=discount,
                discount_type=discount_type,
                tax_rate=Decimal(random.choice([0, 5, 8, 20])),
                sort_order=i,
            )
        )
    return items


def _create_invoices(
    invoice_service: InvoiceService,
    company: Company,
    clients: list[Client],
) -> None:
    console.print("[cyan]Creating invoices...[/cyan]")
    table = Table(title="Invoices")
    table.add_column("Number")
    table.add_column("Client")
    table.add_column("Issued")
    table.add_column("Status", justify="center")
    table.add_column("Total", justify="right")

    currencies = [code for code, weight in CURRENCY_WEIGHTS for _ in range(weight)]
    today = date.today()
    for _ in range(NUM_INVOICES):
        client = random.choice(clients)
        issue_date = today - timedelta(days=random.randint(0, 120))
        invoice = invoice_service.create_invoice(
            client=client,
            company=company,
            items=_random_items(),
            issue_date=issue_date,
            currency=random.choice(currencies),
            template=random.choice(list(InvoiceTemplate)),
            notes=random.choice(INVOICE_NOTES),
        )

        if invoice.due_date < today:
            status = InvoiceStatus.PAID if random.random() > 0.3 else InvoiceStatus.OVERDUE
        else:
            status = random.choice([InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.PAID])
        if status != InvoiceStatus.DRAFT:
            invoice = invoice_service.change_status(invoice, status)

        table.add_row(
            invoice.invoice_number,
            client.name,
            invoice.issue_date.isoformat(),
            STATUS_LABELS[invoice.status.value],
            format_money(invoice_service.calculate(invoice).total, invoice.currency),
        )

    console.print(table)
    console.print(f"\n[green]{NUM_INVOICES} invoices created.[/green]\n")


def main() -> None:
    console.print("[bold magenta]Invoicely: Database Seeder[/bold magenta]")
    console.print("=" * 40)

    initialize_db()
    conn = get_connection()
    _clear_all(conn)

    invoice_repo = get_invoice_repository()
    company_service = CompanyService(get_company_repository())
    client_service = ClientService(get_client_repository(), invoice_repo)
    invoice_service = InvoiceService(invoice_repo, company_service, get_storage())

    company = _create_company(company_service)
    clients = _create_clients(client_service)
    _create_invoices(invoice_service, company, clients)

    stats = DashboardService.build_stats(invoice_service.list_invoices())
    console.print("[bold]Summary[/bold]")
    console.print(f"  Revenue: {format_multi_currency(stats.revenue.buckets, stats.primary_currency)}")
    console.print(f"  Pending: {format_multi_currency(stats.pending.buckets, stats.pending.primary_currency)}")


if __name__ == "__main__":
    main()
