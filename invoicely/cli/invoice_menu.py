from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from invoicely.constants import STATUS_LABELS
from invoicely.currencies import is_supported
from invoicely.formatting import format_date, format_money, format_multi_currency, format_percentage
from invoicely.models import parse_decimal
from invoicely.models.invoice import DiscountType, Invoice, InvoiceStatus, LineItem
from invoicely.services.client_service import ClientService
from invoicely.services.company_service import CompanyService
from invoicely.services.dashboard_service import DashboardService
from invoicely.services.invoice_service import InvoiceService
from invoicely.totals import line_item_totals

console = Console()


def show_dashboard(invoice_service: InvoiceService, dashboard_service: DashboardService) -> None:
    stats = dashboard_service.build_stats(invoice_service.list_invoices())

    console.print()
    console.print("[bold]Dashboard[/bold]", style="cyan")
    console.print(f"  Invoices: {stats.total_invoices}")
    console.print(f"  Revenue: {format_multi_currency(stats.revenue.buckets, stats.primary_currency)}")
    console.print(f"  Pending: {format_multi_currency(stats.pending.buckets, stats.pending.primary_currency)}")
    console.print(
        f"  Paid this month: "
        f"{format_multi_currency(stats.paid_this_month.buckets, stats.paid_this_month.primary_currency)}"
    )

    if stats.recent:
        table = Table(title="Recent Invoices")
        table.add_column("Number")
        table.add_column("Issued")
        table.add_column("Status", justify="center")
        table.add_column("Total", justify="right")
        for recent in stats.recent:
            table.add_row(
                recent.invoice.invoice_number,
                format_date(recent.invoice.issue_date),
                STATUS_LABELS.get(recent.invoice.status.value, recent.invoice.status.value),
                format_money(recent.totals.total, recent.invoice.currency),
            )
        console.print(table)


def _show_invoice_detail(invoice: Invoice, invoice_service: InvoiceService) -> None:
    currency = invoice.currency
    table = Table(title=f"Invoice {invoice.invoice_number}")
    table.add_column("Description")
    table.add_column("Qty", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Discount", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Amount", justify="right")

    for item in invoice.items:
        line = line_item_totals(item)
        if item.discount_type == DiscountType.PERCENTAGE:
            discount = format_percentage(item.discount)
        else:
            discount = format_money(item.discount, currency)
        table.add_row(
            item.description,
            str(item.quantity),
            format_money(item.unit_price, currency),
            discount,
            format_percentage(item.tax_rate),
            format_money(line.line_total, currency),
        )

    console.print(table)
    totals = invoice_service.calculate(invoice)
    console.print(f"  Subtotal: {format_money(totals.subtotal, currency)}")
    if totals.total_discount > 0:
        console.print(f"  Discount: -{format_money(totals.total_discount, currency)}")
    if totals.total_tax > 0:
        console.print(f"  Tax: {format_money(totals.total_tax, currency)}")
    console.print(f"  [bold]Total: {format_money(totals.total, currency)}[/bold]")
    console.print(f"  Status: {STATUS_LABELS.get(invoice.status.value, invoice.status.value)}")
    console.print(f"  Issued: {format_date(invoice.issue_date)}  Due: {format_date(invoice.due_date)}")
    if invoice.notes:
        console.print(f"  Notes: {invoice.notes}")
    if invoice.pdf_path:
        console.print(f"  PDF: {invoice_service.get_pdf_url(invoice)}")


def list_invoices_menu(
    invoice_service: InvoiceService,
    client_service: ClientService,
    company_service: CompanyService,
) -> None:
    invoices = invoice_service.list_invoices()
    if not invoices:
        console.print("[yellow]No invoices yet.[/yellow]")
        return

    clients = {c.id: c for c in client_service.list_clients()}
    table = Table(title="Invoices")
    table.add_column("#", style="dim")
    table.add_column("Number")
    table.add_column("Client")
    table.add_column("Status", justify="center")
    table.add_column("Total", justify="right")

    for i, invoice in enumerate(invoices, 1):
        client = clients.get(invoice.client_id)
        table.add_row(
            str(i),
            invoice.invoice_number,
            client.name if client else "-",
            STATUS_LABELS.get(invoice.status.value, invoice.status.value),
            format_money(invoice_service.calculate(invoice).total, invoice.currency),
        )

    console.print(table)

    choices = [f"{i}. {inv.invoice_number}" for i, inv in enumerate(invoices, 1)]
    choices.append("Back")
    choice = questionary.select("Select an invoice:", choices=choices).ask()
    if choice is None or choice == "Back":
        return

    idx = int(choice.split(".")[0]) - 1
    _invoice_detail_menu(invoices[idx], invoice_service, client_service, company_service)


def _invoice_detail_menu(
    invoice: Invoice,
    invoice_service: InvoiceService,
    client_service: ClientService,
    company_service: CompanyService,
) -> None:
    while True:
        _show_invoice_detail(invoice, invoice_service)
        action = questionary.select(
            "Action:",
            choices=["Change Status", "Export PDF", "Back"],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "Change Status":
            status = questionary.select(
                "New status:",
                choices=[s.value for s in InvoiceStatus],
                default=invoice.status.value,
            ).ask()
            if status:
                invoice = invoice_service.change_status(invoice, status)
                console.print(f"[green]Status set to {STATUS_LABELS[invoice.status.value]}.[/green]")
        elif action == "Export PDF":
            client = client_service.get_client(invoice.client_id)
            company = company_service.get_company(invoice.company_id)
            if client is None or company is None:
                console.print("[red]Client or company for this invoice no longer exists.[/red]")
                continue
            invoice_service.generate_pdf(invoice, client, company)
            console.print(f"[green]PDF exported: {invoice_service.get_pdf_url(invoice)}[/green]")


def _ask_line_item(sort_order: int) -> LineItem | None:
    description = questionary.text("  Description:").ask()
    if not description:
        return None

    while True:
        qty = questionary.text("  Quantity:", default="1").ask() or ""
        if qty.strip().isdigit():
            break
        console.print("[red]Quantity must be a whole number.[/red]")

    unit_price = parse_decimal(questionary.text("  Rate (e.g. 85.00):").ask())
    discount_type = questionary.select(
        "  Discount type:",
        choices=[t.value for t in DiscountType],
        default=DiscountType.PERCENTAGE.value,
    ).ask()
    discount = parse_decimal(questionary.text("  Discount:", default="0").ask())
    tax_rate = parse_decimal(questionary.text("  Tax rate %:", default="0").ask())

    return LineItem(
        description=description,
        quantity=int(qty.strip()),
        unit_price=unit_price,
        discount=discount,
        discount_type=DiscountType(discount_type or DiscountType.PERCENTAGE.value),
        tax_rate=tax_rate,
        sort_order=sort_order,
    )


def create_invoice_menu(
    invoice_service: InvoiceService,
    client_service: ClientService,
    company_service: CompanyService,
) -> None:
    console.print()
    console.print("[bold]New Invoice[/bold]", style="cyan")

    company = company_service.get_primary_company()
    if company is None:
        console.print("[yellow]Configure company settings first.[/yellow]")
        return

    clients = client_service.list_clients()
    if not clients:
        console.print("[yellow]Create a client first.[/yellow]")
        return

    client_choice = questionary.select(
        "Client:",
        choices=[f"{i}. {c.name}" for i, c in enumerate(clients, 1)],
    ).ask()
    if client_choice is None:
        return
    client = clients[int(client_choice.split(".")[0]) - 1]

    currency = questionary.text(
        "Currency:",
        default="USD",
        validate=lambda value: is_supported(value.strip()) or "Unknown currency code",
    ).ask()
    if currency is None:
        return
    currency = currency.strip().upper()

    items: list[LineItem] = []
    while True:
        console.print(f"[dim]Item {len(items) + 1}[/dim]")
        item = _ask_line_item(len(items))
        if item is not None:
            items.append(item)
        if not questionary.confirm("Add another item?", default=False).ask():
            break

    if not items:
        console.print("[yellow]Cancelled: an invoice needs at least one item.[/yellow]")
        return

    notes = questionary.text("Notes (optional):").ask() or ""

    invoice = invoice_service.create_invoice(
        client=client,
        company=company,
        items=items,
        issue_date=date.today(),
        currency=currency,
        notes=notes,
    )
    totals = invoice_service.calculate(invoice)
    console.print()
    console.print(f"[green bold]Invoice {invoice.invoice_number} created.[/green bold]")
    console.print(f"  Total: [bold]{format_money(totals.total, invoice.currency)}[/bold]")
