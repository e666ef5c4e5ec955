from __future__ import annotations

import questionary
from rich.console import Console

from invoicely.models.company import Company
from invoicely.services.company_service import CompanyService

console = Console()


def _show_company(company: Company) -> None:
    console.print(f"  [bold]{company.company_name}[/bold]")
    console.print(f"  Email: {company.email}")
    if company.phone:
        console.print(f"  Phone: {company.phone}")
    if company.address:
        console.print(f"  Address: {company.address}")
    if company.tax_id:
        console.print(f"  Tax ID: {company.tax_id}")
    console.print(f"  Next invoice: {company.invoice_prefix}-{company.next_invoice_number}")
    if company.has_bank_details:
        console.print(f"  Bank: {company.bank_name} {company.account_number}")
        if company.routing_code:
            console.print(f"  {company.routing_code_label}: {company.routing_code}")
        if company.swift_code:
            console.print(f"  SWIFT: {company.swift_code}")


def company_settings_menu(company_service: CompanyService) -> None:
    console.print()
    console.print("[bold]Company Settings[/bold]", style="cyan")

    company = company_service.get_primary_company()
    if company is not None:
        _show_company(company)
        if not questionary.confirm("Edit company settings?", default=False).ask():
            return

    name = questionary.text("Company name:", default=company.company_name if company else "").ask()
    if not name:
        console.print("[yellow]Cancelled.[/yellow]")
        return
    email = questionary.text("Email:", default=company.email if company else "").ask() or ""
    prefix = questionary.text("Invoice prefix:", default=company.invoice_prefix if company else "INV").ask()

    if company is None:
        company = Company(company_name=name, email=email)
    company.company_name = name
    company.email = email
    company.invoice_prefix = prefix or company.invoice_prefix

    try:
        saved = company_service.save_company(company)
        console.print(f"[green bold]Company '{saved.company_name}' saved.[/green bold]")
    except ValueError as e:
        console.print(f"[red]Could not save company: {e}[/red]")
