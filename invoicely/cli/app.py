import questionary
from rich.console import Console

from invoicely.cli.client_menu import client_menu
from invoicely.cli.company_menu import company_settings_menu
from invoicely.cli.invoice_menu import create_invoice_menu, list_invoices_menu, show_dashboard
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


def _build_services() -> tuple[ClientService, CompanyService, InvoiceService, DashboardService]:
    client_repo = get_client_repository()
    company_repo = get_company_repository()
    invoice_repo = get_invoice_repository()
    storage = get_storage()
    company_service = CompanyService(company_repo)
    return (
        ClientService(client_repo, invoice_repo),
        company_service,
        InvoiceService(invoice_repo, company_service, storage),
        DashboardService(),
    )


def main_menu() -> None:
    client_service, company_service, invoice_service, dashboard_service = _build_services()

    console.print()
    console.print("[bold]Invoicely[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Dashboard",
                "List Invoices",
                "Create Invoice",
                "Clients",
                "Company Settings",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Dashboard":
            show_dashboard(invoice_service, dashboard_service)
        elif choice == "List Invoices":
            list_invoices_menu(invoice_service, client_service, company_service)
        elif choice == "Create Invoice":
            create_invoice_menu(invoice_service, client_service, company_service)
        elif choice == "Clients":
            client_menu(client_service)
        elif choice == "Company Settings":
            company_settings_menu(company_service)
