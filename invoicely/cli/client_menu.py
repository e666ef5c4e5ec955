from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from invoicely.services.client_service import ClientService

console = Console()


def client_menu(client_service: ClientService) -> None:
    while True:
        choice = questionary.select(
            "Clients",
            choices=[
                "List Clients",
                "Create Client",
                "Back",
            ],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "List Clients":
            _list_clients(client_service)
        elif choice == "Create Client":
            _create_client(client_service)


def _list_clients(client_service: ClientService) -> None:
    clients = client_service.list_clients()
    if not clients:
        console.print("[yellow]No clients yet.[/yellow]")
        return

    table = Table(title="Clients")
    table.add_column("#", style="dim")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Phone")

    for i, client in enumerate(clients, 1):
        table.add_row(str(i), client.name, client.email, client.phone)

    console.print(table)


def _create_client(client_service: ClientService) -> None:
    console.print()
    console.print("[bold]New Client[/bold]", style="cyan")

    name = questionary.text("Name:").ask()
    if not name:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    email = questionary.text("Email:").ask() or ""
    address = questionary.text("Address (optional):").ask() or ""
    phone = questionary.text("Phone (optional):").ask() or ""
    tax_id = questionary.text("Tax ID (optional):").ask() or ""

    try:
        client = client_service.create_client(name, email, address=address, phone=phone, tax_id=tax_id)
        console.print(f"[green bold]Client '{client.name}' created.[/green bold]")
    except ValueError as e:
        console.print(f"[red]Could not create client: {e}[/red]")
