import questionary
from rich.console import Console

from packslip.cli.slip_menu import (
    add_item_menu,
    balance_menu,
    edit_header_menu,
    edit_item_menu,
    export_menu,
    payment_menu,
    remove_item_menu,
    share_menu,
    show_slip,
)
from packslip.models.slip import PackingSlip
from packslip.services.slip_service import SlipService
from packslip.storage.factory import get_counter_store, get_storage

console = Console()

MENU_CHOICES = [
    "Show Slip",
    "Customer Information",
    "Add Item",
    "Edit Item",
    "Remove Item",
    "Balance Outstanding",
    "Generate Slip PDF",
    "UPI Payment",
    "Share to WhatsApp",
    "Clear All",
    "Exit",
]


def _build_service() -> SlipService:
    return SlipService(get_storage(), get_counter_store())


def main_menu() -> None:
    slip_service = _build_service()
    slip = PackingSlip.blank()

    console.print()
    console.print("[bold]Packing Slip[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select("Main Menu", choices=MENU_CHOICES).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Show Slip":
            show_slip(slip)
        elif choice == "Customer Information":
            edit_header_menu(slip)
        elif choice == "Add Item":
            add_item_menu(slip)
        elif choice == "Edit Item":
            edit_item_menu(slip)
        elif choice == "Remove Item":
            remove_item_menu(slip)
        elif choice == "Balance Outstanding":
            balance_menu(slip)
        elif choice == "Generate Slip PDF":
            try:
                export_menu(slip, slip_service)
            except OSError as exc:
                console.print(f"[red]Failed to save the slip: {exc}[/red]")
        elif choice == "UPI Payment":
            payment_menu(slip, slip_service)
        elif choice == "Share to WhatsApp":
            share_menu(slip)
        elif choice == "Clear All":
            slip = PackingSlip.blank()
            console.print("[green]Slip cleared.[/green]")
