from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from packslip.constants import FIELD_LABELS, MAX_ITEMS
from packslip.expression import format_quantity
from packslip.models import format_inr
from packslip.models.line_item import LineItem, LineItemField, add_item, remove_item, update_field
from packslip.models.slip import PackingSlip
from packslip.services.ledger import gross_amount, net_amount, total_pieces
from packslip.services.slip_service import SlipService
from packslip.settings import settings
from packslip.share import build_whatsapp_url
from packslip.upi import is_upi_handle

console = Console()

BACK = "Back"


def _item_label(index: int, item: LineItem) -> str:
    name = item.item_name or "(no name)"
    return f"Item {index + 1} - {name}"


def _select_item(slip: PackingSlip, prompt: str) -> LineItem | None:
    if not slip.items:
        console.print("[yellow]No items on this slip.[/yellow]")
        return None

    choices = [_item_label(i, item) for i, item in enumerate(slip.items)]
    choices.append(BACK)
    choice = questionary.select(prompt, choices=choices).ask()
    if choice is None or choice == BACK:
        return None
    return slip.items[choices.index(choice)]


def show_slip(slip: PackingSlip) -> None:
    """Print the slip header, item table and totals."""
    header = slip.header
    console.print()
    title = "Packing Slip" if slip.slip_number is None else f"Packing Slip #{slip.slip_number}"
    console.print(f"[bold]{title}[/bold]", style="cyan")
    console.print(f"  Mobile: {header.mobile}   Date: {header.date}")
    console.print(f"  Customer: {header.customer_name}")

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Item Name")
    table.add_column("Description")
    table.add_column("Pcs.", justify="right")
    table.add_column("Total Mtr.", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right")

    for i, item in enumerate(slip.items):
        table.add_row(
            str(i + 1),
            item.item_name,
            item.item_description,
            item.pc,
            item.total_meter,
            item.rate,
            format_inr(item.total),
        )

    console.print(table)
    console.print(f"  Total Pieces: {format_quantity(total_pieces(slip.items))}")
    console.print(f"  Gross Amount: {format_inr(gross_amount(slip.items))}")
    if slip.balance_outstanding:
        console.print(f"  Balance Outstanding: {slip.balance_outstanding}")
    console.print(f"  [bold]Net Amount: {net_amount(slip.items, slip.balance_outstanding)}[/bold]")
    if header.bundles:
        console.print(f"  Bundles: {header.bundles}")


def edit_header_menu(slip: PackingSlip) -> None:
    header = slip.header
    console.print()
    console.print("[bold]Customer Information[/bold]", style="cyan")

    header.mobile = questionary.text("Mobile number:", default=header.mobile).ask() or ""
    header.date = questionary.text("Date (DD/MM/YYYY):", default=header.date).ask() or header.date
    header.customer_name = questionary.text("Customer name:", default=header.customer_name).ask() or ""
    header.bundles = questionary.text("Bundles:", default=header.bundles).ask() or ""


def add_item_menu(slip: PackingSlip) -> None:
    if len(slip.items) >= MAX_ITEMS:
        console.print(f"[yellow]A slip holds at most {MAX_ITEMS} items.[/yellow]")
        return
    slip.items = add_item(slip.items)
    console.print(f"[green]Item {len(slip.items)} added.[/green]")
    edit_item_fields(slip, slip.items[-1].id)


def edit_item_fields(slip: PackingSlip, item_id: str) -> None:
    """Prompt for each field of one item, recomputing its total as values change."""
    for field in LineItemField:
        item = next((i for i in slip.items if i.id == item_id), None)
        if item is None:
            return
        current = getattr(item, field.value)
        if field is LineItemField.TOTAL_METER and item.item_description and current:
            console.print(f"  [dim]Total meter from description: {current}[/dim]")
        value = questionary.text(f"  {FIELD_LABELS[field.value]}:", default=current).ask()
        if value is None:
            return
        if value != current:
            slip.items = update_field(slip.items, item_id, field, value)

    item = next((i for i in slip.items if i.id == item_id), None)
    if item is not None:
        console.print(f"  Total: [bold]{format_inr(item.total)}[/bold]")


def edit_item_menu(slip: PackingSlip) -> None:
    item = _select_item(slip, "Select an item to edit:")
    if item is None:
        return

    choices = [FIELD_LABELS[field.value] for field in LineItemField]
    choices.extend(["All fields", BACK])
    choice = questionary.select("Field:", choices=choices).ask()
    if choice is None or choice == BACK:
        return
    if choice == "All fields":
        edit_item_fields(slip, item.id)
        return

    field = list(LineItemField)[choices.index(choice)]
    value = questionary.text(f"  {choice}:", default=getattr(item, field.value)).ask()
    if value is None:
        return
    slip.items = update_field(slip.items, item.id, field, value)
    updated = next(i for i in slip.items if i.id == item.id)
    console.print(f"  Total meter: {updated.total_meter or '-'}  Total: [bold]{format_inr(updated.total)}[/bold]")


def remove_item_menu(slip: PackingSlip) -> None:
    item = _select_item(slip, "Select an item to remove:")
    if item is None:
        return
    slip.items = remove_item(slip.items, item.id)
    console.print("[green]Item removed.[/green]")


def balance_menu(slip: PackingSlip) -> None:
    console.print("  [dim]Prefix with - to subtract (e.g. -200); plain amounts are added.[/dim]")
    value = questionary.text("Balance outstanding:", default=slip.balance_outstanding).ask()
    if value is None:
        return
    slip.balance_outstanding = value.strip()
    console.print(f"  Net Amount: [bold]{net_amount(slip.items, slip.balance_outstanding)}[/bold]")


def export_menu(slip: PackingSlip, slip_service: SlipService) -> None:
    path = slip_service.export_slip(slip)
    console.print()
    console.print(f"[green bold]Slip #{slip.slip_number} generated![/green bold]")
    console.print(f"  File: {path}")


def payment_menu(slip: PackingSlip, slip_service: SlipService) -> None:
    if not is_upi_handle(settings.upi_id):
        console.print("[red]Set PACKSLIP_UPI_ID (e.g. merchant@bank) to request payments.[/red]")
        return
    if not settings.upi_payee_name:
        console.print("[red]Set PACKSLIP_UPI_PAYEE_NAME to request payments.[/red]")
        return

    uri = slip_service.payment_uri(slip)
    if uri is None:
        console.print("[red]Failed to generate a payment request: the net amount must be above zero.[/red]")
        return

    console.print(f"  Amount: [bold]{net_amount(slip.items, slip.balance_outstanding)}[/bold]")
    console.print(f"  UPI ID: {settings.upi_id}")
    console.print(f"  Link: {uri}")

    save = questionary.confirm("Save the QR code as an image?", default=False).ask()
    if save:
        path = slip_service.export_qrcode(slip)
        if path:
            console.print(f"  QR code: {path}")


def share_menu(slip: PackingSlip) -> None:
    number = questionary.text("WhatsApp number:", default=slip.header.mobile).ask()
    url = build_whatsapp_url(number or "")
    if url is None:
        console.print("[red]Enter a phone number to share the slip.[/red]")
        return
    console.print(f"  Open: {url}")
    console.print("  [dim]Attach the exported slip in the chat.[/dim]")
