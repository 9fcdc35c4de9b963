"""Display formatting for tickets (pt-BR conventions)."""

from datetime import datetime

from .domain.models import ExtractionResult, StoredTicket, Ticket, Vehicle


def format_kg(value: float) -> str:
    """12345.5 -> '12.345,5 kg'."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{text} kg"


def format_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M:%S")


def measured_weight(ticket: Ticket) -> float:
    """Net weight as read on the scale: gross minus tare."""
    return ticket.gross_weight_calculated - ticket.tare_weight


def extraction_lines(result: ExtractionResult) -> list[str]:
    return [
        f"invoice_id: {result.invoice_id}",
        f"net_weight: {result.net_weight}",
        f"invoice_date: {result.invoice_date}",
        f"extracted_plate: {result.extracted_plate}",
        f"filename_date: {result.filename_date}",
    ]


def ticket_lines(ticket: Ticket, ticket_id: str | None = None) -> list[str]:
    lines = [f"ticket: {ticket_id}"] if ticket_id else []
    lines += [
        f"invoice: {ticket.invoice_id}",
        f"date: {format_date(ticket.issue_timestamp)}",
        f"time: {format_time(ticket.issue_timestamp)}",
        f"plate: {ticket.plate_number}",
        f"vehicle: {ticket.vehicle_id}",
        f"gross: {format_kg(ticket.gross_weight_calculated)}",
        f"tare: {format_kg(ticket.tare_weight)}",
        f"net (measured): {format_kg(measured_weight(ticket))}",
        f"net (invoice): {format_kg(ticket.net_weight_invoice)}",
        f"status: {ticket.status.value}",
    ]
    return lines


def stored_ticket_line(stored: StoredTicket) -> str:
    ticket = stored.ticket
    stamp = ticket.issue_timestamp
    return (
        f"{stored.id}  {format_date(stamp)} {format_time(stamp)}  "
        f"{ticket.invoice_id}  {ticket.plate_number}  "
        f"{format_kg(ticket.gross_weight_calculated)}"
    )


def vehicle_line(vehicle: Vehicle) -> str:
    return (
        f"{vehicle.id}  {vehicle.category_label}  plate={vehicle.catalog_plate}  "
        f"tare={format_kg(vehicle.tare_weight)}  "
        f"max={format_kg(vehicle.max_capacity)}"
    )
