from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from recordset.casting import to_str
from recordset.domain.record import RecordSet


def _type_name(value: object) -> str:
    return "null" if value is None else type(value).__name__


def build_record_table(record: RecordSet, title: Optional[str] = None) -> Table:
    """
    Build a rich table with one row per field: index, name, value type, value.

    Fields that only hold a classic value get an extra "Classic" column entry.
    """
    table = Table(
        title=title or "Record",
        box=box.ROUNDED,
        caption=f"{record.length} field(s)",
    )

    table.add_column("#", justify="right", style="blue")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="green")

    classic_values = record.classic_values
    show_classic = any(value is not None for value in classic_values)
    if show_classic:
        table.add_column("Classic", style="yellow")

    for index, name in enumerate(record.fields):
        value = record.get(index)
        row = [str(index), name, _type_name(value), to_str(value)]
        if show_classic:
            row.append(to_str(classic_values[index]))
        table.add_row(*row)

    return table


def print_records(records: Sequence[RecordSet], console: Optional[Console] = None) -> None:
    """
    Render records as rich tables, one table per record.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No records to display.[/yellow]")
        return

    for position, record in enumerate(records):
        title = "Record" if len(records) == 1 else f"Record {position}"
        if record.is_empty:
            console.print(f"[yellow]{title}: empty[/yellow]")
            continue
        console.print(build_record_table(record, title=title))


__all__ = ["build_record_table", "print_records"]
