from __future__ import annotations

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import typer

from recordset.config import get_settings
from recordset.domain.record import RecordSet
from recordset.errors import EncodingError
from recordset.reporter import print_records
from recordset.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Inspect JSON rows as records.")
log = get_logger(__name__)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    STR = "str"


def load_records(path: Path) -> List[RecordSet]:
    """
    Load a JSON object (one record) or an array of objects (one record each).
    """
    with path.open("r", encoding="utf-8") as fh:
        payload: Any = json.load(fh)

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
        raise ValueError("expected a JSON object or an array of JSON objects")
    return [RecordSet(row) for row in payload]


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"log_level={settings.log_level} json_logs={settings.json_logs} "
        f"time_formats={','.join(settings.time_formats)}"
    )


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="JSON file holding an object or an array of objects."),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format: table, json or str (string map as JSON).",
    ),
    row: Optional[int] = typer.Option(
        None,
        "--row",
        "-r",
        help="Only show the record at this position.",
    ),
) -> None:
    """
    Load rows from a JSON file and print them as records.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    try:
        records = load_records(path)
    except (OSError, ValueError) as exc:
        typer.echo(f"Cannot load {path}: {exc}", err=True)
        raise typer.Exit(code=1)

    if row is not None:
        if not 0 <= row < len(records):
            typer.echo(f"Row {row} out of range (0..{len(records) - 1}).", err=True)
            raise typer.Exit(code=1)
        records = [records[row]]

    log.debug("Loaded records", extra={"path": str(path), "records": len(records)})

    if output is OutputFormat.TABLE:
        print_records(records)
        return

    for record in records:
        if output is OutputFormat.JSON:
            try:
                typer.echo(record.as_json())
            except EncodingError as exc:
                typer.echo(f"Cannot encode record: {exc}", err=True)
                raise typer.Exit(code=1)
        else:
            typer.echo(json.dumps(record.as_str_map()))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
