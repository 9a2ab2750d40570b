"""Command Line Interface for AAMVA-Forge.

Encodes attribute records into AAMVA barcode payloads, decodes scanned
payloads, reconciles scans against reference records, and mines license
attributes out of OCR text.

Raw payload files are read and written with newline translation disabled:
CR and LF are both significant in the record format.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from aamva_forge import __version__
from aamva_forge.domain.attribute_record import AttributeRecord, Jurisdiction
from aamva_forge.domain.element_catalog import get_entry
from aamva_forge.domain.enums import ValidationStatus
from aamva_forge.domain.jurisdictions import JURISDICTIONS, get_jurisdiction
from aamva_forge.domain.ports import JurisdictionNotFoundError, Result
from aamva_forge.domain.services.decoder import decode_record
from aamva_forge.domain.services.encoder import encode_record_safe
from aamva_forge.domain.services.ocr_extractor import record_from_ocr_text
from aamva_forge.domain.services.reconciler import reconcile
from aamva_forge.infrastructure.logging_config import setup_logging
from aamva_forge.infrastructure.settings import settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="aamva-forge",
    help="AAMVA-Forge: driver's license barcode payload codec and validator",
    add_completion=False
)
console = Console()

STATUS_STYLES = {
    ValidationStatus.MATCH: "green",
    ValidationStatus.MISMATCH: "red",
    ValidationStatus.MISSING_IN_SCAN: "yellow",
    ValidationStatus.INVALID_FORMAT: "magenta",
}


def read_raw(path: Path) -> str:
    with open(path, "r", encoding="latin-1", newline="") as f:
        return f.read()


def write_raw(path: Path, payload: str) -> None:
    with open(path, "w", encoding="latin-1", newline="") as f:
        f.write(payload)


def resolve_jurisdiction(code: Optional[str]) -> Jurisdiction:
    """Jurisdiction for a code, or the configured default when code is None."""
    try:
        return get_jurisdiction(code or settings.config.default_jurisdiction)
    except JurisdictionNotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)


def load_record(path: Path, jurisdiction_code: Optional[str] = None) -> Result[AttributeRecord]:
    """Load an Attribute Record from a JSON file.

    An explicit jurisdiction overrides the file's jurisdiction slots. A file
    without an IIN gets the slots of its own state code, or of the configured
    default jurisdiction.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        return Result.failure_result(e, error_details={"source": str(path)})

    if not isinstance(data, dict):
        return Result.failure_result(
            "Record file must contain a JSON object",
            error_type="ValueError",
            error_details={"source": str(path)}
        )

    try:
        record = AttributeRecord.model_validate(data)
        jurisdiction = None
        if jurisdiction_code:
            jurisdiction = get_jurisdiction(jurisdiction_code)
        elif not record.iin.strip():
            jurisdiction = get_jurisdiction(record.state or settings.config.default_jurisdiction)
        if jurisdiction is not None:
            record = AttributeRecord.from_elements(record.to_elements(), jurisdiction)
    except (ValueError, JurisdictionNotFoundError) as e:
        return Result.failure_result(e, error_details={"source": str(path)})

    return Result.success_result(record)


def _require_record(path: Path, jurisdiction_code: Optional[str] = None) -> AttributeRecord:
    result = load_record(path, jurisdiction_code)
    if result.is_failure():
        console.print(f"[red]✗[/red] Failed to load record {path}: {result.error}")
        raise typer.Exit(code=1)
    return result.value


@app.command()
def encode(
    record_file: Path = typer.Argument(..., help="Attribute record JSON file", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the payload to this file"),
    jurisdiction: Optional[str] = typer.Option(None, "--jurisdiction", "-j", help="Two-letter jurisdiction code"),
    strict: bool = typer.Option(False, "--strict", help="Fail when mandatory elements are blank"),
) -> None:
    """Encode an attribute record into an AAMVA PDF417 payload.

    Examples:
        aamva-forge encode record.json
        aamva-forge encode record.json -j TX -o payload.txt --strict
    """
    record = _require_record(record_file, jurisdiction)

    result = encode_record_safe(record, strict=strict)
    if result.is_failure():
        console.print(f"[red]✗[/red] {result.error}")
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(result.value, nl=False)
        return

    write_raw(output, result.value)
    console.print(f"[green]✓[/green] Payload written: {output} ({len(result.value)} bytes)")


@app.command()
def decode(
    raw_file: Path = typer.Argument(..., help="Raw barcode payload file", exists=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print the element map as JSON"),
) -> None:
    """Decode a raw barcode payload into its data elements."""
    elements = decode_record(read_raw(raw_file))

    if as_json:
        typer.echo(json.dumps(elements, indent=2))
        return

    if not elements:
        console.print("[yellow]⚠[/yellow] No elements decoded (missing compliance indicator?)")
        raise typer.Exit(code=1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Element", style="cyan")
    table.add_column("Description")
    table.add_column("Value")
    for element_id, value in elements.items():
        entry = get_entry(element_id)
        table.add_row(element_id, entry.description if entry else "", value)
    console.print(table)


@app.command()
def validate(
    raw_file: Path = typer.Argument(..., help="Raw barcode payload file", exists=True, dir_okay=False),
    record_file: Path = typer.Argument(..., help="Reference attribute record JSON file", exists=True, dir_okay=False),
    jurisdiction: Optional[str] = typer.Option(None, "--jurisdiction", "-j", help="Two-letter jurisdiction code"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    save: bool = typer.Option(False, "--save", help="Save the report JSON to the report directory"),
) -> None:
    """Cross-validate a scanned payload against a reference record.

    Exits with code 1 unless the signature is valid and every field matches.
    """
    record = _require_record(record_file, jurisdiction)
    report = reconcile(read_raw(raw_file), record)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        signature = "[green]valid[/green]" if report.is_valid_signature else "[red]invalid[/red]"
        console.print(f"[bold]Signature:[/bold] {signature}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Element", style="cyan")
        table.add_column("Description")
        table.add_column("Reference")
        table.add_column("Scanned")
        table.add_column("Status")
        table.add_column("Message", style="dim")
        for field in report.fields:
            style = STATUS_STYLES[field.status]
            table.add_row(
                field.element_id,
                field.description,
                field.reference_value,
                field.observed_value,
                f"[{style}]{field.status.value}[/{style}]",
                field.message or "",
            )
        console.print(table)

        summary = ", ".join(f"{status.value}: {count}" for status, count in report.counts().items())
        console.print(f"[dim]{summary}[/dim]")

    if save:
        report_dir = Path(settings.config.report_dir)
        report_dir.mkdir(parents=True, exist_ok=True)
        report_file = report_dir / f"validation_report_{raw_file.stem}.json"
        with open(report_file, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)
        console.print(f"[green]✓[/green] Report saved: {report_file}")

    if not report.is_clean:
        raise typer.Exit(code=1)


@app.command()
def ocr(
    text_file: Path = typer.Argument(..., help="OCR text recognized from a license photo", exists=True, dir_okay=False),
    jurisdiction: Optional[str] = typer.Option(None, "--jurisdiction", "-j", help="Jurisdiction used when none is detected"),
) -> None:
    """Extract license attributes from OCR text as an attribute record JSON."""
    fallback = resolve_jurisdiction(jurisdiction)
    text = text_file.read_text(encoding="utf-8")
    record = record_from_ocr_text(text, fallback)
    typer.echo(json.dumps(record.to_elements(), indent=2))


@app.command()
def jurisdictions() -> None:
    """List supported jurisdictions and their issuer identification numbers."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("IIN")
    table.add_column("Version")
    table.add_column("Country")
    for j in JURISDICTIONS:
        table.add_row(j.code, j.name, j.iin, j.version, j.country)
    console.print(table)


@app.command()
def info() -> None:
    """Display configuration."""
    config = settings.config
    info_table = Table(show_header=False, box=None, padding=(0, 2))
    info_table.add_row("Application:", f"{settings.app_name} v{settings.app_version}")
    info_table.add_row("Default Jurisdiction:", config.default_jurisdiction)
    info_table.add_row("Log Level:", config.log_level)
    info_table.add_row("JSON Logs:", "Enabled" if config.log_json else "Disabled")
    info_table.add_row("Report Directory:", config.report_dir)
    console.print(info_table)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{settings.app_name} v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    version: bool = typer.Option(
        False, "--version", help="Show version information", callback=_version_callback, is_eager=True
    ),
) -> None:
    """AAMVA-Forge: driver's license barcode payload codec and validator."""
    config = settings.config
    setup_logging(use_json=config.log_json, log_level="DEBUG" if verbose else config.log_level)


if __name__ == "__main__":
    app()
