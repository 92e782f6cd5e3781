"""Main CLI application"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from payment_templates.cli.fill_cmd import fill_command
from payment_templates.cli.validate_cmd import validate_command
from payment_templates.utils.config import setup_logging

app = typer.Typer(
    name="payment-templates",
    help="Payment-request templates: browse, validate and fill request forms",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    setup_logging(log_level)


@app.command("templates")
def templates(
    all_templates: bool = typer.Option(False, "--all", "-a", help="Include inactive templates"),
):
    """List available request templates"""
    from payment_templates.services.catalog import get_catalog

    catalog = get_catalog()
    template_list = catalog.list_all() if all_templates else catalog.list_active()

    if not template_list:
        console.print("[yellow]No templates available[/yellow]")
        return

    table = Table(title="Plantillas disponibles")
    table.add_column("ID", style="cyan")
    table.add_column("Nombre", style="green")
    table.add_column("Categoría")
    table.add_column("Versión", justify="right")
    table.add_column("Campos", justify="right")

    for template in template_list:
        table.add_row(
            template.id,
            template.name,
            template.category or "-",
            template.version,
            str(len(template.field_ids)),
        )

    console.print(table)
    console.print("\nUse [cyan]python -m payment_templates template <id> --fields[/cyan] to see the fields")


@app.command("template")
def template_detail(
    template_id: str = typer.Argument(..., help="Template id, e.g. tarjetas-tukash"),
    fields: bool = typer.Option(False, "--fields", "-f", help="Show fields per section"),
):
    """Show template details"""
    from payment_templates.services.catalog import TemplateNotFoundError, get_catalog

    try:
        template = get_catalog().load(template_id)
    except TemplateNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{template.name}[/bold] ({template.id} v{template.version})")
    console.print(template.description)
    if template.config and template.config.allowed_file_types:
        console.print(f"Tipos permitidos: {', '.join(template.config.allowed_file_types)}")

    if not fields:
        return

    for section in template.sections:
        table = Table(title=section.title)
        table.add_column("ID", style="cyan")
        table.add_column("Etiqueta")
        table.add_column("Tipo")
        table.add_column("Requerido", justify="center")
        table.add_column("Depende de")
        for field in section.fields:
            deps = ", ".join(f"{d.action.value} si {d.field_id}={d.value}" for d in field.dependencies)
            table.add_row(field.id, field.label, field.kind.value, "sí" if field.required else "", deps)
        console.print(table)


@app.command("validate")
def validate(
    template_id: str = typer.Argument(..., help="Template id"),
    data_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with the form data"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Validate form data against a template (exit code 1 when invalid)"""
    validate_command(template_id, data_file, json_output)


@app.command("detect")
def detect(
    request_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a stored request"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Detect the template of a stored request and show its normalized data"""
    from payment_templates.models.request import StoredRequest
    from payment_templates.services.labels import get_field_label, is_hidden_field
    from payment_templates.services.stored_requests import (
        detect_template_id,
        normalize_legacy_fields,
        parse_stored_payload,
    )

    request = StoredRequest.model_validate_json(request_file.read_text(encoding="utf-8"))
    template_id = detect_template_id(request)
    datos = normalize_legacy_fields(template_id, parse_stored_payload(request.plantilla_datos))
    datos.pop("templateType", None)

    if json_output:
        print(json.dumps({"template_id": template_id, "datos": datos}, ensure_ascii=False, indent=2))
        return

    if template_id is None:
        console.print("[yellow]No template detected for this request[/yellow]")
        return

    table = Table(title=f"Plantilla: {template_id}")
    table.add_column("Campo", style="cyan")
    table.add_column("Valor")
    for key, value in datos.items():
        if is_hidden_field(template_id, key):
            continue
        table.add_row(get_field_label(template_id, key), str(value))
    console.print(table)


@app.command("fill")
def fill(
    template_id: str = typer.Argument(..., help="Template id"),
):
    """Fill a template interactively and print the submission payload"""
    fill_command(template_id)


if __name__ == "__main__":
    app()
