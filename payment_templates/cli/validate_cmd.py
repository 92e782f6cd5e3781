"""Validate command implementation"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from payment_templates.services.catalog import TemplateNotFoundError, get_catalog
from payment_templates.services.form_engine import TemplateFormEngine

console = Console()


def _read_form_data(data_file: Path) -> dict:
    """Form values from a file holding either the values or a submission payload"""
    data = json.loads(data_file.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise typer.BadParameter("Form data must be a JSON object", param_hint="DATA_FILE")
    if isinstance(data.get("datos_formulario"), dict):
        return data["datos_formulario"]
    return data


def validate_command(template_id: str, data_file: Path, json_output: bool = False):
    try:
        template = get_catalog().load(template_id)
    except TemplateNotFoundError as e:
        if json_output:
            print(json.dumps({"error": str(e)}, ensure_ascii=False))
        else:
            console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    engine = TemplateFormEngine()
    engine.select_template(template, _read_form_data(data_file))
    valid = engine.validate_all()

    if json_output:
        output = {
            "template_id": template.id,
            "valid": valid,
            "errores": engine.errores,
            "campos_visibles": [fid for fid in template.field_ids if fid in engine.campos_visibles],
        }
        print(json.dumps(output, ensure_ascii=False, indent=2))
    elif valid:
        console.print(f"[green][OK] Datos válidos para {template.name}[/green]")
    else:
        table = Table(title=f"Errores en {template.name}")
        table.add_column("Campo", style="cyan")
        table.add_column("Error", style="red")
        for field_id, message in engine.errores.items():
            table.add_row(field_id, message)
        console.print(table)

    if not valid:
        raise typer.Exit(code=1)
