"""Interactive fill command implementation"""

import json

import typer
from rich.console import Console
from rich.prompt import Prompt

from payment_templates.models.template import FieldKind, TemplateField
from payment_templates.services.catalog import TemplateNotFoundError, get_catalog
from payment_templates.services.form_engine import TemplateFormEngine

console = Console(stderr=True)

MAX_ROUNDS = 3

LIST_KINDS = (FieldKind.CHECKBOX, FieldKind.MULTI_SELECT)


def _ask(field: TemplateField, current) -> object:
    """Prompt for one field; list kinds take comma-separated values"""
    if field.options and len(field.options) <= 10:
        choices = ", ".join(o.value for o in field.options)
        console.print(f"  [dim]Opciones: {choices}[/dim]")
    if field.help:
        console.print(f"  [dim]{field.help}[/dim]")

    default = ", ".join(current) if isinstance(current, list) else str(current or "")
    answer = Prompt.ask(field.label, default=default, console=console)

    if field.kind in LIST_KINDS:
        return [item.strip() for item in answer.split(",") if item.strip()]
    return answer


def fill_command(template_id: str):
    try:
        template = get_catalog().load(template_id)
    except TemplateNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    engine = TemplateFormEngine()
    engine.select_template(template)
    console.print(f"[bold blue]{template.name}[/bold blue]")

    # first round asks every visible field, later rounds only the failing ones
    pending = None
    for _ in range(MAX_ROUNDS):
        for section in template.sections:
            for field in section.fields:
                if field.id not in engine.campos_visibles or field.kind is FieldKind.FILE:
                    continue
                if pending is not None and field.id not in pending:
                    continue
                engine.update_field(field.id, _ask(field, engine.datos.get(field.id)))
                error = engine.errores.get(field.id)
                if error:
                    console.print(f"  [red]{error}[/red]")

        payload = engine.begin_submission()
        if payload is not None:
            print(json.dumps(payload.model_dump(by_alias=True, mode="json"), ensure_ascii=False, indent=2))
            engine.finish_submission(success=True)
            return

        pending = set(engine.errores)
        skipped = [fid for fid in pending if template.get_field(fid).kind is FieldKind.FILE]
        if skipped:
            console.print(f"[red]Campos de archivo requeridos: {', '.join(skipped)}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[yellow]Corrija {len(pending)} campo(s)[/yellow]")

    console.print("[red]El formulario sigue con errores[/red]")
    raise typer.Exit(code=1)
