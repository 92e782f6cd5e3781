"""Helpers for reopening previously stored payment requests"""

import json
import logging
import re
from datetime import date, datetime
from typing import Any, Optional, Union

from payment_templates.models.request import StoredRequest
from payment_templates.models.template import Template
from payment_templates.services.catalog import TemplateCatalog
from payment_templates.services.form_engine import TemplateFormEngine

logger = logging.getLogger(__name__)

DESCRIPTION_PREFIX = "Plantilla:"

# Template display names used in tipo_pago_descripcion
NAME_TO_ID = {
    "PAGO SUA INTERNAS": "pago-sua-internas",
    "PAGO SUA FRENSHETSI": "pago-sua-frenshetsi",
    "PAGO COMISIONES": "pago-comisiones",
    "PAGO POLIZAS": "pago-polizas",
    "PAGO PÓLIZAS": "pago-polizas",
    "REGRESOS EN TRANSFERENCIA": "regresos-transferencia",
    "REGRESOS EN EFECTIVO": "regresos-efectivo",
    "SOLICITUD DE PAGO TARJETAS N09 Y TOKA": "tarjetas-n09-toka",
    "PAGO TUKASH": "tarjetas-tukash",
    "SOLICITUD DE PAGO TARJETAS TUKASH": "tarjetas-tukash",
    "PAGO DE SERVICIOS INTERNOS": "pago-servicios-internos",
}

# Older ids still found in stored requests
ID_ALIASES = {
    "tukash": "tarjetas-tukash",
    "pago-polizasp": "pago-polizas",
}

# Renamed fields per template: legacy name -> current name
LEGACY_FIELDS = {
    "tarjetas-tukash": {
        "beneficiario": "beneficiario_tarjeta",
        "monto": "monto_total_tukash",
    },
}

SUA_MARKERS = ("SUA FRENSHETSI", "SUA INTERNAS", "FRENSHETSI")
SUA_TEMPLATE_IDS = ("pago-sua-frenshetsi", "pago-sua-internas")

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_stored_payload(raw: Union[str, dict, None]) -> dict[str, Any]:
    """Decode ``plantilla_datos``. Malformed or non-object JSON yields ``{}``."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return dict(raw)
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse plantilla_datos: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"plantilla_datos is not an object: {type(data).__name__}")
        return {}
    return data


def detect_template_id(request: StoredRequest) -> Optional[str]:
    """Template id of a stored request.

    Looks at ``templateType`` inside the payload first (``NORMAL`` means a
    plain request), then at ``tipo_pago_descripcion`` of the form
    ``Plantilla: <id or display name>``.
    """
    payload = parse_stored_payload(request.plantilla_datos)
    template_type = payload.get("templateType")
    if isinstance(template_type, str) and template_type and template_type != "NORMAL":
        return ID_ALIASES.get(template_type, template_type)

    description = request.tipo_pago_descripcion or ""
    if not description.startswith(DESCRIPTION_PREFIX):
        return None
    part = description[len(DESCRIPTION_PREFIX):].strip()
    if not part:
        return None
    if part in ID_ALIASES:
        return ID_ALIASES[part]
    if "-" in part:
        return part
    return NAME_TO_ID.get(part.upper())


def normalize_legacy_fields(template_id: Optional[str], datos: dict[str, Any]) -> dict[str, Any]:
    """Copy values saved under old field names into their current fields.

    Runs once when stored data is loaded; a current field that already holds
    a value is never overwritten. Returns a new dict.
    """
    normalized = dict(datos)
    for old, new in LEGACY_FIELDS.get(template_id or "", {}).items():
        if normalized.get(old) and not normalized.get(new):
            normalized[new] = normalized[old]
    return normalized


def load_for_edit(
    engine: TemplateFormEngine,
    catalog: TemplateCatalog,
    request: StoredRequest,
) -> Optional[Template]:
    """Open a stored request in ``engine``: detect, parse, migrate and select.

    Returns the selected template, or None when the request does not belong
    to a known template (the engine is left untouched).
    """
    template_id = detect_template_id(request)
    template = catalog.get(template_id) if template_id else None
    if template is None:
        logger.info(f"Request {request.id_solicitud}: no template detected ({template_id})")
        return None

    datos = parse_stored_payload(request.plantilla_datos)
    datos.pop("templateType", None)
    engine.select_template(template, normalize_legacy_fields(template.id, datos))
    return template


def _format_fallback(fallback: Union[str, date, None]) -> str:
    if not fallback:
        return ""
    if isinstance(fallback, date):
        return fallback.strftime("%Y-%m-%d")
    try:
        return datetime.fromisoformat(fallback.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return ""


def extract_deadline(
    plantilla_datos: Union[str, dict, None],
    fallback: Union[str, date, None] = None,
) -> str:
    """Payment deadline (``YYYY-MM-DD``) stored in a SUA payload, else the formatted fallback"""
    deadline = parse_stored_payload(plantilla_datos).get("fecha_limite")
    if isinstance(deadline, str) and ISO_DATE_RE.match(deadline):
        return deadline
    return _format_fallback(fallback)


def uses_template_deadline(request: Optional[StoredRequest]) -> bool:
    """Whether the request's deadline lives in its payload (SUA templates)"""
    if request is None:
        return False
    if request.plantilla_datos:
        return bool(parse_stored_payload(request.plantilla_datos).get("fecha_limite"))
    concepto = request.concepto or ""
    description = request.tipo_pago_descripcion or ""
    return any(marker in concepto for marker in SUA_MARKERS) or any(
        template_id in description for template_id in SUA_TEMPLATE_IDS
    )
