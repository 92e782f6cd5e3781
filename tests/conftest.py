"""Shared fixtures for the test suite"""

from pathlib import Path

import pytest

from payment_templates.models.template import Template
from payment_templates.services.catalog import TemplateCatalog
from payment_templates.services.form_engine import TemplateFormEngine

PROJECT_ROOT = Path(__file__).parent.parent

MB = 1024 * 1024


def make_template(*campos, template_id="prueba", configuracion=None) -> Template:
    """Single-section template built from raw field dicts"""
    raw = {
        "id": template_id,
        "nombre": "PLANTILLA DE PRUEBA",
        "version": "1.0",
        "secciones": [{"id": "general", "titulo": "General", "campos": list(campos)}],
    }
    if configuracion is not None:
        raw["configuracion"] = configuracion
    return Template.model_validate(raw)


@pytest.fixture
def engine() -> TemplateFormEngine:
    return TemplateFormEngine()


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog()


@pytest.fixture
def card_destination_template() -> Template:
    """Destination-type selector with a card-type field shown and required for cards"""
    return make_template(
        {
            "id": "tipo_cuenta_destino",
            "tipo": "select",
            "etiqueta": "Tipo de Cuenta Destino",
            "opciones": [
                {"valor": "CLABE", "etiqueta": "CLABE"},
                {"valor": "Tarjeta", "etiqueta": "Tarjeta"},
            ],
        },
        {
            "id": "tipo_tarjeta",
            "tipo": "select",
            "etiqueta": "Tipo de Tarjeta",
            "dependencias": [
                {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "show"},
                {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "require"},
            ],
        },
        template_id="tarjetas-tukash",
    )


# Values that make every always-visible required field of tarjetas-tukash valid
TUKASH_BASE_DATA = {
    "asunto": "FONDEO_TARJETAS_TUKASH",
    "cliente": "ACME SA DE CV",
    "beneficiario_tarjeta": "Juan Pérez",
    "monto_total_cliente": "1000",
    "monto_total_tukash": "1000",
}
