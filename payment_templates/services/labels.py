"""Display labels of stored request columns, per template"""

from typing import Optional

from pydantic import BaseModel


class TemplateLabels(BaseModel):
    name: str
    labels: dict[str, str]
    hidden_fields: list[str] = []


_SUA_LABELS = {
    "tipo_cuenta_destino": "Forma de Pago",
    "banco_destino": "Banco",
    "cuenta_destino": "Número de Cuenta",
    "fecha_limite_pago": "Fecha Límite de Pago",
    "empresa_a_pagar": "Se paga por",
    "nombre_persona": "Nombre del Beneficiario",
    "concepto": "Concepto del Pago",
    "monto": "Monto Total",
    "asunto": "Asunto",
    "empresa": "Se paga por",
    "cliente": "Cliente",
    "linea_captura": "Línea de Captura",
    "fecha_limite": "Fecha Límite",
    "numero_empleado": "Número de Empleado",
    "dias_pagar": "Días a Pagar",
    "imss": "IMSS",
    "infonavit": "INFONAVIT",
}

TEMPLATE_LABELS = {
    "pago-sua-internas": TemplateLabels(
        name="PAGO SUA INTERNAS",
        labels=_SUA_LABELS,
        hidden_fields=["cuenta", "banco_cuenta"],
    ),
    "pago-sua-frenshetsi": TemplateLabels(
        name="PAGO SUA FRENSHETSI",
        labels=_SUA_LABELS,
        hidden_fields=["cuenta", "banco_cuenta"],
    ),
    "tarjetas-tukash": TemplateLabels(
        name="SOLICITUD DE PAGO TUKASH",
        labels={
            "tipo_cuenta_destino": "Tipo de Tarjeta",
            "banco_destino": "Banco Emisor",
            "cuenta_destino": "Número de Tarjeta",
            "fecha_limite_pago": "Fecha Límite de Pago",
            "empresa_a_pagar": "Empresa que Solicita",
            "nombre_persona": "Titular de la Tarjeta",
            "concepto": "Concepto del Pago",
            "monto": "Monto a Pagar",
            "asunto": "Asunto",
            "cliente": "Cliente",
            "beneficiario_tarjeta": "Beneficiario de la Tarjeta",
            "numero_tarjeta": "Número de Tarjeta",
            "monto_total_cliente": "Monto Total Cliente",
            "monto_total_tukash": "Monto Total TUKASH",
        },
        hidden_fields=["cuenta", "banco_cuenta"],
    ),
    "pago-comisiones": TemplateLabels(
        name="PAGO COMISIONES",
        labels={
            "tipo_cuenta_destino": "Método de Pago",
            "banco_destino": "Institución Bancaria",
            "cuenta_destino": "CLABE/Cuenta Destino",
            "fecha_limite_pago": "Fecha Límite",
            "empresa_a_pagar": "Beneficiario/Empresa",
            "nombre_persona": "Persona que Recibe",
            "concepto": "Concepto de Comisión",
            "monto": "Monto de Comisión",
            "asunto": "Asunto",
            "cliente": "Cliente",
            "porcentaje_comision": "Porcentaje de Comisión",
            "base_comision": "Base para Comisión",
        },
        hidden_fields=["cuenta", "banco_cuenta"],
    ),
    "pago-polizas": TemplateLabels(
        name="PAGO PÓLIZAS",
        labels={
            "tipo_cuenta_destino": "Método de Pago Principal",
            "banco_destino": "Banco Principal",
            "cuenta_destino": "Cuenta Principal",
            "fecha_limite_pago": "Fecha Límite de Pago",
            "empresa_a_pagar": "GNP Seguros",
            "nombre_persona": "Asegurado/Beneficiario",
            "concepto": "Concepto de Póliza",
            "monto": "Prima Total",
            "asunto": "Asunto",
            "cliente": "Cliente/Asegurado",
            "numero_poliza": "Número de Póliza",
            "tipo_seguro": "Tipo de Seguro",
            "vigencia_desde": "Vigencia Desde",
            "vigencia_hasta": "Vigencia Hasta",
        },
    ),
    "regresos-transferencia": TemplateLabels(
        name="REGRESOS EN TRANSFERENCIA",
        labels={
            "tipo_cuenta_destino": "Método de Transferencia",
            "banco_destino": "Banco Destino",
            "cuenta_destino": "Cuenta de Regreso",
            "fecha_limite_pago": "Fecha de Procesamiento",
            "empresa_a_pagar": "Cliente",
            "nombre_persona": "Beneficiario del Regreso",
            "concepto": "Motivo del Regreso",
            "monto": "Monto a Regresar",
            "asunto": "Asunto",
            "cliente": "Cliente",
            "motivo_regreso": "Motivo del Regreso",
            "fecha_original": "Fecha de Pago Original",
        },
    ),
    "regresos-efectivo": TemplateLabels(
        name="REGRESOS EN EFECTIVO",
        labels={
            "tipo_cuenta_destino": "Tipo de Entrega",
            "banco_destino": "Método de Pago",
            "cuenta_destino": "Forma de Entrega",
            "fecha_limite_pago": "Fecha de Entrega",
            "empresa_a_pagar": "Cliente",
            "nombre_persona": "Persona que Recibe",
            "concepto": "Concepto del Regreso",
            "monto": "Monto Total en Efectivo",
            "asunto": "Asunto",
            "cliente": "Cliente",
            "persona_recibe": "Persona que Recibe",
            "fecha_entrega": "Fecha de Entrega",
            "monto_efectivo": "Monto en Efectivo",
            "viaticos": "Viáticos",
            "elementos_adicionales": "Elementos Adicionales",
        },
        hidden_fields=["cuenta", "banco_cuenta", "cuenta_destino_2", "banco_destino_2"],
    ),
}


def get_template_labels(template_id: Optional[str]) -> Optional[TemplateLabels]:
    if not template_id:
        return None
    return TEMPLATE_LABELS.get(template_id)


def get_field_label(template_id: Optional[str], field: str) -> str:
    """Label for a stored column; the column name itself when there is no mapping"""
    mapping = get_template_labels(template_id)
    if mapping is None:
        return field
    return mapping.labels.get(field, field)


def is_hidden_field(template_id: Optional[str], field: str) -> bool:
    mapping = get_template_labels(template_id)
    return bool(mapping and field in mapping.hidden_fields)
