"""Built-in payment-request templates.

Stored with the keys of the template configuration format so the same dicts
can be dumped to / loaded from JSON files.
"""

from payment_templates.data.bancos import bank_names

MB = 1024 * 1024

ARCHIVOS_PERMITIDOS = [".pdf", ".jpg", ".jpeg", ".png", ".xlsx", ".xls", ".doc", ".docx"]

MONEDAS = [
    {"valor": "MXN", "etiqueta": "Pesos Mexicanos (MXN)"},
    {"valor": "USD", "etiqueta": "Dólares Americanos (USD)"},
    {"valor": "EUR", "etiqueta": "Euros (EUR)"},
]


def _config_archivos(tamano_maximo=10 * MB, multiples=True):
    return {
        "permiteArchivosMultiples": multiples,
        "tiposArchivosPermitidos": ARCHIVOS_PERMITIDOS,
        "tamanoMaximoArchivo": tamano_maximo,
        "mostrarProgreso": True,
    }


def _asunto(*opciones):
    return {
        "id": "asunto",
        "nombre": "asunto",
        "tipo": "radio",
        "etiqueta": "Asunto",
        "valorPorDefecto": "",
        "opciones": [{"valor": valor, "etiqueta": etiqueta} for valor, etiqueta in opciones],
        "validaciones": {"requerido": True, "mensaje": "Debe seleccionar un tipo de asunto"},
        "estilos": {"ancho": "completo"},
    }


def _texto(id, etiqueta, requerido=True, min_length=None, max_length=None, **extra):
    validaciones = {"requerido": requerido}
    if min_length is not None:
        validaciones["minLength"] = min_length
    if max_length is not None:
        validaciones["maxLength"] = max_length
    return {
        "id": id,
        "nombre": id,
        "tipo": "texto",
        "etiqueta": etiqueta,
        "valorPorDefecto": "",
        "validaciones": validaciones,
        **extra,
    }


def _monto(id="monto", etiqueta="Monto", **extra):
    return {
        "id": id,
        "nombre": id,
        "tipo": "moneda",
        "etiqueta": etiqueta,
        "placeholder": "$0.00",
        "valorPorDefecto": "",
        "validaciones": {"requerido": True, "mensaje": f"{etiqueta} es requerido y debe ser mayor a 0"},
        "estilos": {"ancho": "medio"},
        **extra,
    }


def _fecha(id, etiqueta, requerido=True):
    return {
        "id": id,
        "nombre": id,
        "tipo": "fecha",
        "etiqueta": etiqueta,
        "validaciones": {"requerido": requerido},
        "estilos": {"ancho": "medio"},
    }


def _banco(id="banco_destino", etiqueta="Banco Destino", **extra):
    return {
        "id": id,
        "nombre": id,
        "tipo": "banco",
        "etiqueta": etiqueta,
        "opciones": [{"valor": nombre, "etiqueta": nombre} for nombre in bank_names()],
        "validaciones": {"requerido": True, "mensaje": "Debe seleccionar un banco"},
        **extra,
    }


def _archivos(id="archivos_adjuntos", etiqueta="Documentos", requerido=True, ayuda=None):
    campo = {
        "id": id,
        "nombre": id,
        "tipo": "archivo",
        "etiqueta": etiqueta,
        "valorPorDefecto": [],
        "validaciones": {"requerido": requerido},
        "estilos": {"ancho": "completo"},
    }
    if requerido:
        campo["validaciones"]["mensaje"] = "Debe adjuntar al menos un archivo"
    if ayuda:
        campo["ayuda"] = ayuda
    return campo


def _seccion_documentos(**kwargs):
    return {
        "id": "documentos",
        "titulo": "Archivos Adjuntos",
        "descripcion": "Documentos de soporte para la solicitud",
        "campos": [_archivos(**kwargs)],
        "estilos": {"columnas": 1, "espaciado": "amplio"},
    }


def _seccion_cuenta_destino():
    """Transfer destination: CLABE or account number plus bank"""
    return {
        "id": "datos-bancarios",
        "titulo": "Datos Bancarios",
        "descripcion": "Información de la cuenta destino",
        "campos": [
            {
                "id": "tipo_cuenta_destino",
                "nombre": "tipo_cuenta_destino",
                "tipo": "radio",
                "etiqueta": "Tipo de Cuenta",
                "valorPorDefecto": "CLABE",
                "opciones": [
                    {"valor": "CLABE", "etiqueta": "CLABE Interbancaria"},
                    {"valor": "CUENTA", "etiqueta": "Número de Cuenta"},
                ],
                "validaciones": {"requerido": True},
                "estilos": {"ancho": "medio"},
            },
            {
                "id": "cuenta_destino",
                "nombre": "cuenta_destino",
                "tipo": "cuenta_clabe",
                "etiqueta": "CUENTA/CLABE",
                "validaciones": {"requerido": True, "soloNumeros": True},
                "estilos": {"ancho": "medio"},
            },
            _banco(),
            _texto("beneficiario", "Beneficiario", min_length=3, max_length=200),
        ],
        "estilos": {"columnas": 2, "espaciado": "normal"},
    }


TARJETAS_N09_TOKA = {
    "id": "tarjetas-n09-toka",
    "nombre": "SOLICITUD DE PAGO TARJETAS N09 Y TOKA",
    "descripcion": "Plantilla especializada para pagos a proveedores de tarjetas N09 y fondeo de tarjeta AVIT",
    "version": "1.0",
    "activa": True,
    "icono": "💳",
    "color": "blue",
    "categoria": "Pagos Corporativos",
    "secciones": [
        {
            "id": "informacion-basica",
            "titulo": "Información Básica",
            "descripcion": "Datos principales de la solicitud",
            "campos": [
                _asunto(
                    ("PAGO_PROVEEDOR_N09", "PAGO A PROVEEDOR DE TARJETA N09"),
                    ("TOKA_FONDEO_AVIT", "TOKA PARA FONDEO TARJETA AVIT 020925"),
                ),
                _texto(
                    "beneficiario", "Beneficiario", min_length=5, max_length=200,
                    placeholder="Ej. COMERCIALIZADORA DEDAI SA DE CV",
                    validaciones={
                        "requerido": True,
                        "minLength": 5,
                        "maxLength": 200,
                        "mensaje": "El beneficiario es requerido y debe tener entre 5 y 200 caracteres",
                    },
                ),
            ],
            "estilos": {"columnas": 1, "espaciado": "normal"},
        },
        {
            "id": "datos-bancarios",
            "titulo": "Datos Bancarios",
            "descripcion": "Información de la cuenta destino",
            "campos": [
                {
                    "id": "tipo_cuenta",
                    "nombre": "tipo_cuenta",
                    "tipo": "radio",
                    "etiqueta": "Tipo de Cuenta",
                    "ayuda": "Seleccione si utilizará CLABE o número de cuenta",
                    "valorPorDefecto": "CLABE",
                    "opciones": [
                        {"valor": "CLABE", "etiqueta": "CLABE Interbancaria",
                         "descripcion": "Clave Bancaria Estandarizada (18 dígitos)"},
                        {"valor": "CUENTA", "etiqueta": "Número de Cuenta",
                         "descripcion": "Número de cuenta bancaria (máximo 18 dígitos)"},
                    ],
                    "validaciones": {"requerido": True},
                    "estilos": {"ancho": "medio"},
                },
                {
                    "id": "numero_cuenta",
                    "nombre": "numero_cuenta",
                    "tipo": "cuenta_clabe",
                    "etiqueta": "CUENTA/CLABE",
                    "placeholder": "646014342400009000",
                    "valorPorDefecto": "",
                    "validaciones": {
                        "requerido": True,
                        "soloNumeros": True,
                        "mensaje": "Ingrese un número de cuenta válido",
                    },
                    "dependencias": [{"campo": "tipo_cuenta", "valor": "CLABE", "accion": "mostrar"}],
                    "estilos": {"ancho": "medio"},
                },
                {
                    "id": "numero_cuenta_alterna",
                    "nombre": "numero_cuenta_alterna",
                    "tipo": "cuenta_clabe",
                    "etiqueta": "Número de Cuenta",
                    "valorPorDefecto": "",
                    "validaciones": {"soloNumeros": True},
                    "dependencias": [
                        {"campo": "tipo_cuenta", "valor": "CUENTA", "accion": "mostrar"},
                        {"campo": "tipo_cuenta", "valor": "CUENTA", "accion": "requerir"},
                    ],
                    "estilos": {"ancho": "medio"},
                },
                _banco(valorPorDefecto="STP"),
            ],
            "estilos": {"columnas": 2, "espaciado": "normal"},
        },
        {
            "id": "monto-pago",
            "titulo": "Información del Pago",
            "descripcion": "Detalles del monto a transferir",
            "campos": [
                _monto(placeholder="$56,250.36", ayuda="Monto a pagar al proveedor"),
                {
                    "id": "moneda",
                    "nombre": "moneda",
                    "tipo": "select",
                    "etiqueta": "Moneda",
                    "valorPorDefecto": "MXN",
                    "opciones": MONEDAS,
                    "validaciones": {"requerido": True},
                    "estilos": {"ancho": "medio"},
                },
            ],
            "estilos": {"columnas": 2, "espaciado": "normal"},
        },
        _seccion_documentos(
            etiqueta="Documentos",
            ayuda="Un excel con el cálculo de las comisiones y una imagen o pdf con el comprobante del pago",
        ),
    ],
    "configuracion": _config_archivos(),
    "metadatos": {"creadoPor": "Sistema", "usosFrecuentes": 0},
}

TARJETAS_TUKASH = {
    "id": "tarjetas-tukash",
    "nombre": "SOLICITUD DE PAGO TARJETAS TUKASH",
    "descripcion": "Fondeo de tarjetas TUKASH de clientes",
    "version": "1.0",
    "activa": True,
    "icono": "💳",
    "color": "purple",
    "categoria": "Pagos Corporativos",
    "secciones": [
        {
            "id": "informacion-basica",
            "titulo": "Información Básica",
            "campos": [
                _asunto(("FONDEO_TARJETAS_TUKASH", "FONDEO DE TARJETAS TUKASH")),
                _texto("cliente", "Cliente", min_length=3, max_length=200),
                _texto("beneficiario_tarjeta", "Beneficiario de la Tarjeta", min_length=3, max_length=200),
            ],
        },
        {
            "id": "datos-destino",
            "titulo": "Destino del Pago",
            "campos": [
                {
                    "id": "tipo_cuenta_destino",
                    "nombre": "tipo_cuenta_destino",
                    "tipo": "select",
                    "etiqueta": "Tipo de Cuenta Destino",
                    "opciones": [
                        {"valor": "CLABE", "etiqueta": "CLABE Interbancaria"},
                        {"valor": "Tarjeta", "etiqueta": "Tarjeta"},
                    ],
                },
                {
                    "id": "tipo_tarjeta",
                    "nombre": "tipo_tarjeta",
                    "tipo": "select",
                    "etiqueta": "Tipo de Tarjeta",
                    "opciones": [
                        {"valor": "DEBITO", "etiqueta": "Débito"},
                        {"valor": "CREDITO", "etiqueta": "Crédito"},
                    ],
                    "dependencias": [
                        {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "mostrar"},
                        {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "requerir"},
                    ],
                },
                {
                    "id": "numero_tarjeta",
                    "nombre": "numero_tarjeta",
                    "tipo": "texto",
                    "etiqueta": "Número de Tarjeta",
                    "validaciones": {
                        "longitudExacta": 16,
                        "soloNumeros": True,
                        "mensaje": "El número de tarjeta debe tener 16 dígitos",
                    },
                    "dependencias": [
                        {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "mostrar"},
                        {"campo": "tipo_cuenta_destino", "valor": "Tarjeta", "accion": "requerir"},
                    ],
                },
                {
                    "id": "cuenta_destino",
                    "nombre": "cuenta_destino",
                    "tipo": "cuenta_clabe",
                    "etiqueta": "CLABE",
                    "validaciones": {"soloNumeros": True},
                    "dependencias": [
                        {"campo": "tipo_cuenta_destino", "valor": "CLABE", "accion": "mostrar"},
                        {"campo": "tipo_cuenta_destino", "valor": "CLABE", "accion": "requerir"},
                    ],
                },
            ],
            "estilos": {"columnas": 2},
        },
        {
            "id": "montos",
            "titulo": "Montos",
            "campos": [
                _monto("monto_total_cliente", "Monto Total Cliente"),
                _monto("monto_total_tukash", "Monto Total TUKASH"),
            ],
            "estilos": {"columnas": 2},
        },
        _seccion_documentos(requerido=False),
    ],
    "configuracion": _config_archivos(),
}

PAGO_COMISIONES = {
    "id": "pago-comisiones",
    "nombre": "PAGO COMISIONES",
    "descripcion": "Pago de comisiones a empresas y clientes",
    "version": "1.0",
    "activa": True,
    "icono": "💼",
    "categoria": "Comisiones",
    "secciones": [
        {
            "id": "informacion-basica",
            "titulo": "Información de la Comisión",
            "campos": [
                _asunto(("PAGO_COMISIONES", "PAGO DE COMISIONES")),
                _texto("empresa", "Empresa que paga la comisión", min_length=2, max_length=200),
                _texto("cliente", "Cliente", min_length=2, max_length=200),
                _monto(etiqueta="Monto de Comisión"),
                {
                    "id": "porcentaje_comision",
                    "nombre": "porcentaje_comision",
                    "tipo": "numero",
                    "etiqueta": "Porcentaje de Comisión",
                    "validaciones": {"patron": r"^\d{1,3}(\.\d{1,2})?$"},
                    "estilos": {"ancho": "cuarto"},
                },
                {
                    "id": "periodo_comision",
                    "nombre": "periodo_comision",
                    "tipo": "select",
                    "etiqueta": "Periodo de la Comisión",
                    "opciones": [
                        {"valor": "MENSUAL", "etiqueta": "Mensual"},
                        {"valor": "TRIMESTRAL", "etiqueta": "Trimestral"},
                        {"valor": "ANUAL", "etiqueta": "Anual"},
                    ],
                },
                _fecha("fecha_limite", "Fecha Límite de Pago"),
            ],
        },
        _seccion_cuenta_destino(),
        _seccion_documentos(ayuda="Excel con el cálculo de las comisiones"),
    ],
    "configuracion": _config_archivos(),
}

PAGO_POLIZAS = {
    "id": "pago-polizas",
    "nombre": "PAGO PÓLIZAS",
    "descripcion": "Pago de primas de pólizas de seguro",
    "version": "1.0",
    "activa": True,
    "icono": "🛡️",
    "categoria": "Seguros",
    "secciones": [
        {
            "id": "poliza",
            "titulo": "Datos de la Póliza",
            "campos": [
                _asunto(("PAGO_POLIZA_GNP", "PAGO DE PÓLIZA GNP")),
                _texto("empresa", "Aseguradora", valorPorDefecto="GNP Seguros", estilos={"soloLectura": True}),
                _texto("cliente", "Cliente/Asegurado", min_length=3, max_length=200),
                _texto("numero_poliza", "Número de Póliza", min_length=4, max_length=30),
                {
                    "id": "tipo_seguro",
                    "nombre": "tipo_seguro",
                    "tipo": "select",
                    "etiqueta": "Tipo de Seguro",
                    "opciones": [
                        {"valor": "GMM", "etiqueta": "Gastos Médicos Mayores"},
                        {"valor": "VIDA", "etiqueta": "Vida"},
                        {"valor": "AUTO", "etiqueta": "Automóvil"},
                        {"valor": "DANOS", "etiqueta": "Daños"},
                    ],
                    "validaciones": {"requerido": True},
                },
                _fecha("vigencia_desde", "Vigencia Desde", requerido=False),
                _fecha("vigencia_hasta", "Vigencia Hasta", requerido=False),
                _monto(etiqueta="Prima Total"),
                _fecha("fecha_limite", "Fecha Límite de Pago"),
            ],
        },
        _seccion_documentos(ayuda="Carátula de la póliza y aviso de cobro"),
    ],
    "configuracion": _config_archivos(),
}

REGRESOS_TRANSFERENCIA = {
    "id": "regresos-transferencia",
    "nombre": "REGRESOS EN TRANSFERENCIA",
    "descripcion": "Devolución de pagos a clientes mediante transferencia",
    "version": "1.0",
    "activa": True,
    "icono": "↩️",
    "categoria": "Regresos",
    "secciones": [
        {
            "id": "regreso",
            "titulo": "Datos del Regreso",
            "campos": [
                _asunto(("REGRESO_TRANSFERENCIA", "REGRESO EN TRANSFERENCIA")),
                _texto("cliente", "Cliente", min_length=2, max_length=200),
                {
                    "id": "motivo_regreso",
                    "nombre": "motivo_regreso",
                    "tipo": "textarea",
                    "etiqueta": "Motivo del Regreso",
                    "validaciones": {"requerido": True, "minLength": 10, "maxLength": 500},
                },
                _fecha("fecha_original", "Fecha de Pago Original", requerido=False),
                _monto(etiqueta="Monto a Regresar"),
            ],
        },
        _seccion_cuenta_destino(),
        _seccion_documentos(ayuda="Comprobante del pago original"),
    ],
    "configuracion": _config_archivos(),
}

REGRESOS_EFECTIVO = {
    "id": "regresos-efectivo",
    "nombre": "REGRESOS EN EFECTIVO",
    "descripcion": "Devolución de pagos a clientes en efectivo",
    "version": "1.0",
    "activa": True,
    "icono": "💵",
    "categoria": "Regresos",
    "secciones": [
        {
            "id": "regreso",
            "titulo": "Datos del Regreso",
            "campos": [
                _asunto(("REGRESO_EFECTIVO", "REGRESO EN EFECTIVO")),
                _texto("cliente", "Cliente", min_length=2, max_length=200),
                _texto("persona_recibe", "Persona que Recibe", min_length=3, max_length=200),
                _fecha("fecha_entrega", "Fecha de Entrega"),
                _monto("monto_efectivo", "Monto en Efectivo"),
                {
                    "id": "incluye_viaticos",
                    "nombre": "incluye_viaticos",
                    "tipo": "radio",
                    "etiqueta": "¿Incluye viáticos?",
                    "valorPorDefecto": "NO",
                    "opciones": [
                        {"valor": "SI", "etiqueta": "Sí"},
                        {"valor": "NO", "etiqueta": "No"},
                    ],
                },
                {
                    **_monto("viaticos", "Viáticos"),
                    "validaciones": {},
                    "dependencias": [
                        {"campo": "incluye_viaticos", "valor": "SI", "accion": "mostrar"},
                        {"campo": "incluye_viaticos", "valor": "SI", "accion": "requerir"},
                    ],
                },
                {
                    "id": "elementos_adicionales",
                    "nombre": "elementos_adicionales",
                    "tipo": "checkbox",
                    "etiqueta": "Elementos Adicionales",
                    "valorPorDefecto": [],
                    "opciones": [
                        {"valor": "ESCOLTA", "etiqueta": "Escolta"},
                        {"valor": "VEHICULO", "etiqueta": "Vehículo blindado"},
                        {"valor": "RECIBO_FIRMADO", "etiqueta": "Recibo firmado"},
                    ],
                },
            ],
        },
        _seccion_documentos(requerido=False),
    ],
    "configuracion": _config_archivos(),
}


def _sua(id, nombre, empresa_fija=None):
    empresa = _texto("empresa", "Se paga por", min_length=2, max_length=200)
    if empresa_fija:
        empresa["valorPorDefecto"] = empresa_fija
        empresa["estilos"] = {"soloLectura": True}
    campos = [_asunto(("PAGO_SUA", "PAGO SUA")), empresa]
    if empresa_fija:
        campos.append(_texto("cliente", "Cliente", min_length=2, max_length=200))
    campos += [
        _monto(etiqueta="Monto Total"),
        _fecha("fecha_limite", "Fecha Límite"),
        {
            "id": "linea_captura",
            "nombre": "linea_captura",
            "tipo": "texto",
            "etiqueta": "Línea de Captura",
            "validaciones": {
                "requerido": True,
                "minLength": 20,
                "maxLength": 60,
                "mensaje": "La línea de captura debe tener entre 20 y 60 caracteres",
            },
        },
    ]
    return {
        "id": id,
        "nombre": nombre,
        "descripcion": "Pago de cuotas obrero-patronales (SUA)",
        "version": "1.0",
        "activa": True,
        "icono": "🏛️",
        "categoria": "Impuestos y Cuotas",
        "secciones": [
            {"id": "pago-sua", "titulo": "Información del Pago SUA", "campos": campos},
            _seccion_documentos(ayuda="Archivo SUA y formato de pago"),
        ],
        "configuracion": _config_archivos(),
    }


PAGO_SUA_INTERNAS = _sua("pago-sua-internas", "PAGO SUA INTERNAS")
PAGO_SUA_FRENSHETSI = _sua("pago-sua-frenshetsi", "PAGO SUA FRENSHETSI", empresa_fija="FRENSHETSI")

CATEGORIAS_SERVICIO = [
    "Consultoría Interna",
    "Servicios de TI",
    "Servicios Administrativos",
    "Capacitación Interna",
    "Soporte Técnico",
    "Servicios de Diseño",
    "Servicios Legales Internos",
    "Otros Servicios Internos",
]

DEPARTAMENTOS = [
    "Administración",
    "Finanzas",
    "Recursos Humanos",
    "TI",
    "Marketing",
    "Operaciones",
    "Legal",
    "Tesorería",
]

PAGO_SERVICIOS_INTERNOS = {
    "id": "pago-servicios-internos",
    "nombre": "PAGO DE SERVICIOS INTERNOS",
    "descripcion": "Pago de servicios prestados entre áreas de la empresa",
    "version": "1.0.0",
    "activa": True,
    "icono": "🏢",
    "categoria": "Servicios Internos",
    "secciones": [
        {
            "id": "servicio",
            "titulo": "Servicio",
            "campos": [
                {
                    "id": "categoria_servicio",
                    "nombre": "categoria_servicio",
                    "tipo": "select",
                    "etiqueta": "Categoría del Servicio",
                    "opciones": [{"valor": c, "etiqueta": c} for c in CATEGORIAS_SERVICIO],
                    "validaciones": {"requerido": True},
                },
                {
                    "id": "departamento",
                    "nombre": "departamento",
                    "tipo": "select",
                    "etiqueta": "Departamento Solicitante",
                    "opciones": [{"valor": d, "etiqueta": d} for d in DEPARTAMENTOS],
                    "validaciones": {"requerido": True},
                },
                {
                    "id": "descripcion_pago",
                    "nombre": "descripcion_pago",
                    "tipo": "textarea",
                    "etiqueta": "Descripción del Pago",
                    "validaciones": {"requerido": True, "minLength": 20, "maxLength": 1000},
                },
                _monto(),
                _fecha("fecha_limite_pago", "Fecha Límite de Pago"),
            ],
        },
        _seccion_documentos(id="documentos", etiqueta="Documentos de Soporte", requerido=False),
    ],
    "configuracion": _config_archivos(tamano_maximo=25 * MB),
}

PLANTILLAS = [
    TARJETAS_N09_TOKA,
    TARJETAS_TUKASH,
    PAGO_COMISIONES,
    PAGO_POLIZAS,
    REGRESOS_TRANSFERENCIA,
    REGRESOS_EFECTIVO,
    PAGO_SUA_INTERNAS,
    PAGO_SUA_FRENSHETSI,
    PAGO_SERVICIOS_INTERNOS,
]
