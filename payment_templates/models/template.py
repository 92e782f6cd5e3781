"""Payment-request template models"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TemplateModel(BaseModel):
    """Base for template schema objects.

    Templates are authored with the Spanish keys of the stored configuration
    (``secciones``, ``campos``, ``valorPorDefecto``...), attributes are English.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class FieldKind(str, Enum):
    """Input kinds a template field can render as"""
    SHORT_TEXT = "texto"
    NUMBER = "numero"
    CURRENCY = "moneda"
    EMAIL = "email"
    PHONE = "telefono"
    SELECT = "select"
    MULTI_SELECT = "multiselect"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    LONG_TEXT = "textarea"
    FILE = "archivo"
    DATE = "fecha"
    BANK_ACCOUNT = "cuenta_clabe"
    BANK = "banco"


class DependencyAction(str, Enum):
    SHOW = "show"
    HIDE = "hide"
    REQUIRE = "require"


# Spellings used by the stored template configuration
ACTION_ALIASES = {
    "mostrar": DependencyAction.SHOW,
    "ocultar": DependencyAction.HIDE,
    "requerir": DependencyAction.REQUIRE,
}


class FileReference(BaseModel):
    """An uploaded (or to-be-uploaded) file attached to a field"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nombre")
    size: int = Field(default=0, alias="tamano")
    content_type: Optional[str] = Field(default=None, alias="tipo")
    path: Optional[str] = Field(default=None, alias="ruta")

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return "." + self.name.rsplit(".", 1)[1].lower()


# Tagged value stored per field id
FieldValue = Union[bool, int, float, str, list[str], list[FileReference]]
ScalarValue = Union[bool, int, float, str]


class FieldOption(TemplateModel):
    value: str = Field(alias="valor")
    label: str = Field(alias="etiqueta")
    description: Optional[str] = Field(default=None, alias="descripcion")


class ValidationRules(TemplateModel):
    """Per-field validation rules; ``message`` overrides every default message"""
    required: bool = Field(default=False, alias="requerido")
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    exact_length: Optional[int] = Field(default=None, alias="longitudExacta")
    digits_only: bool = Field(default=False, alias="soloNumeros")
    pattern: Optional[str] = Field(default=None, alias="patron")
    message: Optional[str] = Field(default=None, alias="mensaje")


class DependencyRule(TemplateModel):
    """Applies ``action`` to the owning field while ``field_id`` equals ``value``"""
    field_id: str = Field(alias="campo")
    value: ScalarValue = Field(alias="valor")
    action: DependencyAction = Field(alias="accion")

    @field_validator("action", mode="before")
    @classmethod
    def _accept_stored_spelling(cls, value):
        if isinstance(value, str) and value in ACTION_ALIASES:
            return ACTION_ALIASES[value]
        return value


class FieldLayout(TemplateModel):
    width: Optional[str] = Field(default=None, alias="ancho")  # completo, medio, tercio, cuarto
    order: Optional[int] = Field(default=None, alias="orden")
    read_only: bool = Field(default=False, alias="soloLectura")


class TemplateField(TemplateModel):
    """A single input of a template"""
    id: str
    name: str = Field(default="", alias="nombre")
    kind: FieldKind = Field(alias="tipo")
    label: str = Field(alias="etiqueta")
    placeholder: Optional[str] = None
    help: Optional[str] = Field(default=None, alias="ayuda")
    default_value: Optional[FieldValue] = Field(default=None, alias="valorPorDefecto")
    options: list[FieldOption] = Field(default_factory=list, alias="opciones")
    validation: Optional[ValidationRules] = Field(default=None, alias="validaciones")
    dependencies: list[DependencyRule] = Field(default_factory=list, alias="dependencias")
    layout: Optional[FieldLayout] = Field(default=None, alias="estilos")

    @property
    def required(self) -> bool:
        """Own ``requerido`` flag, ignoring dependency rules"""
        return bool(self.validation and self.validation.required)


class SectionLayout(TemplateModel):
    columns: Optional[int] = Field(default=None, alias="columnas")
    spacing: str = Field(default="normal", alias="espaciado")  # compacto, normal, amplio


class TemplateSection(TemplateModel):
    id: str
    title: str = Field(alias="titulo")
    description: Optional[str] = Field(default=None, alias="descripcion")
    fields: list[TemplateField] = Field(default_factory=list, alias="campos")
    layout: Optional[SectionLayout] = Field(default=None, alias="estilos")


class TemplateConfig(TemplateModel):
    """File-handling options of a template"""
    multiple_files: bool = Field(default=False, alias="permiteArchivosMultiples")
    allowed_file_types: list[str] = Field(default_factory=list, alias="tiposArchivosPermitidos")
    max_file_size: Optional[int] = Field(default=None, alias="tamanoMaximoArchivo")  # bytes
    show_progress: bool = Field(default=False, alias="mostrarProgreso")


class TemplateMetadata(TemplateModel):
    created_by: Optional[str] = Field(default=None, alias="creadoPor")
    created_at: Optional[str] = Field(default=None, alias="fechaCreacion")
    modified_at: Optional[str] = Field(default=None, alias="fechaModificacion")
    usage_count: int = Field(default=0, alias="usosFrecuentes")


class Template(TemplateModel):
    """A named, versioned payment-request form"""
    id: str
    name: str = Field(alias="nombre")
    description: str = Field(default="", alias="descripcion")
    version: str = "1.0"
    active: bool = Field(default=True, alias="activa")
    icon: Optional[str] = Field(default=None, alias="icono")
    color: Optional[str] = None
    category: Optional[str] = Field(default=None, alias="categoria")
    sections: list[TemplateSection] = Field(default_factory=list, alias="secciones")
    config: Optional[TemplateConfig] = Field(default=None, alias="configuracion")
    metadata: Optional[TemplateMetadata] = Field(default=None, alias="metadatos")

    @model_validator(mode="after")
    def _unique_field_ids(self):
        seen = set()
        for field in self.iter_fields():
            if field.id in seen:
                raise ValueError(f"Duplicate field id '{field.id}' in template '{self.id}'")
            seen.add(field.id)
        return self

    def iter_fields(self):
        """Yield every field in section and declaration order"""
        for section in self.sections:
            yield from section.fields

    @property
    def field_ids(self) -> list[str]:
        return [f.id for f in self.iter_fields()]

    def get_field(self, field_id: str) -> Optional[TemplateField]:
        for field in self.iter_fields():
            if field.id == field_id:
                return field
        return None

    def dangling_dependencies(self) -> list[tuple[str, str]]:
        """(field id, missing controlling id) for rules pointing outside the template"""
        ids = set(self.field_ids)
        return [
            (field.id, rule.field_id)
            for field in self.iter_fields()
            for rule in field.dependencies
            if rule.field_id not in ids
        ]

    def default_data(self) -> dict:
        """Initial ``datos`` built from each field's default value"""
        data = {}
        for field in self.iter_fields():
            if field.default_value is not None:
                value = field.default_value
                data[field.id] = list(value) if isinstance(value, list) else value
        return data
