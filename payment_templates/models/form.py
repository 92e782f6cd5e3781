"""Form state models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from payment_templates.models.template import FieldValue, Template

# Validates one stored value: text, number, boolean, list of text or list of files
FIELD_VALUE_ADAPTER = TypeAdapter(Optional[FieldValue])


class FormStatus(str, Enum):
    """Lifecycle of one form session"""
    IDLE = "idle"               # no template selected
    EDITING = "editing"
    SUBMITTING = "submitting"   # validated, external save in flight


class FormState(BaseModel):
    """Live state of one in-progress submission"""
    template: Optional[Template] = None
    datos: dict[str, Optional[FieldValue]] = {}
    errores: dict[str, str] = {}
    campos_visibles: set[str] = set()
    busy: bool = False
    status: FormStatus = FormStatus.IDLE


class FormSnapshot(BaseModel):
    """Read-only view handed to renderers"""
    model_config = ConfigDict(frozen=True)

    template_id: Optional[str] = None
    datos: dict[str, Optional[FieldValue]] = {}
    errores: dict[str, str] = {}
    campos_visibles: frozenset[str] = frozenset()
    status: FormStatus = FormStatus.IDLE
    busy: bool = False
    progreso: float = 0.0  # share of visible fields holding a value


class SubmissionPayload(BaseModel):
    """Body handed to the persistence layer once validation passes"""
    plantilla_id: str
    plantilla_nombre: str
    plantilla_version: str
    datos_formulario: dict[str, FieldValue] = Field(default_factory=dict)
