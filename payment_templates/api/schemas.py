"""Request/response schemas for the form-session API"""

from typing import Optional

from pydantic import BaseModel, Field

from payment_templates.models.form import FormStatus, SubmissionPayload
from payment_templates.models.template import FieldValue
from payment_templates.models.request import StoredRequest


class TemplateItem(BaseModel):
    """A template in the templates list"""
    id: str
    nombre: str
    descripcion: str = ""
    categoria: Optional[str] = None
    version: str
    field_count: int = 0


class TemplatesResponse(BaseModel):
    templates: list[TemplateItem] = []


class FormCreateRequest(BaseModel):
    """Open a form: a template id (optionally pre-filled) or a stored request to edit"""
    template_id: Optional[str] = None
    initial_data: Optional[dict[str, Optional[FieldValue]]] = None
    stored_request: Optional[StoredRequest] = None


class FieldUpdateRequest(BaseModel):
    value: Optional[FieldValue] = None


class FormSessionResponse(BaseModel):
    """Snapshot of a form session"""
    session_id: str
    template_id: Optional[str] = None
    datos: dict[str, Optional[FieldValue]] = {}
    errores: dict[str, str] = {}
    campos_visibles: list[str] = []  # template order
    status: FormStatus = FormStatus.IDLE
    busy: bool = False
    progreso: float = 0.0


class ValidationResponse(BaseModel):
    session_id: str
    valid: bool
    errores: dict[str, str] = {}


class SubmitResponse(BaseModel):
    session_id: str
    status: FormStatus
    payload: SubmissionPayload


class CompleteRequest(BaseModel):
    """Outcome of the external save"""
    success: bool = Field(..., description="True when the request was persisted")


class HealthResponse(BaseModel):
    status: str  # "ok"
    version: str = "0.1.0"
    active_sessions: int = 0
    templates: int = 0
