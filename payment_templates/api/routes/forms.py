"""Template and form-session API routes"""

import logging

from fastapi import APIRouter, HTTPException

from payment_templates import __version__
from payment_templates.api.schemas import (
    CompleteRequest,
    FieldUpdateRequest,
    FormCreateRequest,
    FormSessionResponse,
    HealthResponse,
    SubmitResponse,
    TemplateItem,
    TemplatesResponse,
    ValidationResponse,
)
from payment_templates.api.session_store import FormSession, FormSessionStore
from payment_templates.models.form import FormStatus
from payment_templates.services.catalog import TemplateNotFoundError, get_catalog
from payment_templates.services.stored_requests import load_for_edit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Shared session store, replaced by create_app() via init_store()
store: FormSessionStore = FormSessionStore()


def init_store(shared_store: FormSessionStore):
    """Set the shared session store (called from app.py)."""
    global store
    store = shared_store


async def _get_session(session_id: str) -> FormSession:
    session = await store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Sesión no encontrada: {session_id}")
    return session


def _session_response(session: FormSession) -> FormSessionResponse:
    snapshot = session.engine.snapshot()
    template = session.engine.template
    order = template.field_ids if template else []
    return FormSessionResponse(
        session_id=session.session_id,
        template_id=snapshot.template_id,
        datos=snapshot.datos,
        errores=snapshot.errores,
        campos_visibles=[fid for fid in order if fid in snapshot.campos_visibles],
        status=snapshot.status,
        busy=snapshot.busy,
        progreso=snapshot.progreso,
    )


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        version=__version__,
        active_sessions=store.active_count,
        templates=len(get_catalog()),
    )


@router.get("/templates", response_model=TemplatesResponse)
async def list_templates():
    """List active templates"""
    return TemplatesResponse(templates=[
        TemplateItem(
            id=t.id,
            nombre=t.name,
            descripcion=t.description,
            categoria=t.category,
            version=t.version,
            field_count=len(t.field_ids),
        )
        for t in get_catalog().list_active()
    ])


@router.get("/templates/{template_id}")
async def get_template(template_id: str):
    """Full template schema, with the keys of the template configuration format"""
    try:
        template = get_catalog().load(template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return template.model_dump(by_alias=True, mode="json")


@router.post("/forms", response_model=FormSessionResponse, status_code=201)
async def create_form(request: FormCreateRequest):
    """Open a form session for a new request or for editing a stored one"""
    catalog = get_catalog()

    if request.stored_request is not None:
        session = await store.create()
        if load_for_edit(session.engine, catalog, request.stored_request) is None:
            await store.delete(session.session_id)
            raise HTTPException(status_code=404, detail="No se pudo detectar la plantilla de la solicitud")
        return _session_response(session)

    if not request.template_id:
        raise HTTPException(status_code=400, detail="Se requiere template_id o stored_request")

    try:
        template = catalog.load(request.template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    session = await store.create()
    session.engine.select_template(template, request.initial_data)
    logger.info(f"Opened form {session.session_id} for {template.id}")
    return _session_response(session)


@router.get("/forms/{session_id}", response_model=FormSessionResponse)
async def get_form(session_id: str):
    return _session_response(await _get_session(session_id))


@router.patch("/forms/{session_id}/fields/{field_id}", response_model=FormSessionResponse)
async def update_field(session_id: str, field_id: str, request: FieldUpdateRequest):
    """Apply one field edit. Edits are refused while a save is in flight."""
    session = await _get_session(session_id)
    if session.engine.state.busy:
        raise HTTPException(status_code=409, detail="La solicitud se está guardando")
    session.engine.update_field(field_id, request.value)
    return _session_response(session)


@router.post("/forms/{session_id}/validate", response_model=ValidationResponse)
async def validate_form(session_id: str):
    session = await _get_session(session_id)
    valid = session.engine.validate_all()
    return ValidationResponse(session_id=session_id, valid=valid, errores=session.engine.errores)


@router.post("/forms/{session_id}/submit", response_model=SubmitResponse)
async def submit_form(session_id: str):
    """Validate and lock the form; the caller persists the payload and reports back"""
    session = await _get_session(session_id)
    if session.engine.status is FormStatus.SUBMITTING:
        raise HTTPException(status_code=409, detail="La solicitud ya se está guardando")

    payload = session.engine.begin_submission()
    if payload is None:
        raise HTTPException(
            status_code=422,
            detail={"message": "El formulario tiene errores", "errores": session.engine.errores},
        )
    return SubmitResponse(session_id=session_id, status=session.engine.status, payload=payload)


@router.post("/forms/{session_id}/complete", response_model=FormSessionResponse)
async def complete_form(session_id: str, request: CompleteRequest):
    """Report the result of the save: success clears the form, failure unlocks it"""
    session = await _get_session(session_id)
    if session.engine.status is not FormStatus.SUBMITTING:
        raise HTTPException(status_code=409, detail="No hay un envío en curso")
    session.engine.finish_submission(request.success)
    return _session_response(session)


@router.delete("/forms/{session_id}")
async def delete_form(session_id: str):
    deleted = await store.delete(session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Sesión no encontrada: {session_id}")
    return {"deleted": True}
