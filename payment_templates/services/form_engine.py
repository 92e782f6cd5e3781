"""Template form engine - visibility, validation and data for one form session.

The engine interprets a :class:`Template` against the values entered so far.
Visibility is recomputed from scratch after every edit by
:func:`compute_visibility`; validation of a single field runs on edit and the
whole visible form is validated again before submission.

Template-authoring mistakes (dependencies on unknown fields, writes to unknown
field ids, broken regex patterns) never raise: the rule simply never matches
or the write is dropped. Values are held as :data:`FieldValue`; anything else
is refused on edit and dropped when seeding.
"""

import logging
import re
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from payment_templates.models.form import (
    FIELD_VALUE_ADAPTER,
    FormSnapshot,
    FormState,
    FormStatus,
    SubmissionPayload,
)
from payment_templates.models.template import (
    DependencyAction,
    DependencyRule,
    FieldKind,
    FieldValue,
    FileReference,
    Template,
    TemplateField,
    ValidationRules,
)

logger = logging.getLogger(__name__)

# Selector fields that decide how a cuenta_clabe value is checked
ACCOUNT_TYPE_FIELDS = ("tipo_cuenta", "tipo_cuenta_destino")

# Kinds whose value may be a list
LIST_KINDS = (FieldKind.CHECKBOX, FieldKind.MULTI_SELECT, FieldKind.FILE)

DIGITS_RE = re.compile(r"^\d+$")
NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
AMOUNT_RE = re.compile(r"^\d+(\.\d{1,2})?$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def coerce_value(field: Optional[TemplateField], value: Any) -> Optional[FieldValue]:
    """Parse ``value`` as a field value; a lone file becomes a one-item list.

    Raises ``ValidationError`` for shapes no field can hold (objects, nested
    lists, mixed lists).
    """
    if (
        field is not None
        and field.kind is FieldKind.FILE
        and value is not None
        and not isinstance(value, (list, tuple))
    ):
        value = [value]
    return FIELD_VALUE_ADAPTER.validate_python(value)


def is_empty(value: Any) -> bool:
    """True for values that do not satisfy a required field"""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def rule_matches(rule: DependencyRule, field_ids: set[str], datos: dict[str, Any]) -> bool:
    """Whether the controlling field currently holds the rule's value.

    Rules pointing at a field outside the template never match; booleans are
    never equal to numbers.
    """
    if rule.field_id not in field_ids or rule.field_id not in datos:
        return False
    current = datos[rule.field_id]
    if isinstance(current, bool) != isinstance(rule.value, bool):
        return False
    return current == rule.value


def compute_visibility(template: Template, datos: dict[str, Any]) -> set[str]:
    """Ids of the fields visible for ``datos``.

    A field is visible when every ``show`` rule matches and no ``hide`` rule
    matches. Fields without show/hide rules are always visible.
    """
    field_ids = set(template.field_ids)
    visible = set()
    for field in template.iter_fields():
        shown = True
        for rule in field.dependencies:
            if rule.action is DependencyAction.REQUIRE:
                continue
            matched = rule_matches(rule, field_ids, datos)
            if rule.action is DependencyAction.SHOW and not matched:
                shown = False
            elif rule.action is DependencyAction.HIDE and matched:
                shown = False
        if shown:
            visible.add(field.id)
    return visible


def compute_required(template: Template, datos: dict[str, Any]) -> set[str]:
    """Ids of the fields required for ``datos``: own flag or any matching require rule"""
    field_ids = set(template.field_ids)
    required = set()
    for field in template.iter_fields():
        if field.required or any(
            rule.action is DependencyAction.REQUIRE and rule_matches(rule, field_ids, datos)
            for rule in field.dependencies
        ):
            required.add(field.id)
    return required


class TemplateFormEngine:
    """Owns the :class:`FormState` of one form session"""

    def __init__(self):
        self.state = FormState()

    @property
    def template(self) -> Optional[Template]:
        return self.state.template

    @property
    def datos(self) -> dict[str, Any]:
        return self.state.datos

    @property
    def errores(self) -> dict[str, str]:
        return self.state.errores

    @property
    def campos_visibles(self) -> set[str]:
        return self.state.campos_visibles

    @property
    def status(self) -> FormStatus:
        return self.state.status

    def select_template(self, template: Optional[Template], initial_data: Optional[dict[str, Any]] = None):
        """Start editing ``template``.

        ``initial_data`` (already parsed) replaces the template defaults when
        editing an existing request. Entries that are not valid field values
        are dropped with a warning.
        """
        if template is None:
            return
        if initial_data is None:
            datos = template.default_data()
        else:
            datos = self._typed_data(template, initial_data)
        self.state = FormState(
            template=template,
            datos=datos,
            campos_visibles=compute_visibility(template, datos),
            status=FormStatus.EDITING,
        )
        logger.debug(f"Selected template {template.id} with {len(datos)} values")

    @staticmethod
    def _typed_data(template: Template, data: dict[str, Any]) -> dict[str, Optional[FieldValue]]:
        typed = {}
        for key, value in data.items():
            try:
                typed[key] = coerce_value(template.get_field(key), value)
            except ValidationError:
                logger.warning(f"Dropping value of '{key}': not a valid field value")
        return typed

    def update_field(self, field_id: str, value: Optional[FieldValue]):
        """Store one edit, refresh visibility and re-validate the edited field.

        A value of an unsupported shape is not stored; the field gets an error
        instead.
        """
        template = self.state.template
        field = template.get_field(field_id) if template is not None else None
        if field is None:
            logger.debug(f"Ignoring write to unknown field '{field_id}'")
            return

        try:
            value = coerce_value(field, value)
        except ValidationError:
            logger.warning(f"Rejected value for '{field_id}': not a valid field value")
            self.state.errores = {**self.state.errores, field_id: f"{field.label} tiene un valor no válido"}
            return

        datos = {**self.state.datos, field_id: value}
        visible = compute_visibility(template, datos)
        required = compute_required(template, datos)
        # errors of fields that were hidden, or that stopped being required while empty, go away
        errores = {
            fid: message for fid, message in self.state.errores.items()
            if fid in visible and fid != field_id
            and (fid in required or not is_empty(datos.get(fid)))
        }
        self.state.datos = datos
        self.state.campos_visibles = visible

        error = self.validate_field(field_id)
        if error:
            errores[field_id] = error
        self.state.errores = errores

    def validate_field(self, field_id: str) -> Optional[str]:
        """Error message for ``field_id`` or None. Hidden fields are always valid."""
        template = self.state.template
        if template is None or field_id not in self.state.campos_visibles:
            return None
        field = template.get_field(field_id)
        if field is None:
            return None
        required = field_id in compute_required(template, self.state.datos)
        return self._check(field, self.state.datos.get(field_id), required)

    def validate_all(self) -> bool:
        """Validate every visible field, replacing ``errores`` with all failures"""
        template = self.state.template
        if template is None:
            return False
        errores = {}
        for field in template.iter_fields():
            error = self.validate_field(field.id)
            if error:
                errores[field.id] = error
        self.state.errores = errores
        return not errores

    def reset(self):
        """Drop template, values and errors"""
        self.state = FormState()

    def restart(self):
        """Discard edits and start the current template over from its defaults"""
        if self.state.template is not None:
            self.select_template(self.state.template)

    def begin_submission(self) -> Optional[SubmissionPayload]:
        """Gate a save: validate everything and, when valid, mark the form busy.

        Returns the payload to persist, or None when the form is not ready.
        """
        if self.state.status is not FormStatus.EDITING:
            return None
        if not self.validate_all():
            return None
        self.state.status = FormStatus.SUBMITTING
        self.state.busy = True
        return self.build_submission()

    def finish_submission(self, success: bool):
        """Report the outcome of the external save"""
        if self.state.status is not FormStatus.SUBMITTING:
            logger.debug("finish_submission called while not submitting")
            return
        if success:
            self.reset()
            return
        # keep everything so the user can retry without re-entering data
        self.state.status = FormStatus.EDITING
        self.state.busy = False

    def build_submission(self) -> Optional[SubmissionPayload]:
        """Payload with the values of visible fields only"""
        template = self.state.template
        if template is None:
            return None
        values = {
            field.id: self.state.datos[field.id]
            for field in template.iter_fields()
            if field.id in self.state.campos_visibles and self.state.datos.get(field.id) is not None
        }
        return SubmissionPayload(
            plantilla_id=template.id,
            plantilla_nombre=template.name,
            plantilla_version=template.version,
            datos_formulario=values,
        )

    def snapshot(self) -> FormSnapshot:
        visible = self.state.campos_visibles
        filled = sum(1 for fid in visible if not is_empty(self.state.datos.get(fid)))
        return FormSnapshot(
            template_id=self.state.template.id if self.state.template else None,
            datos=dict(self.state.datos),
            errores=dict(self.state.errores),
            campos_visibles=frozenset(visible),
            status=self.state.status,
            busy=self.state.busy,
            progreso=filled / len(visible) if visible else 0.0,
        )

    # Rule evaluation

    def _check(self, field: TemplateField, value: Any, required: bool) -> Optional[str]:
        rules = field.validation or ValidationRules()
        label = field.label

        if is_empty(value):
            if required:
                return rules.message or f"{label} es requerido"
            return None

        if field.kind is FieldKind.FILE:
            return self._check_files(value if isinstance(value, (list, tuple)) else [value])

        if isinstance(value, (list, tuple)):
            if field.kind in LIST_KINDS:
                return None
            return f"{label} tiene un formato inválido"

        text = _as_text(value)

        if rules.exact_length is not None:
            if len(text) != rules.exact_length:
                return rules.message or f"{label} debe tener exactamente {rules.exact_length} caracteres"
        else:
            if rules.min_length is not None and len(text) < rules.min_length:
                return rules.message or f"{label} debe tener al menos {rules.min_length} caracteres"
            if rules.max_length is not None and len(text) > rules.max_length:
                return rules.message or f"{label} debe tener máximo {rules.max_length} caracteres"

        if rules.digits_only and not DIGITS_RE.match(text):
            return rules.message or f"{label} debe contener solo números"

        if rules.pattern:
            try:
                if not re.search(rules.pattern, text):
                    return rules.message or f"{label} tiene un formato inválido"
            except re.error as e:
                logger.warning(f"Invalid pattern on field '{field.id}': {e}")

        return self._check_kind(field, text)

    def _check_kind(self, field: TemplateField, text: str) -> Optional[str]:
        if field.kind is FieldKind.BANK_ACCOUNT:
            account_type = next(
                (self.state.datos[f] for f in ACCOUNT_TYPE_FIELDS if f in self.state.datos),
                None,
            )
            if account_type == "CLABE" and len(text) not in (16, 18):
                return "La CLABE debe tener 16 o 18 dígitos"
            if account_type == "CUENTA" and not 8 <= len(text) <= 10:
                return "El número de cuenta debe tener entre 8 y 10 dígitos"

        elif field.kind is FieldKind.CURRENCY:
            amount = text.replace(",", "").replace("$", "")
            if not AMOUNT_RE.match(amount):
                return "Ingrese un monto válido"
            if float(amount) <= 0:
                return "El monto debe ser mayor a 0"

        elif field.kind is FieldKind.NUMBER:
            if not NUMBER_RE.match(text):
                return f"{field.label} debe ser un número"

        elif field.kind is FieldKind.EMAIL:
            if not EMAIL_RE.match(text):
                return "Ingrese un correo electrónico válido"

        elif field.kind is FieldKind.DATE:
            try:
                date.fromisoformat(text)
            except ValueError:
                return "Ingrese una fecha válida (AAAA-MM-DD)"

        return None

    def _check_files(self, files: list) -> Optional[str]:
        config = self.state.template.config
        if config is not None and not config.multiple_files and len(files) > 1:
            return "Solo se permite adjuntar un archivo"

        allowed = {ext.lower() for ext in config.allowed_file_types} if config else set()
        for item in files:
            if isinstance(item, str):
                # already uploaded, only the stored path is known
                continue
            try:
                ref = item if isinstance(item, FileReference) else FileReference.model_validate(item)
            except ValidationError:
                return "Archivo adjunto inválido"
            if config is None:
                continue
            if allowed and ref.extension not in allowed:
                return f"Tipo de archivo no permitido: {ref.name}"
            if config.max_file_size and ref.size > config.max_file_size:
                max_mb = config.max_file_size // (1024 * 1024)
                return f"El archivo {ref.name} excede el tamaño máximo permitido ({max_mb}MB)"
        return None
