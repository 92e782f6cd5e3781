"""Data models"""

from payment_templates.models.template import (
    FieldKind,
    DependencyAction,
    FileReference,
    FieldValue,
    FieldOption,
    ValidationRules,
    DependencyRule,
    FieldLayout,
    TemplateField,
    SectionLayout,
    TemplateSection,
    TemplateConfig,
    TemplateMetadata,
    Template,
)
from payment_templates.models.form import (
    FormStatus,
    FormState,
    FormSnapshot,
    SubmissionPayload,
)
from payment_templates.models.request import StoredRequest

__all__ = [
    "FieldKind",
    "DependencyAction",
    "FileReference",
    "FieldValue",
    "FieldOption",
    "ValidationRules",
    "DependencyRule",
    "FieldLayout",
    "TemplateField",
    "SectionLayout",
    "TemplateSection",
    "TemplateConfig",
    "TemplateMetadata",
    "Template",
    "FormStatus",
    "FormState",
    "FormSnapshot",
    "SubmissionPayload",
    "StoredRequest",
]
