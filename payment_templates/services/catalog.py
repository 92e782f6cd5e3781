"""Template catalog - built-in templates plus JSON templates from disk"""

import json
import logging
from pathlib import Path
from typing import Optional

from payment_templates.data.plantillas import PLANTILLAS
from payment_templates.models.template import Template
from payment_templates.utils.config import get_settings

logger = logging.getLogger(__name__)


class TemplateNotFoundError(ValueError):
    """Raised when a template id is not in the catalog"""

    def __init__(self, template_id: str):
        super().__init__(f"Plantilla no encontrada: {template_id}")
        self.template_id = template_id


class TemplateCatalog:
    """All templates available to the form engine, keyed by id.

    Templates found in ``templates_dir`` replace built-ins with the same id.
    """

    def __init__(self, templates_dir: Optional[str] = None, include_builtin: bool = True):
        self._templates: dict[str, Template] = {}
        if include_builtin:
            for raw in PLANTILLAS:
                self.register(Template.model_validate(raw))
        if templates_dir:
            self.load_directory(Path(templates_dir))

    def register(self, template: Template) -> Template:
        for field_id, missing in template.dangling_dependencies():
            logger.warning(
                f"Template {template.id}: field '{field_id}' depends on unknown field '{missing}'"
            )
        if template.id in self._templates:
            logger.info(f"Replacing template {template.id}")
        self._templates[template.id] = template
        return template

    def load_directory(self, directory: Path) -> int:
        """Register every ``*.json`` template in ``directory``. Returns count loaded."""
        if not directory.is_dir():
            logger.warning(f"Templates directory not found: {directory}")
            return 0
        count = 0
        for path in sorted(directory.glob("*.json")):
            self.register(self.load_file(path))
            count += 1
        logger.info(f"Loaded {count} templates from {directory}")
        return count

    @staticmethod
    def load_file(path: Path) -> Template:
        """Parse one template file; raises ``ValidationError`` on malformed schemas"""
        with open(path, encoding="utf-8") as f:
            return Template.model_validate(json.load(f))

    def get(self, template_id: str) -> Optional[Template]:
        return self._templates.get(template_id)

    def load(self, template_id: str) -> Template:
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def find_by_name(self, name: str) -> Optional[Template]:
        wanted = name.strip().upper()
        for template in self._templates.values():
            if template.name.upper() == wanted:
                return template
        return None

    def list_all(self) -> list[Template]:
        return list(self._templates.values())

    def list_active(self) -> list[Template]:
        return [t for t in self._templates.values() if t.active]

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)


_catalog: Optional[TemplateCatalog] = None


def get_catalog() -> TemplateCatalog:
    """Shared catalog built from settings"""
    global _catalog
    if _catalog is None:
        _catalog = TemplateCatalog(templates_dir=get_settings().templates_dir)
    return _catalog
