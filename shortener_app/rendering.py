"""
HTML rendering for the visitor flow.

Templates are Jinja2 files in settings.templates_path. All of them are
loaded when the renderer is built, so a missing or broken template stops
the service at startup instead of failing the first visitor.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    select_autoescape,
)

from shortener_app.errors import TemplateError

logger = logging.getLogger(__name__)

REQUIRED_TEMPLATES = ("check_device", "user_form", "new_device_form", "redirect")


class TemplateRenderer:
    """Renders named templates (`<name>.html`) with a data payload"""

    def __init__(self, templates_path: str, names: Iterable[str] = REQUIRED_TEMPLATES):
        self.templates_path = Path(templates_path)
        logger.info(f"Loading templates from: {self.templates_path.resolve()}")

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )
        self._templates = {}
        for name in names:
            try:
                self._templates[name] = self.env.get_template(f"{name}.html")
            except JinjaTemplateError as e:
                raise TemplateError(f"Failed to register {name} template: {e}") from e

    def render(self, name: str, data: Dict[str, Any]) -> str:
        template = self._templates.get(name)
        if template is None:
            raise TemplateError(f"Template not registered: {name}")
        try:
            return template.render(**data)
        except JinjaTemplateError as e:
            raise TemplateError(str(e)) from e
