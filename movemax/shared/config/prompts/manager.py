"""Jinja2 prompt templates for the AI auditor."""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class PromptManager:
    """Loads ``<name>.j2`` templates and renders them with keyword context."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def render(self, name: str, **context: Any) -> str:
        """Render a template by name (without extension).

        Raises:
            KeyError: If no template with that name exists
        """
        try:
            template = self.env.get_template(f"{name}.j2")
        except TemplateNotFound:
            raise KeyError(f"Unknown prompt template: {name}") from None
        return template.render(**context).strip()

    def available(self) -> list[str]:
        return sorted(p.stem for p in self.template_dir.glob("*.j2"))


_prompt_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
        logger.debug(f"Prompt templates loaded from {_prompt_manager.template_dir}")
    return _prompt_manager


def render_prompt(name: str, **context: Any) -> str:
    return get_prompt_manager().render(name, **context)
