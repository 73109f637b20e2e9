"""
Templating Registries

Centralized registry for loading and caching the preview templates.
"""

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound, select_autoescape

from cvbuilder.contexts.templating.logger import log_template_loaded

TEMPLATES_PATH = Path(__file__).parent / "templates"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML previews.

    Templates are stored in cvbuilder/contexts/templating/templates/{name}.html.jinja.
    Autoescaping is on for every template, so values from the resume document
    are always rendered as text. Use the |safe filter only for markup the
    renderer produced itself.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the templates. Defaults to
                            the package's templates directory
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=select_autoescape(enabled_extensions=("html", "jinja"), default=True),
            # Catches silent failures
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without extension (e.g., 'preview')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            log_template_loaded(name, cached=True)
            return self._cache[name]

        template_file = f"{name}.html.jinja"
        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        log_template_loaded(name, cached=False)
        return template

    def get_template_path(self, name: str) -> Path:
        """Path to a template file."""
        return self.templates_path / f"{name}.html.jinja"

    def read_asset(self, filename: str) -> str:
        """
        Read a static asset stored next to the templates (e.g., the stylesheet).

        Raises:
            FileNotFoundError: If the asset doesn't exist
        """
        return (self.templates_path / filename).read_text(encoding="utf-8")

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
