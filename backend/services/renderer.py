"""Render resume snapshots to printable HTML pages.

Each ``TemplateType`` maps to ``templates/<name>.html``. Skins only decide
styling and where the header and skills go; the section list they iterate
always comes from ``services.sections.resolve_sections``.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from models.resume import ResumeData, TemplateType
from services.sections import resolve_sections

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def as_url(link: str) -> str:
    """Links are stored without scheme (``github.com/x``); add one for href."""
    if link.startswith(("http://", "https://", "mailto:")):
        return link
    return f"https://{link}"


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["as_url"] = as_url
    return env


_env = _build_env()
_cache: dict[TemplateType, Template] = {}


def get_template(template: TemplateType) -> Template:
    """Load and cache the Jinja template for a skin."""
    template = TemplateType(template)
    if template in _cache:
        return _cache[template]
    try:
        loaded = _env.get_template(f"{template.value}.html")
    except TemplateNotFound as e:
        raise TemplateNotFound(
            f"No template file for '{template.value}' in {TEMPLATE_DIR}"
        ) from e
    _cache[template] = loaded
    return loaded


def render(
    data: ResumeData,
    template: TemplateType = TemplateType.MODERN,
    print_on_load: bool = False,
) -> str:
    """Render one snapshot as a full HTML document.

    ``print_on_load`` opens the browser's print dialog once the page loads,
    which is how the resume is exported to PDF.
    """
    template = TemplateType(template)
    html = get_template(template).render(
        template_name=template.value,
        personal=data.personal,
        skills=data.skills,
        sections=resolve_sections(data),
        print_on_load=print_on_load,
    )
    logger.debug("Rendered %s template (%d bytes)", template.value, len(html))
    return html
