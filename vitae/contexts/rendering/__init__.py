"""
Rendering Context

Responsibilities:
- Loads skins (skeleton, per-section display configuration, styles) into a catalog
- Builds the header block from HeaderInfo
- Renders canonical sections through a skin into final markup
- Validates skin definitions and their rendered output

Owns: Template catalog, skins directory, rendered documents
Never: Parses or classifies raw résumé content
"""

from vitae.contexts.rendering.data_structures import (
    HeaderDisplayConfig,
    RenderedDocument,
    SectionDisplayConfig,
    TemplateDefinition,
)
from vitae.contexts.rendering.exceptions import TemplateValidationError
from vitae.contexts.rendering.header_builder import build_header_block, build_header_section_markup
from vitae.contexts.rendering.registries import TemplateCatalog, get_catalog, load_catalog
from vitae.contexts.rendering.renderer import render, to_html

__all__ = [
    # Rendering
    "render",
    "to_html",
    "build_header_block",
    "build_header_section_markup",
    # Catalog
    "TemplateCatalog",
    "get_catalog",
    "load_catalog",
    "TemplateValidationError",
    # Model
    "TemplateDefinition",
    "SectionDisplayConfig",
    "HeaderDisplayConfig",
    "RenderedDocument",
]
