"""
VITAE - Versatile Input-To-Anything Editor for résumés

Turns messy résumé content (pasted text, generated markup, legacy exports) into a
canonical, typed section model and re-renders that model through interchangeable
skins.

Architecture:
- Parsing Context: Normalization, section parsing/classification, header extraction
- Rendering Context: Template catalog, header blocks, skin rendering and validation
"""

__version__ = "0.1.0"
