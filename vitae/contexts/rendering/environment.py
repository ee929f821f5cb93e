"""
Jinja2 environment for skin files.

Skins use custom delimiters so the literal {{resume-...}} placeholder tokens in
skeletons pass through Jinja untouched:
- Variable: <<< var >>>
- Block: <%% block %%>
- Comment: <# comment #>
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from vitae.utils.settings import SKINS_PATH


def skin_environment(skins_path: Path) -> Environment:
    """
    Build a Jinja2 environment rooted at a skins directory.

    Args:
        skins_path: Directory holding one folder per skin plus _shared/

    Returns:
        Environment with custom delimiters and HTML autoescaping
    """
    return Environment(
        loader=FileSystemLoader(str(skins_path)),
        # Catches silent failures
        undefined=StrictUndefined,
        autoescape=select_autoescape(enabled_extensions=("html.jinja",), default_for_string=True),
        variable_start_string="<<<",
        variable_end_string=">>>",
        block_start_string="<%%",
        block_end_string="%%>",
        comment_start_string="<#",
        comment_end_string="#>",
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


@lru_cache(maxsize=None)
def get_shared_environment() -> Environment:
    """Process-wide environment for the shared skin templates."""
    return skin_environment(SKINS_PATH)
