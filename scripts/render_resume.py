#!/usr/bin/env python3
"""
Résumé Rendering CLI

Parse résumé markup (or plain text) into canonical sections, inspect the
extracted header, and render through any registered skin.

Commands:
    parse     - Print the ordered sections with kind and empty flag
    header    - Print the extracted header fields and any validation errors
    render    - Render through a skin (markup or full HTML page)
    templates - List registered skins

Usage:
    python scripts/render_resume.py parse resume.html --language fr
    python scripts/render_resume.py header resume.html
    python scripts/render_resume.py render resume.html --template professional --full-page -o out.html
    python scripts/render_resume.py templates --category pro
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from vitae.contexts.parsing.contact_validation import format_phone, validate_header
from vitae.contexts.parsing.language import detect_language, resolve_language
from vitae.contexts.parsing.logger import setup_parsing_logger
from vitae.contexts.parsing.normalizer import normalize
from vitae.contexts.parsing.ordering import order_sections
from vitae.contexts.parsing.section_parser import parse_with_details
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.rendering.registries import get_catalog
from vitae.contexts.rendering.renderer import to_html
from vitae.pipeline import build_resume, header_of
from vitae.utils.html_tools import plain_text
from vitae.utils.settings import LOGS_PATH
from vitae.utils.timestamp import now

app = typer.Typer(
    add_completion=False,
    help="Parse résumé content and render it through skins",
    invoke_without_command=True,
)

CATEGORIES = ("all", "free", "pro")


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_input(input_file: Path) -> str:
    try:
        return input_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        typer.secho(f"Error: {input_file} is not UTF-8 text ({e})", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _language(normalized: str, language: Optional[str]) -> str:
    return resolve_language(language) if language else detect_language(plain_text(normalized))


InputFile = Annotated[
    Path,
    typer.Argument(help="Résumé markup or plain-text file", exists=True, dir_okay=False, resolve_path=True),
]
LanguageOption = Annotated[
    Optional[str],
    typer.Option("--language", "-l", help="Language code or name (detected when omitted)"),
]


@app.command("parse")
def parse_command(
    input_file: InputFile,
    language: LanguageOption = None,
    log: Annotated[bool, typer.Option("--log", help=f"Write a session log under {LOGS_PATH}")] = False,
):
    """
    Print the ordered sections found in a résumé.

    Examples:\n

        $ render_resume.py parse resume.html

        $ render_resume.py parse cv.txt --language fr --log
    """
    normalized = normalize(_read_input(input_file))
    code = _language(normalized, language)
    if log:
        log_file = setup_parsing_logger(LOGS_PATH / f"parse_{now()}", code)
        typer.echo(f"Logging to {log_file}")

    result = parse_with_details(normalized, code)
    sections = order_sections(result.sections)

    typer.secho(
        f"\n{len(sections)} section(s) via '{result.strategy}' (language: {code})",
        fg=typer.colors.BLUE,
        bold=True,
    )
    for section in sections:
        marker = "∅" if section.is_empty else "•"
        color = typer.colors.YELLOW if section.is_empty else typer.colors.GREEN
        typer.secho(f"  {marker} {section.id:<28} {section.kind:<15} {section.title}", fg=color)


@app.command("header")
def header_command(input_file: InputFile, language: LanguageOption = None):
    """Print the header fields extracted from a résumé."""
    normalized = normalize(_read_input(input_file))
    code = _language(normalized, language)
    result = parse_with_details(normalized, code)
    header = header_of(result.sections)

    typer.secho("\nHeader", fg=typer.colors.BLUE, bold=True)
    for key, value in header.to_dict().items():
        if key == "phone" and value:
            value = format_phone(value)
        shown = value.replace("\n", " / ") if value else "—"
        typer.echo(f"  {key:<10} {shown}")

    validation = validate_header(header)
    for error in validation.errors:
        typer.secho(f"  ! {error}", fg=typer.colors.YELLOW, err=True)
    if not validation.is_valid:
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    input_file: InputFile,
    template: Annotated[
        Optional[str], typer.Option("--template", "-t", help="Skin id (default skin when omitted)")
    ] = None,
    language: LanguageOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write here instead of stdout", dir_okay=False, resolve_path=True),
    ] = None,
    full_page: Annotated[
        bool, typer.Option("--full-page", help="Wrap markup and styles in a standalone HTML page")
    ] = False,
    free_only: Annotated[
        bool, typer.Option("--free-only", help="Refuse pro skins (falls back to the default skin)")
    ] = False,
    log: Annotated[bool, typer.Option("--log", help=f"Write a session log under {LOGS_PATH}")] = False,
):
    """
    Render a résumé through a skin.

    Examples:\n

        $ render_resume.py render resume.html -t professional --full-page -o resume_pro.html

        $ render_resume.py render cv.txt --free-only
    """
    if log:
        log_file = setup_rendering_logger(LOGS_PATH / f"render_{now()}", template or "")
        typer.echo(f"Logging to {log_file}")

    result = build_resume(
        _read_input(input_file),
        template_id=template,
        language=language,
        allow_pro=not free_only,
    )

    if template and result.template_id != template:
        typer.secho(
            f"Template '{template}' unavailable, rendered with '{result.template_id}'",
            fg=typer.colors.YELLOW,
            err=True,
        )

    if full_page:
        content = to_html(result.document, title=result.header.name, lang=result.language)
    else:
        content = result.document.markup

    if output is None:
        typer.echo(content)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        typer.secho(f"✓ Rendered with '{result.template_id}' → {output}", fg=typer.colors.GREEN)

    for missing in result.missing:
        typer.secho(f"  ! {missing.title}: {missing.recommendation}", fg=typer.colors.YELLOW, err=True)
    for issue in result.header_issues:
        typer.secho(f"  ! Header: {issue}", fg=typer.colors.YELLOW, err=True)


@app.command("templates")
def templates_command(
    category: Annotated[str, typer.Option("--category", "-c", help="all, free or pro")] = "all",
):
    """List registered skins."""
    if category not in CATEGORIES:
        typer.secho(
            f"Error: unknown category '{category}' (expected one of {', '.join(CATEGORIES)})",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    catalog = get_catalog()
    templates = catalog.list_templates(category)
    typer.secho(f"\n{len(templates)} skin(s)", fg=typer.colors.BLUE, bold=True)
    for definition in templates:
        badge = "PRO " if definition.is_pro else "FREE"
        default = " (default)" if definition.id == catalog.default_template_id else ""
        typer.echo(f"  [{badge}] {definition.id:<14} {definition.display_name}{default}")
        if definition.description:
            typer.echo(f"         {definition.description}")


if __name__ == "__main__":
    app()
