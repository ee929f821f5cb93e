#!/usr/bin/env python3
"""
Skin Validation CLI

Loads every skin (definition checks run while the catalog is built), then
renders each one against sample sections and header scenarios and reports
output contract problems. Exits 1 on any issue.

Usage:
    python scripts/validate_skins.py
    python scripts/validate_skins.py --skins-path path/to/skins --template basic
"""

from pathlib import Path
from typing import Optional

import typer
from jinja2 import TemplateNotFound
from typing_extensions import Annotated

from vitae.contexts.rendering.exceptions import TemplateValidationError
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.rendering.registries import load_catalog
from vitae.contexts.rendering.validator import validate_catalog_output, validate_template_output
from vitae.utils.settings import LOGS_PATH, SKINS_PATH
from vitae.utils.timestamp import now

app = typer.Typer(
    help="Validate skin definitions and rendered output",
    add_completion=False,
)


@app.command()
def main(
    skins_path: Annotated[
        Path,
        typer.Option(
            "--skins-path",
            "-s",
            help="Skins directory",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ] = SKINS_PATH,
    template: Annotated[
        Optional[str], typer.Option("--template", "-t", help="Only check this skin")
    ] = None,
    log: Annotated[bool, typer.Option("--log", help=f"Write a session log under {LOGS_PATH}")] = False,
):
    """
    Validate every skin.

    Examples:\n

        $ validate_skins.py

        $ validate_skins.py --template professional --log
    """
    if log:
        log_file = setup_rendering_logger(LOGS_PATH / f"validate_skins_{now()}", template or "")
        typer.echo(f"Logging to {log_file}")

    try:
        catalog = load_catalog(skins_path)
    except (TemplateValidationError, TemplateNotFound, FileNotFoundError) as e:
        typer.secho(f"✗ Catalog failed to load:\n{e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nLoaded {len(catalog)} skin(s) from {skins_path}", fg=typer.colors.BLUE, bold=True)

    if template is not None:
        if template not in catalog:
            typer.secho(f"Error: no skin '{template}' in {skins_path}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        checks = [validate_template_output(catalog.get(template))]
    else:
        checks = validate_catalog_output(catalog)

    failed = 0
    for check in checks:
        if check.is_valid:
            typer.secho(f"✓ {check.template_id} ({len(check.scenarios)} scenarios)", fg=typer.colors.GREEN)
            continue
        failed += 1
        typer.secho(f"✗ {check.template_id}", fg=typer.colors.RED)
        for issue in check.issues:
            typer.echo(f"    {issue}")

    typer.echo("\n" + "=" * 80)
    typer.echo(f"Passed: {len(checks) - failed}/{len(checks)}")
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
