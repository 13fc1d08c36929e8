"""
CLI de nexform - Herramienta de inspección de formularios.

Comandos:
- inspect: Campos del formulario y problemas de diseño
- plan: Pasos del wizard
- validate: Validación de un registro de datos
- compute: Recálculo de campos calculados
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from nexform.cli.forms import inspect_form, plan_form, validate_record, compute_record
from nexform.cli.theme import CLITheme, ThemeName, get_console

# Crear aplicación principal
app = typer.Typer(
    name="nexform",
    help="Inspección, validación y cálculo de formularios nexform.",
    no_args_is_help=True,
)

app.command("inspect")(inspect_form)
app.command("plan")(plan_form)
app.command("validate")(validate_record)
app.command("compute")(compute_record)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Mostrar mensajes de depuración")] = False,
    theme: Annotated[str, typer.Option(help="Tema de colores: default, minimal")] = "default",
):
    """
    nexform - Motor de formularios.

    Trabaja sobre definiciones de formulario en JSON.
    """
    try:
        CLITheme.use(ThemeName(theme))
    except ValueError:
        raise typer.BadParameter(f"Tema desconocido: {theme}", param_hint="--theme")

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=get_console(), show_path=False)],
            force=True,
        )
