"""
Carga y validación de archivos de entrada de la CLI.

Los errores se informan con mensajes consistentes y terminan el comando
con código 1.
"""

import json
from pathlib import Path
from typing import Optional

import typer

from nexform.cli.theme import print_error
from nexform.models.definition import FormDefinition
from nexform.samples import get_sample


def load_definition(path: Optional[Path], sample: Optional[str] = None) -> FormDefinition:
    """
    Carga un formulario desde archivo JSON o desde los ejemplos incluidos.

    Args:
        path: Archivo JSON con la definición
        sample: Nombre de un formulario de ejemplo (alternativa a path)
    """
    if sample:
        try:
            return get_sample(sample)
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(1)

    if path is None:
        print_error("Indique un archivo de formulario o --sample")
        raise typer.Exit(1)
    if not path.exists():
        print_error(f"Archivo no encontrado: {path}")
        raise typer.Exit(1)
    try:
        return FormDefinition.from_file(path)
    except ValueError as e:
        print_error(f"Formulario inválido ({path.name}): {e}")
        raise typer.Exit(1)


def load_record(path: Optional[Path]) -> dict:
    """Carga un registro de datos {key: valor} desde JSON (vacío si no hay archivo)."""
    if path is None:
        return {}
    if not path.exists():
        print_error(f"Archivo no encontrado: {path}")
        raise typer.Exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        print_error(f"JSON inválido ({path.name}): {e}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        print_error(f"El registro debe ser un objeto JSON (recibido: {type(data).__name__})")
        raise typer.Exit(1)
    return data


def validate_step_number(step: int, step_count: int, exit_on_error: bool = True) -> bool:
    """
    Valida un número de paso (base 1).

    Args:
        step: Número de paso
        step_count: Total de pasos
        exit_on_error: Si True, termina el programa con error
    """
    if not 1 <= step <= step_count:
        print_error(f"Paso fuera de rango: {step} (el formulario tiene {step_count})")
        if exit_on_error:
            raise typer.Exit(1)
        return False
    return True
