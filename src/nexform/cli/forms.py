"""
Comandos CLI sobre definiciones de formulario y registros de datos.
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from nexform.builder import FormBuilder
from nexform.cli.theme import (
    print_header, print_field, print_step, print_section,
    print_success, print_warning, print_info, print_note,
    print_fields_table, print_errors_table, print_values_table,
)
from nexform.cli.validators import load_definition, load_record, validate_step_number
from nexform.core import find_cycles, plan_steps
from nexform.runtime import FormSession


def inspect_form(
    form: Annotated[Optional[Path], typer.Argument(help="Archivo JSON del formulario")] = None,
    sample: Annotated[Optional[str], typer.Option(help="Usar un ejemplo: expense, onboarding")] = None,
):
    """
    Muestra los campos de un formulario y sus problemas de diseño.

    Ejemplo:
        nexform inspect form.json
        nexform inspect --sample expense
    """
    definition = load_definition(form, sample)
    builder = FormBuilder(definition)

    print_header(definition.name, definition.description or None)
    print_field("ID", definition.id)
    print_field("Versión", definition.version)
    print_field("Modo", definition.layout_mode.value)
    print_field("Campos", definition.n_fields)
    print_fields_table(definition.fields)

    duplicates = builder.duplicate_keys()
    cycles = builder.formula_cycles()
    for key, ids in duplicates.items():
        print_warning(f"Key repetida '{key}' en campos: {', '.join(ids)}")
    for cycle in cycles:
        print_warning(f"Ciclo entre fórmulas: {' -> '.join(cycle)}")
    if not duplicates and not cycles:
        print_success("Sin problemas de diseño")


def plan_form(
    form: Annotated[Optional[Path], typer.Argument(help="Archivo JSON del formulario")] = None,
    sample: Annotated[Optional[str], typer.Option(help="Usar un ejemplo: expense, onboarding")] = None,
):
    """
    Muestra los pasos en que se divide el formulario.

    Ejemplo:
        nexform plan form.json
    """
    definition = load_definition(form, sample)
    steps = plan_steps(definition.fields, definition.layout_mode)

    print_header(definition.name, f"Modo: {definition.layout_mode.value}")
    for step in steps:
        print_step(step.index + 1, len(steps), step.title)
        for fld in step.fields:
            marker = "*" if fld.required else " "
            typer.echo(f"  {marker} {fld.label} ({fld.key}) [{fld.type.value}]")


def validate_record(
    form: Annotated[Path, typer.Argument(help="Archivo JSON del formulario")],
    record: Annotated[Optional[Path], typer.Argument(help="Archivo JSON con los valores")] = None,
    step: Annotated[Optional[int], typer.Option(help="Validar solo este paso (base 1)")] = None,
):
    """
    Valida un registro de datos contra el formulario.

    Recalcula los campos calculados antes de validar. Termina con código 1
    si hay errores.

    Ejemplo:
        nexform validate form.json data.json
        nexform validate form.json data.json --step 2
    """
    definition = load_definition(form)
    session = FormSession(definition, load_record(record))

    if step is not None:
        validate_step_number(step, session.step_count)
        errors = session.step_errors(step - 1)
        scope = f"paso {step} de {session.step_count}"
    else:
        errors = session.errors
        scope = "formulario completo"

    print_info(f"Validando {scope}")
    if errors:
        print_errors_table(errors)
        raise typer.Exit(1)
    print_success("Sin errores de validación")


def compute_record(
    form: Annotated[Path, typer.Argument(help="Archivo JSON del formulario")],
    record: Annotated[Optional[Path], typer.Argument(help="Archivo JSON con los valores")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Imprimir el registro completo como JSON")] = False,
):
    """
    Recalcula los campos calculados de un registro.

    Los campos sin valor reciben su valor por defecto antes del cálculo.

    Ejemplo:
        nexform compute form.json data.json
        nexform compute form.json data.json --json
    """
    definition = load_definition(form)
    values = load_record(record)

    # La sesión siembra los valores por defecto igual que validate
    session = FormSession(definition, values)
    cycles = find_cycles(definition.fields)
    updates = {
        key: value for key, value in session.record.items()
        if key not in values or values[key] != value
    }

    if as_json:
        typer.echo(json.dumps(session.record, indent=2, ensure_ascii=False))
        return

    for cycle in cycles:
        print_warning(f"Ciclo entre fórmulas: {' -> '.join(cycle)}")
    if cycles:
        print_note("Los campos en ciclo conservan su valor")
    if updates:
        print_section("Valores calculados o por defecto")
        print_values_table(updates)
    else:
        print_info("Sin cambios en el registro")
