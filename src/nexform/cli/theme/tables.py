"""
Tablas Rich de campos, errores y valores.
"""

from typing import Any, Mapping, Optional

from rich import box
from rich.table import Table
from rich.text import Text

from nexform.cli.theme.palette import get_console
from nexform.models.field import FormField


def create_table(title: Optional[str], columns: list[tuple[str, str]]) -> Table:
    """
    Tabla con el estilo de la CLI.

    Args:
        title: Título sobre la tabla
        columns: [(nombre, alineación), ...]
    """
    table = Table(
        title=title,
        title_style="heading",
        header_style="step",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    for name, justify in columns:
        table.add_column(name, justify=justify)
    return table


def _rules_summary(fld: FormField) -> str:
    """Validación, visibilidad y fórmula en una línea."""
    parts = []
    rules = fld.validation
    if rules is not None:
        if rules.min is not None:
            parts.append(f"min={rules.min:g}")
        if rules.max is not None:
            parts.append(f"max={rules.max:g}")
        if rules.pattern:
            parts.append(f"/{rules.pattern}/")
    if fld.visibility is not None:
        rule = fld.visibility
        condition = f"if {rule.target_field_key} {rule.operator.value}"
        if rule.value not in (None, ""):
            condition += f" {rule.value}"
        parts.append(condition)
    if fld.calculation:
        parts.append(f"= {fld.calculation}")
    return "  ".join(parts)


def print_fields_table(fields: list[FormField], title: str = "CAMPOS") -> None:
    """Campos del formulario en orden (los calculados resaltados)."""
    table = create_table(title, [("#", "right"), ("Key", "left"), ("Tipo", "left"),
                                 ("Etiqueta", "left"), ("Req", "center"), ("Reglas", "left")])
    for i, fld in enumerate(fields):
        table.add_row(
            str(i),
            Text(fld.key, style="computed" if fld.calculation else "key"),
            Text(fld.type.value, style="muted" if fld.is_divider else ""),
            Text(fld.label),
            Text("*", style="required") if fld.required else "",
            Text(_rules_summary(fld)),
        )
    get_console().print(table)


def print_errors_table(errors: Mapping[str, str], title: str = "ERRORES") -> None:
    """Mapa {key: mensaje} de validación."""
    table = create_table(title, [("Key", "left"), ("Mensaje", "left")])
    for key, message in errors.items():
        table.add_row(Text(key, style="key"), Text(message, style="fail"))
    get_console().print(table)


def print_values_table(values: Mapping[str, Any], title: str = "VALORES") -> None:
    """Pares key/valor (campos calculados)."""
    table = create_table(title, [("Key", "left"), ("Valor", "right")])
    for key, value in values.items():
        table.add_row(Text(key, style="computed"), Text(str(value), style="value"))
    get_console().print(table)
