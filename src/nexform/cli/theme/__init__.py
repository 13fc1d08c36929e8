"""
Tema y salida de la CLI.

- palette: paletas, tema activo y consola Rich
- output: encabezados, pasos y mensajes de estado
- tables: tablas de campos, errores y valores
"""

from nexform.cli.theme.palette import (
    ThemeName,
    ColorPalette,
    PALETTES,
    CLITheme,
    get_console,
)

from nexform.cli.theme.output import (
    status_text,
    print_success,
    print_warning,
    print_error,
    print_info,
    print_note,
    print_header,
    print_step,
    print_field,
    print_section,
)

from nexform.cli.theme.tables import (
    create_table,
    print_fields_table,
    print_errors_table,
    print_values_table,
)

__all__ = [
    "ThemeName",
    "ColorPalette",
    "PALETTES",
    "CLITheme",
    "get_console",
    "status_text",
    "print_success",
    "print_warning",
    "print_error",
    "print_info",
    "print_note",
    "print_header",
    "print_step",
    "print_field",
    "print_section",
    "create_table",
    "print_fields_table",
    "print_errors_table",
    "print_values_table",
]
