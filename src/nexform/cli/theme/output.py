"""
Salida de texto de la CLI: encabezados, pasos, pares etiqueta/valor y
mensajes de estado.

El texto del usuario (nombres, etiquetas, mensajes) se envuelve en
``Text`` para que Rich no interprete corchetes como markup.
"""

from typing import Optional

from rich import box
from rich.panel import Panel
from rich.text import Text

from nexform.cli.theme.palette import get_console

# Prefijo y estilo de cada tipo de mensaje
_STATUS = {
    "success": ("[+]", "ok"),
    "warning": ("[!]", "warn"),
    "error": ("[x]", "fail"),
    "info": ("[i]", "hint"),
}


def status_text(kind: str, message: str) -> Text:
    """Mensaje con prefijo según su tipo (success, warning, error, info)."""
    prefix, style = _STATUS[kind]
    return Text(f"{prefix} {message}", style=style)


def print_success(message: str) -> None:
    get_console().print(status_text("success", message))


def print_warning(message: str) -> None:
    get_console().print(status_text("warning", message))


def print_error(message: str) -> None:
    get_console().print(status_text("error", message))


def print_info(message: str) -> None:
    get_console().print(status_text("info", message))


def print_note(message: str) -> None:
    """Nota destacada."""
    get_console().print(Text.assemble(("NOTA: ", "note.label"), (message, "hint")))


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Panel con el nombre del formulario."""
    content = Text(title, style="heading")
    if subtitle:
        content.append(f"\n{subtitle}", style="muted")
    get_console().print(Panel(content, border_style="border", box=box.ROUNDED, padding=(0, 2)))


def print_step(number: int, total: int, title: Optional[str] = None) -> None:
    """Título de un paso del wizard (número base 1)."""
    line = Text(f"Paso {number} de {total}", style="step")
    if title:
        line.append(f"  {title}", style="subtitle")
    console = get_console()
    console.print()
    console.print(line)


def print_field(label: str, value, indent: int = 2) -> None:
    """Par etiqueta: valor."""
    get_console().print(Text.assemble(" " * indent, (f"{label}: ", "label"), (str(value), "value")))


def print_section(title: str) -> None:
    console = get_console()
    console.print()
    console.print(Text(f"-- {title} --", style="step"))
