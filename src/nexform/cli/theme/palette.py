"""
Paletas de colores de la CLI y consola Rich compartida.

Cada paleta se traduce a un ``rich.theme.Theme`` con un estilo por rol
(``key``, ``ok``, ``fail``, ...); el resto de la CLI usa esos nombres y
no conoce los colores.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.theme import Theme


class ThemeName(str, Enum):
    """Temas de la CLI."""
    DEFAULT = "default"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class ColorPalette:
    """Color por rol de texto."""
    heading: str      # Nombre del formulario, títulos de tabla
    step: str         # Títulos de paso y encabezados de columna
    key: str          # Keys de campo
    label: str
    value: str
    required: str     # Marca de campo requerido
    computed: str     # Campos calculados
    ok: str
    warn: str
    fail: str
    hint: str
    muted: str
    border: str

    def rich_theme(self) -> Theme:
        """Theme de Rich con un estilo por rol."""
        styles = asdict(self)
        styles.update({
            "heading": f"bold {self.heading}",
            "step": f"bold {self.step}",
            "value": f"bold {self.value}",
            "note.label": f"bold {self.hint}",
            "subtitle": f"italic {self.muted}",
        })
        return Theme(styles)


PALETTES = {
    ThemeName.DEFAULT: ColorPalette(
        heading="#5f87d7",
        step="#87afd7",
        key="#5fafaf",
        label="#a8a8a8",
        value="#d7af5f",
        required="#d75f87",
        computed="#af87d7",
        ok="#5faf5f",
        warn="#d7875f",
        fail="#d75f5f",
        hint="#5f87d7",
        muted="#767676",
        border="#4e4e4e",
    ),
    ThemeName.MINIMAL: ColorPalette(
        heading="bright_white",
        step="white",
        key="cyan",
        label="grey62",
        value="bright_white",
        required="white",
        computed="cyan",
        ok="green",
        warn="yellow",
        fail="red",
        hint="cyan",
        muted="grey42",
        border="grey30",
    ),
}


class CLITheme:
    """Tema activo y su consola (una por proceso)."""

    name: ThemeName = ThemeName.DEFAULT
    _console: Optional[Console] = None

    @classmethod
    def use(cls, name: ThemeName) -> None:
        """Activa un tema; la consola se recrea en el próximo uso."""
        cls.name = ThemeName(name)
        cls._console = None

    @classmethod
    def palette(cls) -> ColorPalette:
        return PALETTES[cls.name]

    @classmethod
    def console(cls) -> Console:
        if cls._console is None:
            cls._console = Console(theme=cls.palette().rich_theme(), highlight=False)
        return cls._console


def get_console() -> Console:
    """Consola Rich con el tema activo."""
    return CLITheme.console()
