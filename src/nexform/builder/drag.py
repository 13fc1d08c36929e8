"""
Protocolo de arrastre del editor.

Solo puede haber un arrastre en curso. El origen es un tipo de la
biblioteca de campos (se agrega un campo nuevo) o un campo existente
(se mueve, o se copia si el modificador está presionado al soltar).
"""

from dataclasses import dataclass
from typing import Optional, Union

from nexform.config import FieldType


@dataclass(frozen=True)
class LibrarySource:
    """Arrastre desde la biblioteca de tipos."""
    field_type: FieldType


@dataclass(frozen=True)
class FieldSource:
    """Arrastre de un campo existente."""
    field_id: str


DragSource = Union[LibrarySource, FieldSource]


@dataclass
class DragOperation:
    """Arrastre en curso."""
    source: DragSource
    copy_modifier: bool = False
    drop_index: Optional[int] = None  # Índice candidato bajo el cursor

    @property
    def from_library(self) -> bool:
        return isinstance(self.source, LibrarySource)
