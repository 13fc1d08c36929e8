"""
Modelo de definición de formulario (FormDefinition).

Representa el artefacto que se persiste: metadatos más la lista ordenada
de campos. El orden de ``fields`` es el orden de render y de tabulación.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import Field

from nexform.config import LayoutMode
from nexform.models.base import CamelModel, generate_id, generate_timestamp
from nexform.models.field import FormField


def _form_id() -> str:
    return f"form-{generate_id()}"


class FormDefinition(CamelModel):
    """Formulario: metadatos más campos ordenados."""

    id: str = Field(default_factory=_form_id)
    name: str = "New Form"
    description: str = ""
    version: int = Field(default=1, ge=1)
    last_modified: str = Field(default_factory=generate_timestamp)
    layout_mode: LayoutMode = LayoutMode.SINGLE
    fields: list[FormField] = Field(default_factory=list)

    @property
    def n_fields(self) -> int:
        """Número de campos."""
        return len(self.fields)

    @property
    def is_wizard(self) -> bool:
        """True si el formulario se presenta en pasos."""
        return self.layout_mode == LayoutMode.WIZARD

    def index_of(self, field_id: str) -> int:
        """Índice del campo con ese id, o -1 si no existe."""
        for i, f in enumerate(self.fields):
            if f.id == field_id:
                return i
        return -1

    def get_field(self, field_id: str) -> Optional[FormField]:
        """Obtiene un campo por su id."""
        idx = self.index_of(field_id)
        return self.fields[idx] if idx >= 0 else None

    def get_field_by_key(self, key: str) -> Optional[FormField]:
        """
        Obtiene el primer campo con esa key.

        Si hay keys duplicadas solo se retorna la primera coincidencia.
        """
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def keys(self) -> list[str]:
        """Keys de todos los campos, en orden."""
        return [f.key for f in self.fields]

    def touch(self) -> None:
        """Actualiza el timestamp de modificación."""
        self.last_modified = generate_timestamp()

    # ========================================================================
    # Serialización
    # ========================================================================

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serializa a JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "FormDefinition":
        """Crea una definición desde texto JSON."""
        return cls.model_validate_json(text)

    def to_file(self, path: Union[str, Path]) -> Path:
        """Guarda la definición como JSON."""
        path = Path(path)
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FormDefinition":
        """Carga una definición desde un archivo JSON."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
