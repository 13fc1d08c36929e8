"""
Clases base para modelos Pydantic.

Proporciona generación de IDs, timestamps y la convención de alias camelCase
usada en la representación JSON de los formularios.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def generate_id() -> str:
    """Genera un ID corto único (8 caracteres)."""
    return str(uuid.uuid4())[:8]


def generate_timestamp() -> str:
    """Genera timestamp ISO actual."""
    return datetime.now().isoformat()


class CamelModel(BaseModel):
    """
    Modelo base con alias camelCase.

    Los atributos se escriben en snake_case; el JSON usa camelCase
    (``default_value`` <-> ``defaultValue``). Se aceptan ambos al construir.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict:
        """Serializa a dict compatible con JSON (claves camelCase, sin nulos)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
