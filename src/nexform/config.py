"""Enumeraciones y configuración del motor de formularios."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Tipos de campo disponibles (conjunto cerrado)."""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    PASSWORD = "password"
    SELECT = "select"
    CHECKBOX = "checkbox"
    TAGS = "tags"
    SLIDER = "slider"
    RATING = "rating"
    COLOR = "color"
    DATE = "date"
    TIME = "time"
    FILE = "file"
    SIGNATURE = "signature"
    DIVIDER = "divider"
    RICH_TEXT = "rich-text"


class LayoutMode(str, Enum):
    """Modo de presentación del formulario."""
    SINGLE = "single"
    WIZARD = "wizard"


class FieldWidth(str, Enum):
    """Ancho del campo dentro de la grilla."""
    FULL = "100%"
    HALF = "50%"
    THIRD = "33%"


class VisibilityOperator(str, Enum):
    """Operadores de las reglas de visibilidad."""
    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    TRUTHY = "truthy"
    FALSY = "falsy"


class DataSourceType(str, Enum):
    """Origen de las opciones de un campo."""
    STATIC = "static"
    API = "api"


class FieldAccess(str, Enum):
    """Nivel de acceso de un rol sobre un campo."""
    READ_WRITE = "read_write"
    READ_ONLY = "read_only"
    HIDDEN = "hidden"


# ============================================================================
# Configuración del motor
# ============================================================================

class EngineSettings(BaseModel):
    """Límites y mensajes por defecto del editor y del evaluador."""
    max_fields: int = Field(default=50, ge=1, description="Máximo de campos por formulario")
    history_limit: int = Field(default=20, ge=0, description="Pasos de deshacer guardados")
    copy_key_suffix: str = Field(default="_copy", description="Sufijo de key al duplicar")
    copy_label_suffix: str = Field(default=" (Copy)", description="Sufijo de etiqueta al duplicar")
    default_options: list[str] = Field(
        default_factory=lambda: ["Option 1", "Option 2"],
        description="Opciones iniciales de select/tags",
    )
    required_message: str = "This field is required."
    min_value_message: str = "Value must be at least {min}."
    max_value_message: str = "Value must be at most {max}."
    min_length_message: str = "Must be at least {min} characters."
    max_length_message: str = "Must be at most {max} characters."
    pattern_message: str = "Invalid format."


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Obtiene la configuración global (se crea con valores por defecto)."""
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def set_settings(settings: Optional[EngineSettings]) -> None:
    """Reemplaza la configuración global (None restaura los valores por defecto)."""
    global _settings
    _settings = settings
