"""
Esquema de tipos de campo.

Tabla estática que indica, para cada tipo, qué configuración aplica
(opciones, min/max, patrón, restricciones de archivo) y el esqueleto
por defecto al crear un campo. Es la única fuente de verdad sobre tipos:
el editor, el validador y el renderer la consultan en lugar de repetir
listas de tipos.
"""

from dataclasses import dataclass
from typing import Optional

from nexform.config import EngineSettings, FieldType, get_settings
from nexform.models.base import generate_id
from nexform.models.field import FieldValidation, FormField


@dataclass(frozen=True)
class FieldTypeSpec:
    """Capacidades de un tipo de campo."""
    type: FieldType
    label: str  # Nombre en la biblioteca de campos
    has_options: bool = False
    numeric: bool = False  # min/max sobre el valor numérico
    text_length: bool = False  # min/max sobre la longitud del texto
    supports_pattern: bool = False
    supports_file_limits: bool = False  # accept / maxSize
    carries_value: bool = True
    default_min: Optional[float] = None
    default_max: Optional[float] = None

    @property
    def supports_range(self) -> bool:
        """True si aplican validation.min / validation.max."""
        return self.numeric or self.text_length


FIELD_TYPES: dict[FieldType, FieldTypeSpec] = {
    FieldType.TEXT: FieldTypeSpec(FieldType.TEXT, "Text Field", text_length=True, supports_pattern=True),
    FieldType.TEXTAREA: FieldTypeSpec(FieldType.TEXTAREA, "Text Area", text_length=True, supports_pattern=True),
    FieldType.NUMBER: FieldTypeSpec(FieldType.NUMBER, "Number", numeric=True),
    FieldType.EMAIL: FieldTypeSpec(FieldType.EMAIL, "Email", supports_pattern=True),
    FieldType.PASSWORD: FieldTypeSpec(FieldType.PASSWORD, "Password", text_length=True, supports_pattern=True),
    FieldType.SELECT: FieldTypeSpec(FieldType.SELECT, "Dropdown", has_options=True),
    FieldType.CHECKBOX: FieldTypeSpec(FieldType.CHECKBOX, "Checkbox"),
    FieldType.TAGS: FieldTypeSpec(FieldType.TAGS, "Tags", has_options=True),
    FieldType.SLIDER: FieldTypeSpec(FieldType.SLIDER, "Slider", numeric=True, default_min=0, default_max=100),
    FieldType.RATING: FieldTypeSpec(FieldType.RATING, "Rating", numeric=True, default_max=5),
    FieldType.COLOR: FieldTypeSpec(FieldType.COLOR, "Color Picker"),
    FieldType.DATE: FieldTypeSpec(FieldType.DATE, "Date Picker"),
    FieldType.TIME: FieldTypeSpec(FieldType.TIME, "Time Picker"),
    FieldType.FILE: FieldTypeSpec(FieldType.FILE, "File Upload", supports_file_limits=True),
    FieldType.SIGNATURE: FieldTypeSpec(FieldType.SIGNATURE, "Signature"),
    FieldType.DIVIDER: FieldTypeSpec(FieldType.DIVIDER, "Section Divider", carries_value=False),
    FieldType.RICH_TEXT: FieldTypeSpec(FieldType.RICH_TEXT, "Rich Text"),
}

# Tipos agrupados (derivados de la tabla)
NUMERIC_TYPES = frozenset(t for t, s in FIELD_TYPES.items() if s.numeric)
TEXT_LENGTH_TYPES = frozenset(t for t, s in FIELD_TYPES.items() if s.text_length)
OPTION_TYPES = frozenset(t for t, s in FIELD_TYPES.items() if s.has_options)


def get_type_spec(field_type: FieldType) -> FieldTypeSpec:
    """Obtiene las capacidades de un tipo (acepta el valor string)."""
    return FIELD_TYPES[FieldType(field_type)]


def has_options(field_type: FieldType) -> bool:
    """True si el tipo usa la lista ``options``."""
    return get_type_spec(field_type).has_options


def applicable_validations(field_type: FieldType) -> set[str]:
    """Claves de ``validation`` que aplican al tipo."""
    spec = get_type_spec(field_type)
    keys = set()
    if spec.supports_range:
        keys.update({"min", "max"})
    if spec.supports_pattern:
        keys.add("pattern")
    if spec.supports_file_limits:
        keys.update({"accept", "maxSize"})
    if keys:
        keys.add("message")
    return keys


def default_field(
    field_type: FieldType,
    settings: Optional[EngineSettings] = None,
) -> FormField:
    """
    Crea el esqueleto por defecto de un campo.

    Args:
        field_type: Tipo del campo
        settings: Configuración (opciones iniciales)

    Returns:
        FormField con id nuevo, key derivada del id y opciones iniciales
        para select/tags
    """
    settings = settings or get_settings()
    spec = get_type_spec(field_type)
    field_id = generate_id()

    fld = FormField(
        id=field_id,
        type=spec.type,
        label=f"New {spec.type.value}",
        key=f"field_{field_id}",
        required=False,
        placeholder="",
    )
    if spec.has_options:
        fld.options = list(settings.default_options)
    if spec.default_min is not None or spec.default_max is not None:
        fld.validation = FieldValidation(min=spec.default_min, max=spec.default_max)
    if not spec.carries_value:
        fld.label = "Section"
        fld.placeholder = None
    return fld
