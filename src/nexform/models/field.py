"""
Modelo de campo de formulario (FormField) y sus configuraciones anidadas.
"""

from typing import Any, Optional

from pydantic import Field

from nexform.config import (
    DataSourceType,
    FieldAccess,
    FieldType,
    FieldWidth,
    VisibilityOperator,
)
from nexform.models.base import CamelModel, generate_id


class FieldValidation(CamelModel):
    """Restricciones de validación de un campo."""
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    message: Optional[str] = None
    accept: Optional[str] = None  # Tipos MIME / extensiones (file)
    max_size: Optional[int] = None  # Bytes (file)


class FieldLayout(CamelModel):
    """Ubicación del campo en la grilla."""
    width: FieldWidth = FieldWidth.FULL


class FieldAppearance(CamelModel):
    """Decoraciones visuales del campo."""
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    icon: Optional[str] = None


class FieldDataSource(CamelModel):
    """Origen de las opciones (estático o API)."""
    type: DataSourceType = DataSourceType.STATIC
    endpoint: Optional[str] = None
    label_key: Optional[str] = None
    value_key: Optional[str] = None


class FieldBehavior(CamelModel):
    """Comportamiento en tiempo de ejecución."""
    read_only: Optional[bool] = None
    disabled: Optional[bool] = None
    calculation: Optional[str] = None  # Fórmula con {{key}}, ej: "{{price}} * {{qty}}"


class VisibilityRule(CamelModel):
    """Regla condicional: el campo se muestra según el valor de otro campo."""
    target_field_key: str = ""
    operator: VisibilityOperator = VisibilityOperator.EQ
    value: Optional[Any] = None  # Ignorado por truthy/falsy


class FieldPermission(CamelModel):
    """Acceso de un rol sobre el campo."""
    role_id: str
    access: FieldAccess = FieldAccess.READ_WRITE


class FormField(CamelModel):
    """Definición de un campo del formulario."""
    id: str = Field(default_factory=generate_id)
    type: FieldType = FieldType.TEXT
    label: str = ""
    key: str = ""
    required: bool = False
    placeholder: Optional[str] = None
    default_value: Optional[Any] = None
    help_text: Optional[str] = None
    options: Optional[list[str]] = None  # Solo select/tags
    layout: FieldLayout = Field(default_factory=FieldLayout)
    appearance: Optional[FieldAppearance] = None
    validation: Optional[FieldValidation] = None
    data_source: Optional[FieldDataSource] = None
    behavior: Optional[FieldBehavior] = None
    visibility: Optional[VisibilityRule] = None
    permissions: Optional[list[FieldPermission]] = None

    @property
    def is_divider(self) -> bool:
        """True si el campo es un separador estructural."""
        return self.type == FieldType.DIVIDER

    @property
    def is_locked(self) -> bool:
        """True si el campo es de solo lectura o está deshabilitado."""
        if self.behavior is None:
            return False
        return bool(self.behavior.read_only or self.behavior.disabled)

    @property
    def calculation(self) -> Optional[str]:
        """Fórmula del campo calculado (None si no tiene)."""
        if self.behavior is None or not self.behavior.calculation:
            return None
        return self.behavior.calculation
