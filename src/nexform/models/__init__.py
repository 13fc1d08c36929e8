"""
Modelos de datos de nexform.

Este módulo contiene los modelos Pydantic de la definición de formularios.
"""

from nexform.models.base import (
    CamelModel,
    generate_id,
    generate_timestamp,
)
from nexform.models.field import (
    FieldValidation,
    FieldLayout,
    FieldAppearance,
    FieldDataSource,
    FieldBehavior,
    VisibilityRule,
    FieldPermission,
    FormField,
)
from nexform.models.definition import FormDefinition

__all__ = [
    # Clases base
    "CamelModel",
    "generate_id",
    "generate_timestamp",
    # Configuración anidada de campos
    "FieldValidation",
    "FieldLayout",
    "FieldAppearance",
    "FieldDataSource",
    "FieldBehavior",
    "VisibilityRule",
    "FieldPermission",
    # Campo y formulario
    "FormField",
    "FormDefinition",
]
