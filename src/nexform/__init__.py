"""
nexform - Motor de formularios.

Definición de formularios, editor estructural y evaluación de reglas
(visibilidad, validación, campos calculados y pasos de wizard).
"""

__version__ = "0.1.0"

from nexform.config import (
    FieldType,
    LayoutMode,
    FieldWidth,
    VisibilityOperator,
    DataSourceType,
    FieldAccess,
    EngineSettings,
    get_settings,
)
from nexform.exceptions import (
    NexformError,
    CapacityError,
    FormulaError,
    FormulaSyntaxError,
    FormulaArithmeticError,
)
from nexform.models import FormDefinition, FormField
from nexform.builder import FormBuilder
from nexform.runtime import FormSession
from nexform.core import (
    is_visible,
    validate_form,
    recompute,
    plan_steps,
    render_field,
)

__all__ = [
    "__version__",
    "FieldType",
    "LayoutMode",
    "FieldWidth",
    "VisibilityOperator",
    "DataSourceType",
    "FieldAccess",
    "EngineSettings",
    "get_settings",
    "NexformError",
    "CapacityError",
    "FormulaError",
    "FormulaSyntaxError",
    "FormulaArithmeticError",
    "FormDefinition",
    "FormField",
    "FormBuilder",
    "FormSession",
    "is_visible",
    "validate_form",
    "recompute",
    "plan_steps",
    "render_field",
]
