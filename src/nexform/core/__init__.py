"""Evaluación de reglas: esquema de tipos, visibilidad, validación, fórmulas y pasos."""

from nexform.core.schema import (
    FieldTypeSpec,
    FIELD_TYPES,
    NUMERIC_TYPES,
    TEXT_LENGTH_TYPES,
    OPTION_TYPES,
    get_type_spec,
    has_options,
    applicable_validations,
    default_field,
)

from nexform.core.visibility import (
    evaluate_rule,
    is_visible,
    visible_fields,
)

from nexform.core.validation import (
    validate_field,
    validate_fields,
    validate_form,
    validate_step,
)

from nexform.core.formula import (
    extract_references,
    substitute,
    evaluate,
    evaluate_formula,
)

from nexform.core.compute import (
    build_dependency_graph,
    find_cycles,
    computation_order,
    recompute,
    apply_computed,
)

from nexform.core.wizard import (
    WizardStep,
    WizardNavigator,
    plan_steps,
)

from nexform.core.render import (
    FieldViewModel,
    render_field,
)

from nexform.core.permissions import (
    resolve_access,
    is_hidden_for,
    is_read_only_for,
)

__all__ = [
    # Esquema
    "FieldTypeSpec",
    "FIELD_TYPES",
    "NUMERIC_TYPES",
    "TEXT_LENGTH_TYPES",
    "OPTION_TYPES",
    "get_type_spec",
    "has_options",
    "applicable_validations",
    "default_field",
    # Visibilidad
    "evaluate_rule",
    "is_visible",
    "visible_fields",
    # Validación
    "validate_field",
    "validate_fields",
    "validate_form",
    "validate_step",
    # Fórmulas
    "extract_references",
    "substitute",
    "evaluate",
    "evaluate_formula",
    "build_dependency_graph",
    "find_cycles",
    "computation_order",
    "recompute",
    "apply_computed",
    # Wizard
    "WizardStep",
    "WizardNavigator",
    "plan_steps",
    # Render
    "FieldViewModel",
    "render_field",
    # Permisos
    "resolve_access",
    "is_hidden_for",
    "is_read_only_for",
]
