"""
Evaluación de reglas de visibilidad.

Un campo oculto no se renderiza ni se valida, pero su valor se conserva
en el registro (no se limpia al ocultarse).
"""

from typing import Any, Iterable, Mapping

from nexform.config import VisibilityOperator
from nexform.core.coercion import is_truthy, to_text
from nexform.models.field import FormField, VisibilityRule


def evaluate_rule(rule: VisibilityRule, record: Mapping[str, Any]) -> bool:
    """Evalúa una regla contra el registro."""
    target = record.get(rule.target_field_key)
    op = VisibilityOperator(rule.operator)

    if op == VisibilityOperator.TRUTHY:
        return is_truthy(target)
    if op == VisibilityOperator.FALSY:
        return not is_truthy(target)

    left = to_text(target)
    right = to_text(rule.value)
    if op == VisibilityOperator.EQ:
        return left == right
    if op == VisibilityOperator.NEQ:
        return left != right
    # CONTAINS
    return right in left


def is_visible(field: FormField, record: Mapping[str, Any]) -> bool:
    """True si el campo se muestra con los datos actuales."""
    if field.visibility is None:
        return True
    return evaluate_rule(field.visibility, record)


def visible_fields(fields: Iterable[FormField], record: Mapping[str, Any]) -> list[FormField]:
    """Filtra los campos visibles conservando el orden."""
    return [f for f in fields if is_visible(f, record)]
