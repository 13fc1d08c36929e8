"""
Validación de valores del registro contra la definición del formulario.

Orden de chequeo por campo: requerido, min/max, patrón. Cada chequeo que
falla sobrescribe el mensaje anterior, por lo que el último que falla es
el que queda en el mapa de errores. min/max/patrón solo corren cuando hay
valor, así que un error de requerido nunca convive con ellos.
"""

import logging
import re
from typing import Any, Iterable, Mapping, Optional, Union

from nexform.config import EngineSettings, get_settings
from nexform.core.coercion import is_empty, parse_number, to_text
from nexform.core.permissions import is_read_only_for
from nexform.core.schema import get_type_spec
from nexform.core.visibility import is_visible
from nexform.models.definition import FormDefinition
from nexform.models.field import FormField

logger = logging.getLogger(__name__)


def _range_errors(field: FormField, value: Any, settings: EngineSettings) -> Optional[str]:
    """Chequeo min/max (numérico o por longitud según el tipo)."""
    rules = field.validation
    spec = get_type_spec(field.type)
    error = None

    if spec.numeric:
        measured = parse_number(value)
        if measured is None:
            return None
        min_msg, max_msg = settings.min_value_message, settings.max_value_message
    elif spec.text_length:
        measured = len(to_text(value))
        min_msg, max_msg = settings.min_length_message, settings.max_length_message
    else:
        return None

    if rules.min is not None and measured < rules.min:
        error = rules.message or min_msg.format(min=to_text(rules.min))
    if rules.max is not None and measured > rules.max:
        error = rules.message or max_msg.format(max=to_text(rules.max))
    return error


def _pattern_error(field: FormField, value: Any, settings: EngineSettings) -> Optional[str]:
    """Chequeo de expresión regular sobre el valor como texto."""
    pattern = field.validation.pattern
    if not pattern:
        return None
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        logger.debug("Patrón inválido en '%s' (%s): %s", field.key, pattern, e)
        return None
    if compiled.search(to_text(value)) is None:
        return field.validation.message or settings.pattern_message
    return None


def validate_field(
    field: FormField,
    value: Any,
    settings: Optional[EngineSettings] = None,
) -> Optional[str]:
    """
    Valida el valor de un campo.

    Returns:
        Mensaje de error, o None si el valor es válido
    """
    settings = settings or get_settings()
    if not get_type_spec(field.type).carries_value:
        return None

    error = None
    if field.required and is_empty(value):
        error = settings.required_message

    if not is_empty(value) and field.validation is not None:
        range_error = _range_errors(field, value, settings)
        if range_error:
            error = range_error
        pattern_error = _pattern_error(field, value, settings)
        if pattern_error:
            error = pattern_error

    return error


def should_validate(
    field: FormField,
    record: Mapping[str, Any],
    roles: Optional[Iterable[str]] = None,
) -> bool:
    """True si el campo está visible y es editable."""
    if field.is_locked:
        return False
    if roles is not None and is_read_only_for(field, roles):
        return False
    return is_visible(field, record)


def validate_fields(
    fields: Iterable[FormField],
    record: Mapping[str, Any],
    roles: Optional[Iterable[str]] = None,
    settings: Optional[EngineSettings] = None,
) -> dict[str, str]:
    """Valida una lista de campos. Retorna {key: mensaje}."""
    settings = settings or get_settings()
    roles = list(roles) if roles is not None else None
    errors: dict[str, str] = {}
    for fld in fields:
        if not should_validate(fld, record, roles):
            continue
        message = validate_field(fld, record.get(fld.key), settings)
        if message:
            errors[fld.key] = message
    return errors


def validate_form(
    definition: Union[FormDefinition, Iterable[FormField]],
    record: Mapping[str, Any],
    roles: Optional[Iterable[str]] = None,
    settings: Optional[EngineSettings] = None,
) -> dict[str, str]:
    """
    Valida el registro completo antes de enviar.

    Args:
        definition: Definición (o lista de campos)
        record: Registro {key: valor}
        roles: Roles del usuario para seguridad por campo
        settings: Mensajes por defecto

    Returns:
        Mapa {key: mensaje}; vacío si el formulario es válido
    """
    fields = definition.fields if isinstance(definition, FormDefinition) else definition
    return validate_fields(fields, record, roles, settings)


def validate_step(
    definition: FormDefinition,
    record: Mapping[str, Any],
    step_index: int,
    roles: Optional[Iterable[str]] = None,
    settings: Optional[EngineSettings] = None,
) -> dict[str, str]:
    """Valida solo los campos de un paso del wizard."""
    from nexform.core.wizard import plan_steps

    steps = plan_steps(definition.fields, definition.layout_mode)
    if not 0 <= step_index < len(steps):
        return {}
    return validate_fields(steps[step_index].fields, record, roles, settings)
