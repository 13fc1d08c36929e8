"""
Sesión de llenado de un formulario.

FormSession combina la definición (solo lectura), el registro de datos y
el paso actual del wizard. Cada cambio de valor dispara un recálculo de
campos calculados; la validación se recalcula completa a pedido.
"""

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from nexform.config import EngineSettings, get_settings
from nexform.core.compute import recompute
from nexform.core.permissions import is_hidden_for, is_read_only_for
from nexform.core.render import FieldViewModel, render_field
from nexform.core.schema import get_type_spec
from nexform.core.validation import validate_fields, validate_form
from nexform.core.visibility import is_visible
from nexform.core.wizard import WizardNavigator, WizardStep, plan_steps
from nexform.models.definition import FormDefinition
from nexform.models.field import FormField

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, Any], Any]


class FormSession:
    """Estado de ejecución de un formulario para un usuario."""

    def __init__(
        self,
        definition: FormDefinition,
        record: Optional[Mapping[str, Any]] = None,
        on_change: Optional[ChangeCallback] = None,
        roles: Optional[Iterable[str]] = None,
        settings: Optional[EngineSettings] = None,
    ):
        """
        Inicializa la sesión.

        Args:
            definition: Formulario a llenar (no se modifica)
            record: Valores iniciales {key: valor}
            on_change: Callback (key, valor) por cada escritura en el registro
            roles: Roles del usuario para seguridad por campo
            settings: Mensajes de validación
        """
        self.definition = definition
        self.record: dict[str, Any] = dict(record or {})
        self.on_change = on_change
        self.roles = list(roles) if roles is not None else None
        self.settings = settings or get_settings()
        self.navigator = WizardNavigator(plan_steps(definition.fields, definition.layout_mode))

        self._seed_defaults()
        self.refresh()

    def _seed_defaults(self) -> None:
        """Completa el registro con ``defaultValue`` para keys sin valor."""
        for fld in self.definition.fields:
            if fld.default_value is None or not get_type_spec(fld.type).carries_value:
                continue
            self.record.setdefault(fld.key, fld.default_value)

    # ========================================================================
    # Registro de datos
    # ========================================================================

    def _write(self, key: str, value: Any) -> None:
        self.record[key] = value
        if self.on_change is not None:
            self.on_change(key, value)

    def set_value(self, key: str, value: Any) -> dict[str, Any]:
        """
        Escribe un valor y recalcula los campos calculados.

        Returns:
            Valores calculados que cambiaron
        """
        self._write(key, value)
        return self.refresh()

    def update(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Escribe varios valores y recalcula una sola vez."""
        for key, value in values.items():
            self._write(key, value)
        return self.refresh()

    def refresh(self) -> dict[str, Any]:
        """Recalcula los campos calculados y escribe los que cambiaron."""
        updates = recompute(self.definition.fields, self.record)
        for key, value in updates.items():
            logger.debug("Campo calculado '%s' = %r", key, value)
            self._write(key, value)
        return updates

    def get_value(self, key: str, default: Any = None) -> Any:
        return self.record.get(key, default)

    # ========================================================================
    # Pasos del wizard
    # ========================================================================

    @property
    def steps(self) -> list[WizardStep]:
        return self.navigator.steps

    @property
    def step_count(self) -> int:
        return self.navigator.step_count

    @property
    def current_step(self) -> int:
        return self.navigator.current_step

    @property
    def is_first_step(self) -> bool:
        return self.navigator.is_first

    @property
    def is_last_step(self) -> bool:
        return self.navigator.is_last

    def next(self) -> int:
        """Avanza al siguiente paso (no valida el paso actual)."""
        return self.navigator.next()

    def back(self) -> int:
        """Vuelve al paso anterior."""
        return self.navigator.back()

    def go_to(self, index: int) -> int:
        return self.navigator.go_to(index)

    def replan(self) -> None:
        """Recalcula los pasos tras un cambio en la definición (vista previa)."""
        self.navigator.replan(plan_steps(self.definition.fields, self.definition.layout_mode))

    # ========================================================================
    # Vista y validación
    # ========================================================================

    def _shown(self, fld: FormField) -> bool:
        if self.roles is not None and is_hidden_for(fld, self.roles):
            return False
        return is_visible(fld, self.record)

    def visible_fields(self) -> list[FormField]:
        """Campos visibles del paso actual."""
        return [f for f in self.navigator.current.fields if self._shown(f)]

    def render(self) -> list[FieldViewModel]:
        """Modelos de vista de los campos visibles del paso actual."""
        return [
            render_field(
                f,
                self.record.get(f.key),
                read_only=self.roles is not None and is_read_only_for(f, self.roles),
            )
            for f in self.visible_fields()
        ]

    @property
    def errors(self) -> dict[str, str]:
        """Errores de todo el formulario."""
        return validate_form(self.definition, self.record, self.roles, self.settings)

    def step_errors(self, index: Optional[int] = None) -> dict[str, str]:
        """Errores de un paso (el actual por defecto)."""
        index = self.current_step if index is None else index
        if not 0 <= index < self.step_count:
            return {}
        return validate_fields(self.steps[index].fields, self.record, self.roles, self.settings)

    def submit(self) -> dict[str, str]:
        """
        Chequeo previo al envío.

        Returns:
            Mapa de errores; vacío si se puede enviar
        """
        errors = self.errors
        if errors:
            logger.debug("Envío bloqueado en '%s': %s", self.definition.id, sorted(errors))
        return errors
