"""
Editor estructural de formularios.

FormBuilder es el único que modifica la definición: agrega, mueve, copia,
elimina y actualiza campos manteniendo la lista consistente. También lleva
el estado transitorio de la sesión de edición (campo seleccionado,
arrastre en curso, mensaje al usuario) y el historial de deshacer.
"""

import logging
import warnings
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel

from nexform.builder.drag import DragOperation, FieldSource, LibrarySource
from nexform.builder.history import History
from nexform.config import EngineSettings, FieldType, LayoutMode, VisibilityOperator, get_settings
from nexform.core.compute import find_cycles
from nexform.core.schema import default_field, has_options
from nexform.exceptions import CapacityError
from nexform.models.base import generate_id
from nexform.models.definition import FormDefinition
from nexform.models.field import (
    FieldAppearance,
    FieldBehavior,
    FieldDataSource,
    FieldLayout,
    FieldValidation,
    FormField,
    VisibilityRule,
)

logger = logging.getLogger(__name__)


def _normalize_keys(model: type[BaseModel], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Traduce claves camelCase a nombres de atributo del modelo."""
    names = {}
    for name, info in model.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    result = {}
    for key, value in updates.items():
        if key not in names:
            raise ValueError(f"Propiedad desconocida para {model.__name__}: {key}")
        result[names[key]] = value
    return result


class FormBuilder:
    """
    Sesión de edición de un formulario.

    Las operaciones sobre un id inexistente no hacen nada (retornan None o
    False): con arrastres y borrados cruzados es normal que llegue un id viejo.
    """

    def __init__(
        self,
        definition: Optional[FormDefinition] = None,
        settings: Optional[EngineSettings] = None,
        on_change: Optional[Callable[[FormDefinition], Any]] = None,
    ):
        """
        Inicializa el editor.

        Args:
            definition: Formulario a editar (uno vacío si es None)
            settings: Límites y textos por defecto
            on_change: Callback invocado con la definición tras cada cambio
        """
        self.definition = definition if definition is not None else FormDefinition()
        self.settings = settings or get_settings()
        self.on_change = on_change
        self.history = History(self.settings.history_limit)
        self.selected_field_id: Optional[str] = None
        self.drag: Optional[DragOperation] = None
        self.message: str = ""

    # ========================================================================
    # Consultas
    # ========================================================================

    @property
    def fields(self) -> list[FormField]:
        return self.definition.fields

    @property
    def selected_field(self) -> Optional[FormField]:
        if self.selected_field_id is None:
            return None
        return self.definition.get_field(self.selected_field_id)

    @property
    def is_full(self) -> bool:
        return len(self.fields) >= self.settings.max_fields

    def duplicate_keys(self) -> dict[str, list[str]]:
        """Keys usadas por más de un campo: {key: [ids]}."""
        seen: dict[str, list[str]] = {}
        for fld in self.fields:
            seen.setdefault(fld.key, []).append(fld.id)
        return {key: ids for key, ids in seen.items() if len(ids) > 1}

    def formula_cycles(self) -> list[list[str]]:
        """Ciclos entre fórmulas de campos calculados."""
        return find_cycles(self.fields)

    def requires_confirmation(self, field_id: str) -> bool:
        """True si borrar el campo puede cambiar los pasos del wizard (divider)."""
        fld = self.definition.get_field(field_id)
        return fld is not None and fld.is_divider

    # ========================================================================
    # Registro de cambios
    # ========================================================================

    def _snapshot(self) -> FormDefinition:
        return self.definition.model_copy(deep=True)

    def _commit(self, snapshot: FormDefinition) -> None:
        """Registra el estado previo y notifica el cambio."""
        self.history.record(snapshot)
        if self.on_change is not None:
            self.on_change(self.definition)

    def _warn_duplicate_key(self, key: str) -> None:
        if len([f for f in self.fields if f.key == key]) > 1:
            warnings.warn(
                f"La key '{key}' está repetida; las reglas usarán el primer campo",
                UserWarning,
                stacklevel=3,
            )

    def _warn_cycles(self) -> None:
        for cycle in self.formula_cycles():
            warnings.warn(
                f"Ciclo entre fórmulas: {' -> '.join(cycle)}",
                UserWarning,
                stacklevel=3,
            )

    # ========================================================================
    # Operaciones estructurales
    # ========================================================================

    def add_field(self, field_type: FieldType, index: Optional[int] = None) -> FormField:
        """
        Agrega un campo nuevo del tipo indicado.

        Args:
            field_type: Tipo de campo
            index: Posición de inserción (al final si es None)

        Returns:
            El campo creado, que queda seleccionado

        Raises:
            CapacityError: Si el formulario ya tiene el máximo de campos
        """
        if self.is_full:
            error = CapacityError(self.settings.max_fields)
            self.message = str(error)
            logger.info("Campo rechazado en '%s': %s", self.definition.id, error)
            raise error

        snapshot = self._snapshot()
        fld = default_field(field_type, self.settings)
        if index is None:
            self.fields.append(fld)
        else:
            self.fields.insert(max(0, min(index, len(self.fields))), fld)
        self.selected_field_id = fld.id
        self.message = ""
        self._commit(snapshot)
        return fld

    def clone_field(self, source: FormField) -> FormField:
        """Copia independiente de un campo con id nuevo y key/etiqueta derivadas."""
        clone = source.model_copy(deep=True)
        clone.id = generate_id()
        clone.key = f"{source.key}{self.settings.copy_key_suffix}"
        clone.label = f"{source.label}{self.settings.copy_label_suffix}"
        return clone

    def move_field(self, from_id: str, to_index: int, is_copy: bool = False) -> Optional[FormField]:
        """
        Mueve (o copia) un campo a otra posición.

        ``to_index`` es la posición de inserción en la lista actual, antes de
        quitar el campo. Al mover hacia abajo se descuenta uno porque al
        quitar el campo los índices posteriores se corren. Soltar el campo
        en su propia posición o justo después no cambia nada.

        Returns:
            El campo movido o la copia creada; None si no hubo cambios
        """
        from_index = self.definition.index_of(from_id)
        if from_index < 0:
            logger.debug("move_field: id inexistente %s", from_id)
            return None
        to_index = max(0, min(to_index, len(self.fields)))

        if is_copy:
            if self.is_full:
                error = CapacityError(self.settings.max_fields)
                self.message = str(error)
                logger.info("Copia rechazada en '%s': %s", self.definition.id, error)
                raise error
            snapshot = self._snapshot()
            clone = self.clone_field(self.fields[from_index])
            self.fields.insert(to_index, clone)
            self.selected_field_id = clone.id
            self._commit(snapshot)
            self._warn_duplicate_key(clone.key)
            return clone

        if to_index in (from_index, from_index + 1):
            return None

        snapshot = self._snapshot()
        fld = self.fields.pop(from_index)
        if from_index < to_index:
            to_index -= 1
        self.fields.insert(to_index, fld)
        self._commit(snapshot)
        return fld

    def duplicate_field(self, field_id: str) -> Optional[FormField]:
        """Copia el campo justo debajo del original."""
        idx = self.definition.index_of(field_id)
        if idx < 0:
            return None
        return self.move_field(field_id, idx + 1, is_copy=True)

    def delete_field(self, field_id: str) -> Optional[FormField]:
        """
        Elimina un campo.

        Para un divider, el llamador debe pedir confirmación antes
        (ver ``requires_confirmation``).

        Returns:
            El campo eliminado, o None si no existía
        """
        idx = self.definition.index_of(field_id)
        if idx < 0:
            logger.debug("delete_field: id inexistente %s", field_id)
            return None
        snapshot = self._snapshot()
        removed = self.fields.pop(idx)
        if self.selected_field_id == field_id:
            self.selected_field_id = None
        self._commit(snapshot)
        return removed

    # ========================================================================
    # Actualización de propiedades
    # ========================================================================

    def update_field(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        """
        Combina ``updates`` sobre el campo (merge superficial).

        Acepta nombres de atributo o claves camelCase. El id no se puede
        cambiar. Si el tipo pasa a select/tags sin opciones, se siembran
        las opciones por defecto.
        """
        fld = self.definition.get_field(field_id)
        if fld is None:
            logger.debug("update_field: id inexistente %s", field_id)
            return None

        changes = _normalize_keys(FormField, updates)
        changes.pop("id", None)
        merged = FormField.model_validate({**dict(fld), **changes})
        if has_options(merged.type) and not merged.options:
            merged.options = list(self.settings.default_options)
            changes["options"] = merged.options
        if all(getattr(fld, name) == getattr(merged, name) for name in changes):
            return fld

        snapshot = self._snapshot()
        for name in changes:
            setattr(fld, name, getattr(merged, name))
        self._commit(snapshot)

        if "key" in changes:
            self._warn_duplicate_key(fld.key)
        if "behavior" in changes:
            self._warn_cycles()
        return fld

    def _update_nested(
        self,
        field_id: str,
        attr: str,
        model: type[BaseModel],
        updates: Mapping[str, Any],
    ) -> Optional[FormField]:
        """Combina ``updates`` en un objeto anidado, creándolo si no existe."""
        fld = self.definition.get_field(field_id)
        if fld is None:
            logger.debug("update %s: id inexistente %s", attr, field_id)
            return None
        current = getattr(fld, attr)
        changes = _normalize_keys(model, updates)
        if not changes:
            return fld
        base = dict(current) if current is not None else {}
        merged = model.model_validate({**base, **changes})
        if current is not None and merged.model_dump() == current.model_dump():
            return fld

        snapshot = self._snapshot()
        setattr(fld, attr, merged)
        self._commit(snapshot)
        return fld

    def update_validation(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        return self._update_nested(field_id, "validation", FieldValidation, updates)

    def update_layout(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        return self._update_nested(field_id, "layout", FieldLayout, updates)

    def update_appearance(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        return self._update_nested(field_id, "appearance", FieldAppearance, updates)

    def update_data_source(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        return self._update_nested(field_id, "data_source", FieldDataSource, updates)

    def update_behavior(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        """Actualiza el comportamiento; avisa si la fórmula crea un ciclo."""
        fld = self._update_nested(field_id, "behavior", FieldBehavior, updates)
        if fld is not None:
            self._warn_cycles()
        return fld

    def update_visibility(self, field_id: str, updates: Mapping[str, Any]) -> Optional[FormField]:
        """Edita la regla de visibilidad (la crea si no existe)."""
        return self._update_nested(field_id, "visibility", VisibilityRule, updates)

    def toggle_visibility_rule(self, field_id: str, enabled: bool) -> Optional[FormField]:
        """
        Activa o desactiva la regla de visibilidad.

        Al activar se instala una regla vacía ``eq``; al desactivar se quita
        la regla por completo y el campo vuelve a estar siempre visible.
        """
        fld = self.definition.get_field(field_id)
        if fld is None:
            return None
        if enabled == (fld.visibility is not None):
            return fld
        snapshot = self._snapshot()
        if enabled:
            fld.visibility = VisibilityRule(target_field_key="", operator=VisibilityOperator.EQ, value="")
        else:
            fld.visibility = None
        self._commit(snapshot)
        return fld

    # ========================================================================
    # Metadatos del formulario
    # ========================================================================

    def rename(self, name: str) -> None:
        if name == self.definition.name:
            return
        snapshot = self._snapshot()
        self.definition.name = name
        self._commit(snapshot)

    def set_description(self, description: str) -> None:
        if description == self.definition.description:
            return
        snapshot = self._snapshot()
        self.definition.description = description
        self._commit(snapshot)

    def set_layout_mode(self, mode: LayoutMode) -> None:
        """Cambia entre formulario simple y wizard."""
        mode = LayoutMode(mode)
        if mode == self.definition.layout_mode:
            return
        snapshot = self._snapshot()
        self.definition.layout_mode = mode
        self._commit(snapshot)

    # ========================================================================
    # Selección y arrastre
    # ========================================================================

    def select_field(self, field_id: Optional[str]) -> Optional[FormField]:
        """Selecciona un campo (None limpia la selección)."""
        if field_id is not None and self.definition.get_field(field_id) is None:
            return None
        self.selected_field_id = field_id
        return self.selected_field

    def begin_library_drag(self, field_type: FieldType) -> DragOperation:
        """Inicia el arrastre de un tipo de la biblioteca (cancela cualquier otro)."""
        self.drag = DragOperation(source=LibrarySource(FieldType(field_type)))
        return self.drag

    def begin_field_drag(self, field_id: str) -> Optional[DragOperation]:
        """Inicia el arrastre de un campo existente (cancela cualquier otro)."""
        if self.definition.get_field(field_id) is None:
            self.drag = None
            return None
        self.drag = DragOperation(source=FieldSource(field_id))
        return self.drag

    def hover(self, index: int, copy_modifier: Optional[bool] = None) -> None:
        """Actualiza el índice candidato y el estado del modificador de copia."""
        if self.drag is None:
            return
        self.drag.drop_index = index
        if copy_modifier is not None:
            self.drag.copy_modifier = copy_modifier

    def cancel_drag(self) -> None:
        self.drag = None

    def drop(self, index: Optional[int] = None, copy_modifier: Optional[bool] = None) -> Optional[FormField]:
        """
        Suelta el arrastre en curso.

        Un tipo de la biblioteca se agrega con ``add_field``; un campo
        existente se mueve con ``move_field``, como copia si el modificador
        estaba presionado al soltar.

        Returns:
            El campo agregado/movido/copiado, o None si no hubo cambios
        """
        op = self.drag
        self.drag = None
        if op is None:
            return None
        if index is None:
            index = op.drop_index if op.drop_index is not None else len(self.fields)
        if copy_modifier is not None:
            op.copy_modifier = copy_modifier

        if isinstance(op.source, LibrarySource):
            return self.add_field(op.source.field_type, index)
        return self.move_field(op.source.field_id, index, is_copy=op.copy_modifier)

    # ========================================================================
    # Historial y guardado
    # ========================================================================

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def _restore(self, definition: Optional[FormDefinition]) -> bool:
        if definition is None:
            return False
        self.definition = definition
        if self.selected_field_id is not None and definition.get_field(self.selected_field_id) is None:
            self.selected_field_id = None
        if self.on_change is not None:
            self.on_change(self.definition)
        return True

    def undo(self) -> bool:
        """Deshace el último cambio."""
        return self._restore(self.history.undo(self._snapshot()))

    def redo(self) -> bool:
        """Rehace el último cambio deshecho."""
        return self._restore(self.history.redo(self._snapshot()))

    def load(self, definition: FormDefinition) -> None:
        """
        Reemplaza el formulario en edición.

        El historial, la selección y el arrastre pertenecen al formulario
        anterior y se descartan.
        """
        self.definition = definition
        self.history.clear()
        self.selected_field_id = None
        self.drag = None
        self.message = ""
        if self.on_change is not None:
            self.on_change(self.definition)

    def save(self) -> FormDefinition:
        """Marca la fecha de modificación y retorna una copia para persistir."""
        self.definition.touch()
        return self._snapshot()

    def publish(self) -> FormDefinition:
        """Incrementa la versión y guarda."""
        self.definition.version += 1
        return self.save()

    def preview(self, record: Optional[dict] = None, roles=None):
        """Sesión de ejecución sobre la definición actual (vista previa en vivo)."""
        from nexform.runtime import FormSession

        return FormSession(self.definition, record=record, roles=roles, settings=self.settings)
