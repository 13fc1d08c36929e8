"""
Historial de deshacer/rehacer del editor.

Guarda copias completas de la definición; con el tope de 50 campos las
copias son baratas. Al superar el límite se descarta la más antigua.
"""

from typing import Optional

from nexform.models.definition import FormDefinition


class History:
    """Pilas de estados pasados y futuros."""

    def __init__(self, limit: int = 20):
        self.limit = limit
        self.past: list[FormDefinition] = []
        self.future: list[FormDefinition] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def record(self, snapshot: FormDefinition) -> None:
        """Registra el estado previo a un cambio y descarta el futuro."""
        if self.limit <= 0:
            return
        self.past.append(snapshot)
        if len(self.past) > self.limit:
            self.past.pop(0)
        self.future.clear()

    def undo(self, present: FormDefinition) -> Optional[FormDefinition]:
        """Retorna el estado anterior (o None si no hay)."""
        if not self.past:
            return None
        self.future.insert(0, present)
        return self.past.pop()

    def redo(self, present: FormDefinition) -> Optional[FormDefinition]:
        """Retorna el estado siguiente (o None si no hay)."""
        if not self.future:
            return None
        self.past.append(present)
        return self.future.pop(0)

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()
