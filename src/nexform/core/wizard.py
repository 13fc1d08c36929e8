"""
Planificación de pasos del wizard.

En modo wizard los campos ``divider`` marcan el límite entre pasos y no
aparecen en ningún paso. Los pasos sin campos se descartan; si no queda
ninguno, el plan es un único paso con todos los campos.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from nexform.config import FieldType, LayoutMode
from nexform.models.field import FormField


@dataclass
class WizardStep:
    """Un paso del wizard."""
    index: int
    fields: list[FormField] = field(default_factory=list)
    title: Optional[str] = None  # Etiqueta del divider que abre el paso

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.fields]


def plan_steps(fields: Iterable[FormField], layout_mode: LayoutMode = LayoutMode.SINGLE) -> list[WizardStep]:
    """
    Agrupa los campos en pasos.

    Args:
        fields: Campos en orden
        layout_mode: "single" o "wizard"

    Returns:
        Lista de pasos (al menos uno)
    """
    fields = list(fields)
    single = [WizardStep(index=0, fields=fields)]
    if LayoutMode(layout_mode) != LayoutMode.WIZARD:
        return single

    buckets: list[tuple[Optional[str], list[FormField]]] = [(None, [])]
    for fld in fields:
        if fld.type == FieldType.DIVIDER:
            buckets.append((fld.label or None, []))
        else:
            buckets[-1][1].append(fld)

    steps = [
        WizardStep(index=i, fields=bucket, title=title)
        for i, (title, bucket) in enumerate(b for b in buckets if b[1])
    ]
    return steps or single


class WizardNavigator:
    """
    Navegación entre pasos.

    ``next`` y ``back`` se limitan al primer/último paso y no validan:
    la validación del paso la invoca el llamador.
    """

    def __init__(self, steps: list[WizardStep]):
        self.steps = steps or [WizardStep(index=0)]
        self.current_step = 0

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> WizardStep:
        """Paso actual."""
        return self.steps[self.current_step]

    @property
    def is_first(self) -> bool:
        return self.current_step == 0

    @property
    def is_last(self) -> bool:
        return self.current_step == self.step_count - 1

    @property
    def progress(self) -> float:
        """Fracción completada (1.0 en el último paso)."""
        return (self.current_step + 1) / self.step_count

    def next(self) -> int:
        """Avanza un paso (sin pasar del último)."""
        self.current_step = min(self.current_step + 1, self.step_count - 1)
        return self.current_step

    def back(self) -> int:
        """Retrocede un paso (sin pasar del primero)."""
        self.current_step = max(self.current_step - 1, 0)
        return self.current_step

    def go_to(self, index: int) -> int:
        """Salta a un paso (se limita al rango válido)."""
        self.current_step = max(0, min(index, self.step_count - 1))
        return self.current_step

    def replan(self, steps: list[WizardStep]) -> None:
        """Reemplaza los pasos conservando el índice si sigue siendo válido."""
        self.steps = steps or [WizardStep(index=0)]
        self.current_step = min(self.current_step, self.step_count - 1)
