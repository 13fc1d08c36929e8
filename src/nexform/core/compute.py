"""
Recálculo de campos calculados.

Se arma un grafo de dependencias (campo calculado -> keys que referencia
su fórmula), se detectan ciclos y se recalcula en orden topológico:
un campo calculado que depende de otro se evalúa después de él, usando
el valor recién calculado. Los campos que forman parte de un ciclo no se
recalculan.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from nexform.core.formula import evaluate_formula, extract_references
from nexform.exceptions import FormulaError
from nexform.models.field import FormField

logger = logging.getLogger(__name__)


def _computed_by_key(fields: Iterable[FormField]) -> dict[str, FormField]:
    """Campos calculados indexados por key (primera coincidencia)."""
    result: dict[str, FormField] = {}
    for fld in fields:
        if fld.calculation and fld.key not in result:
            result[fld.key] = fld
    return result


def build_dependency_graph(fields: Iterable[FormField]) -> dict[str, list[str]]:
    """
    Grafo de dependencias de los campos calculados.

    Returns:
        {key_calculada: [keys referenciadas]}
    """
    return {
        key: extract_references(fld.calculation)
        for key, fld in _computed_by_key(fields).items()
    }


def find_cycles(fields: Iterable[FormField]) -> list[list[str]]:
    """
    Detecta ciclos entre fórmulas (Tarjan).

    Returns:
        Lista de ciclos; cada ciclo es la lista de keys involucradas.
        Una fórmula que se referencia a sí misma es un ciclo de una key.
    """
    graph = build_dependency_graph(fields)
    index: dict[str, int] = {}
    low: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    cycles: list[list[str]] = []
    counter = 0

    def strongconnect(node: str) -> None:
        nonlocal counter
        index[node] = low[node] = counter
        counter += 1
        stack.append(node)
        on_stack.add(node)

        for dep in graph.get(node, []):
            if dep not in graph:
                continue  # Campo de entrada, no calculado
            if dep not in index:
                strongconnect(dep)
                low[node] = min(low[node], low[dep])
            elif dep in on_stack:
                low[node] = min(low[node], index[dep])

        if low[node] == index[node]:
            component = []
            while True:
                member = stack.pop()
                on_stack.discard(member)
                component.append(member)
                if member == node:
                    break
            if len(component) > 1 or node in graph.get(node, []):
                cycles.append(list(reversed(component)))

    for node in graph:
        if node not in index:
            strongconnect(node)
    return cycles


def computation_order(fields: Iterable[FormField]) -> list[FormField]:
    """Campos calculados en orden de evaluación (sin los que están en ciclos)."""
    fields = list(fields)
    computed = _computed_by_key(fields)
    graph = build_dependency_graph(fields)
    cyclic = {key for cycle in find_cycles(fields) for key in cycle}

    order: list[FormField] = []
    visited: set[str] = set()

    def visit(key: str) -> None:
        if key in visited or key in cyclic or key not in computed:
            return
        visited.add(key)
        for dep in graph[key]:
            visit(dep)
        order.append(computed[key])

    for key in computed:
        visit(key)
    return order


def recompute(
    fields: Iterable[FormField],
    record: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Recalcula todos los campos calculados.

    El registro no se modifica; se retornan los valores que cambiaron
    para que el llamador los escriba de una sola vez. Una fórmula que no
    se puede evaluar se ignora y el campo conserva su valor.

    Args:
        fields: Campos de la definición
        record: Registro actual {key: valor}

    Returns:
        {key: nuevo_valor} solo para los campos cuyo valor cambió
    """
    fields = list(fields)
    known_keys = [f.key for f in fields]
    working = dict(record)
    updates: dict[str, Any] = {}

    for fld in computation_order(fields):
        try:
            value = evaluate_formula(fld.calculation, working, known_keys)
        except FormulaError as e:
            logger.debug("Fórmula de '%s' no evaluable (%s): %s", fld.key, fld.calculation, e)
            continue
        if fld.key not in working or working[fld.key] != value:
            working[fld.key] = value
            updates[fld.key] = value
    return updates


def apply_computed(
    fields: Iterable[FormField],
    record: dict,
    updates: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Recalcula y escribe los cambios en el registro. Retorna los cambios."""
    if updates is None:
        updates = recompute(fields, record)
    record.update(updates)
    return dict(updates)
