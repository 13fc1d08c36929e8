"""
Conversiones de valores del registro de datos.

El registro viene de la capa de presentación y mezcla strings, números,
booleanos y listas. Las reglas comparan con la semántica de coerción
del navegador: ``String(x)``, ``Number(x) || 0`` y truthiness.
"""

import math
from typing import Any

_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def to_text(value: Any) -> str:
    """
    Convierte un valor a string para comparaciones.

    None -> "", booleanos -> "true"/"false", floats enteros sin ".0",
    listas unidas con coma.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    return str(value)


def parse_number(value: Any):
    """
    Interpreta un valor como número.

    Returns:
        int/float, o None si el valor no es numérico
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        if text in _INFINITY:
            return _INFINITY[text]
        if any(c.isalpha() for c in text.lower().replace("e", "")):
            # "inf", "nan" y similares no son números para el navegador
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            num = float(text)
        except ValueError:
            return None
        return None if math.isnan(num) else num
    return None


def to_number(value: Any):
    """Coerción numérica para fórmulas: no numérico o ausente -> 0."""
    num = parse_number(value)
    return 0 if num is None else num


def is_truthy(value: Any) -> bool:
    """Truthiness estilo navegador: listas y dicts vacíos son verdaderos."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def is_empty(value: Any) -> bool:
    """True si el valor cuenta como vacío para ``required``."""
    return value is None or value == ""


def normalize_number(value):
    """Convierte floats enteros a int (30.0 -> 30)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
