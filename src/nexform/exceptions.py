"""Excepciones del motor de formularios."""


class NexformError(ValueError):
    """Error base de nexform."""


class CapacityError(NexformError):
    """Se intentó agregar un campo con el formulario lleno."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Form already has the maximum of {limit} fields")


class FormulaError(NexformError):
    """Error al evaluar una fórmula de campo calculado."""


class FormulaSyntaxError(FormulaError):
    """La fórmula no se puede tokenizar o interpretar."""


class FormulaArithmeticError(FormulaError):
    """La fórmula es válida pero su evaluación falla (ej: división por cero)."""
