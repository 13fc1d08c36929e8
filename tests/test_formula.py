"""
Tests para core/formula.py - Fórmulas de campos calculados.
"""

import pytest

from nexform.core.formula import (
    evaluate,
    evaluate_formula,
    extract_references,
    substitute,
    tokenize,
)
from nexform.exceptions import FormulaArithmeticError, FormulaError, FormulaSyntaxError


class TestReferences:
    """Tests para referencias {{key}}."""

    def test_extract(self):
        """Keys en orden de aparición, sin repetir."""
        assert extract_references("{{a}} + {{ b }} * {{a}}") == ["a", "b"]

    def test_extract_empty(self):
        """Sin fórmula no hay referencias."""
        assert extract_references("") == []
        assert extract_references(None) == []

    def test_substitute(self):
        """Sustituye valores numéricos."""
        assert substitute("{{price}} * {{qty}}", {"price": "10", "qty": 3}) == "10 * 3"

    def test_substitute_non_numeric(self):
        """Valores no numéricos valen 0."""
        assert substitute("{{a}} + 1", {"a": "abc"}) == "0 + 1"

    def test_substitute_negative(self):
        """Negativos entre paréntesis."""
        assert substitute("5 - {{a}}", {"a": -2}) == "5 - (-2)"

    def test_unknown_key_left_in_place(self):
        """Keys desconocidas quedan sin sustituir."""
        assert substitute("{{x}} + 1", {}) == "{{x}} + 1"

    def test_known_key_without_value(self):
        """Keys del formulario sin valor valen 0."""
        assert substitute("{{x}} + 1", {}, known_keys=["x"]) == "0 + 1"


class TestEvaluate:
    """Tests para el evaluador aritmético."""

    @pytest.mark.parametrize("expression,expected", [
        ("1 + 2", 3),
        ("2 + 3 * 4", 14),
        ("(2 + 3) * 4", 20),
        ("10 - 4 - 3", 3),
        ("12 / 4 / 3", 1),
        ("-2 * 3", -6),
        ("5 - (-2)", 7),
        ("--3", 3),
        ("7 / 2", 3.5),
        ("1.5 * 2", 3),
        ("1e3 + 1", 1001),
    ])
    def test_arithmetic(self, expression, expected):
        """Precedencia, asociatividad y unarios."""
        assert evaluate(expression) == expected

    def test_integral_result_is_int(self):
        """Resultados enteros sin decimales."""
        assert isinstance(evaluate("1.5 * 2"), int)

    def test_float_result(self):
        """Resultados con decimales."""
        assert evaluate("0.1 + 0.2") == pytest.approx(0.3)

    def test_division_by_zero(self):
        """División por cero."""
        with pytest.raises(FormulaArithmeticError):
            evaluate("1 / 0")

    def test_literal_too_long(self):
        """Un literal con demasiados dígitos es error de fórmula."""
        with pytest.raises(FormulaError):
            evaluate("1" * 5000)

    def test_overflow_to_float(self):
        """Un entero enorme que no cabe en float es error aritmético."""
        with pytest.raises(FormulaArithmeticError):
            evaluate(f"{10 ** 400} / 2")
        with pytest.raises(FormulaArithmeticError):
            evaluate(f"{10 ** 400} + 0.5")

    @pytest.mark.parametrize("expression", ["", "2 +", "(1 + 2", "1 2", "abc", "1 + {{x}}", ")"])
    def test_syntax_errors(self, expression):
        """Expresiones inválidas."""
        with pytest.raises(FormulaSyntaxError):
            evaluate(expression)

    def test_errors_share_base(self):
        """Los errores de fórmula son ValueError."""
        assert issubclass(FormulaSyntaxError, FormulaError)
        assert issubclass(FormulaError, ValueError)

    def test_tokenize(self):
        """Tokens con posición."""
        tokens = tokenize("2*(3")[:3]
        assert [t.value for t in tokens] == [2, "*", "("]


class TestEvaluateFormula:
    """Tests para sustituir y evaluar."""

    def test_price_times_qty(self):
        """Texto numérico y número se multiplican."""
        assert evaluate_formula("{{price}} * {{qty}}", {"price": "10", "qty": 3}) == 30

    def test_missing_values(self):
        """Valores ausentes valen 0."""
        assert evaluate_formula("{{a}} + {{b}}", {"a": 2}, known_keys=["a", "b"]) == 2

    def test_unresolved_reference(self):
        """Una key desconocida hace fallar la fórmula."""
        with pytest.raises(FormulaSyntaxError):
            evaluate_formula("{{ghost}} + 1", {})

    def test_huge_operand(self):
        """Un valor del registro fuera de rango hace fallar la fórmula."""
        with pytest.raises(FormulaArithmeticError):
            evaluate_formula("{{a}} / 2", {"a": 10 ** 400})
