"""
Fórmulas de campos calculados.

Una fórmula es aritmética simple con referencias a otros campos:
``"{{price}} * {{qty}}"``. Las referencias se sustituyen por el valor
numérico del registro y la expresión resultante se evalúa con un parser
propio que solo admite números, ``+ - * /`` y paréntesis.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from nexform.core.coercion import normalize_number, to_number, to_text
from nexform.exceptions import FormulaArithmeticError, FormulaSyntaxError

PLACEHOLDER_RE = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")

_NUMBER_RE = re.compile(r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_OPERATORS = "+-*/()"


@dataclass(frozen=True)
class Token:
    """Token de la expresión."""
    kind: str  # "num" u "op"
    value: Any
    pos: int


def extract_references(formula: str) -> list[str]:
    """Keys referenciadas por la fórmula, sin repetir y en orden de aparición."""
    refs: list[str] = []
    for match in PLACEHOLDER_RE.finditer(formula or ""):
        key = match.group(1)
        if key not in refs:
            refs.append(key)
    return refs


def _format_operand(value: Any) -> str:
    num = to_number(value)
    try:
        text = to_text(float(num)) if isinstance(num, float) else str(num)
    except ValueError as e:
        # Enteros con más dígitos de los que str() admite
        raise FormulaArithmeticError(f"Operando fuera de rango: {e}") from None
    # Negativos entre paréntesis para no chocar con el operador previo
    return f"({text})" if num < 0 else text


def substitute(
    formula: str,
    record: Mapping[str, Any],
    known_keys: Optional[Iterable[str]] = None,
) -> str:
    """
    Reemplaza las referencias ``{{key}}`` por valores numéricos.

    Solo se sustituyen keys presentes en el registro o en ``known_keys``;
    los valores ausentes o no numéricos valen 0. Las referencias a keys
    desconocidas quedan sin sustituir.
    """
    known = set(record.keys())
    if known_keys is not None:
        known.update(known_keys)

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in known:
            return match.group(0)
        return _format_operand(record.get(key))

    return PLACEHOLDER_RE.sub(_replace, formula)


def tokenize(expression: str) -> list[Token]:
    """Divide la expresión en tokens."""
    tokens: list[Token] = []
    pos = 0
    n = len(expression)
    while pos < n:
        ch = expression[pos]
        if ch.isspace():
            pos += 1
            continue
        if ch in _OPERATORS:
            tokens.append(Token("op", ch, pos))
            pos += 1
            continue
        match = _NUMBER_RE.match(expression, pos)
        if match:
            text = match.group(0)
            try:
                value = float(text) if any(c in text for c in ".eE") else int(text)
            except ValueError:
                raise FormulaSyntaxError(f"Número fuera de rango en posición {pos}") from None
            tokens.append(Token("num", value, pos))
            pos = match.end()
            continue
        if expression.startswith("{{", pos):
            raise FormulaSyntaxError(f"Referencia sin resolver en posición {pos}: {expression[pos:]}")
        raise FormulaSyntaxError(f"Carácter inesperado '{ch}' en posición {pos}")
    return tokens


class _Parser:
    """Parser descendente recursivo que evalúa al recorrer."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise FormulaSyntaxError("Expresión incompleta")
        self.pos += 1
        return tok

    def parse(self):
        if not self.tokens:
            raise FormulaSyntaxError("Expresión vacía")
        value = self.expr()
        tok = self.peek()
        if tok is not None:
            raise FormulaSyntaxError(f"Token inesperado '{tok.value}' en posición {tok.pos}")
        return value

    def expr(self):
        value = self.term()
        while (tok := self.peek()) is not None and tok.kind == "op" and tok.value in "+-":
            self.take()
            right = self.term()
            value = value + right if tok.value == "+" else value - right
        return value

    def term(self):
        value = self.unary()
        while (tok := self.peek()) is not None and tok.kind == "op" and tok.value in "*/":
            self.take()
            right = self.unary()
            if tok.value == "*":
                value = value * right
            else:
                if right == 0:
                    raise FormulaArithmeticError("División por cero")
                value = value / right
        return value

    def unary(self):
        tok = self.peek()
        if tok is not None and tok.kind == "op" and tok.value in "+-":
            self.take()
            operand = self.unary()
            return -operand if tok.value == "-" else operand
        return self.primary()

    def primary(self):
        tok = self.take()
        if tok.kind == "num":
            return tok.value
        if tok.value == "(":
            value = self.expr()
            closing = self.take()
            if closing.value != ")":
                raise FormulaSyntaxError(f"Se esperaba ')' en posición {closing.pos}")
            return value
        raise FormulaSyntaxError(f"Token inesperado '{tok.value}' en posición {tok.pos}")


def evaluate(expression: str):
    """
    Evalúa una expresión aritmética ya sustituida.

    Raises:
        FormulaSyntaxError: Si la expresión no es válida
        FormulaArithmeticError: Si la evaluación falla o no es finita
    """
    try:
        value = _Parser(tokenize(expression)).parse()
    except OverflowError as e:
        raise FormulaArithmeticError(f"Resultado fuera de rango: {e}") from None
    if isinstance(value, float) and not math.isfinite(value):
        raise FormulaArithmeticError(f"Resultado no finito: {value}")
    return normalize_number(value)


def evaluate_formula(
    formula: str,
    record: Mapping[str, Any],
    known_keys: Optional[Iterable[str]] = None,
):
    """Sustituye referencias y evalúa la fórmula."""
    return evaluate(substitute(formula, record, known_keys))
