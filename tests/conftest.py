"""Configuración de pytest para tests de nexform."""

import pytest

from nexform.builder import FormBuilder
from nexform.config import EngineSettings
from nexform.models import FormDefinition, FormField


def _make_field(field_id: str, key: str, type: str = "text", **kwargs) -> FormField:
    """Campo con id y key fijos para tests."""
    return FormField.model_validate({"id": field_id, "key": key, "type": type, "label": key, **kwargs})


@pytest.fixture
def settings():
    """Configuración por defecto (aislada del singleton global)."""
    return EngineSettings()


@pytest.fixture
def three_fields():
    """Campos f1, f2, f3 en orden."""
    return [
        _make_field("f1", "first"),
        _make_field("f2", "second"),
        _make_field("f3", "third"),
    ]


@pytest.fixture
def builder(three_fields, settings):
    """Editor sobre un formulario con tres campos."""
    definition = FormDefinition(id="form-test", name="Test", fields=three_fields)
    return FormBuilder(definition, settings=settings)


@pytest.fixture
def wizard_definition():
    """Formulario wizard: nombre requerido, divider, edad con mínimo 18."""
    return FormDefinition.model_validate({
        "id": "form-wizard",
        "name": "Registro",
        "layoutMode": "wizard",
        "fields": [
            {"id": "a", "type": "text", "label": "Name", "key": "name", "required": True},
            {"id": "b", "type": "divider", "label": "Details", "key": "div_1"},
            {"id": "c", "type": "number", "label": "Age", "key": "age", "validation": {"min": 18}},
        ],
    })


@pytest.fixture
def order_definition():
    """Formulario con campos calculados encadenados."""
    return FormDefinition.model_validate({
        "id": "form-order",
        "name": "Order",
        "fields": [
            {"id": "p", "type": "number", "label": "Price", "key": "price"},
            {"id": "q", "type": "number", "label": "Qty", "key": "qty"},
            {"id": "t", "type": "number", "label": "Total", "key": "total",
             "behavior": {"calculation": "{{subtotal}} * 1.5", "readOnly": True}},
            {"id": "s", "type": "number", "label": "Subtotal", "key": "subtotal",
             "behavior": {"calculation": "{{price}} * {{qty}}", "readOnly": True}},
        ],
    })
