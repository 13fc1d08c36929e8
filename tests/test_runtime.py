"""
Tests para runtime.py - Sesión de llenado de formularios.
"""

from nexform.models import FormDefinition, FormField
from nexform.runtime import FormSession
from nexform.samples import get_sample


def onboarding_with_rules():
    definition = get_sample("onboarding")
    definition.fields.append(FormField.model_validate({
        "id": "f6", "type": "textarea", "label": "VPN Reason", "key": "vpnReason", "required": True,
        "visibility": {"targetFieldKey": "needsVPN", "operator": "truthy"},
    }))
    return definition


class TestRecord:
    """Tests para el registro de datos."""

    def test_initial_recompute(self, order_definition):
        """Al iniciar se calculan los campos calculados."""
        session = FormSession(order_definition, {"price": 2, "qty": 5})
        assert session.get_value("subtotal") == 10
        assert session.get_value("total") == 15

    def test_set_value_recomputes(self, order_definition):
        """Cada cambio recalcula."""
        session = FormSession(order_definition, {"price": 2, "qty": 5})
        changed = session.set_value("qty", 6)
        assert changed == {"subtotal": 12, "total": 18}
        assert session.record["total"] == 18

    def test_update_many(self, order_definition):
        """Varios valores y un solo recálculo."""
        session = FormSession(order_definition)
        session.update({"price": "3", "qty": "3"})
        assert session.get_value("subtotal") == 9

    def test_on_change(self, order_definition):
        """El callback recibe cada escritura, incluidas las calculadas."""
        seen = []
        session = FormSession(order_definition, {"price": 1, "qty": 1},
                              on_change=lambda k, v: seen.append((k, v)))
        seen.clear()
        session.set_value("price", 4)
        assert seen == [("price", 4), ("subtotal", 4), ("total", 6)]

    def test_input_record_not_mutated(self, order_definition):
        """El registro inicial se copia."""
        record = {"price": 1, "qty": 1}
        FormSession(order_definition, record)
        assert record == {"price": 1, "qty": 1}

    def test_default_values(self):
        """Los valores por defecto completan keys sin valor."""
        definition = FormDefinition.model_validate({"fields": [
            {"type": "number", "key": "qty", "defaultValue": 1},
            {"type": "text", "key": "note", "defaultValue": "n/a"},
        ]})
        session = FormSession(definition, {"note": "dado"})
        assert session.get_value("qty") == 1
        assert session.get_value("note") == "dado"

    def test_hidden_value_preserved(self):
        """Ocultar un campo no limpia su valor."""
        session = FormSession(onboarding_with_rules(), {"needsVPN": True, "vpnReason": "remoto"})
        session.set_value("needsVPN", False)
        assert session.get_value("vpnReason") == "remoto"
        assert "vpnReason" not in [f.key for f in session.visible_fields()]

    def test_huge_number_does_not_break_session(self):
        """Un número enorme tecleado no interrumpe la sesión."""
        definition = FormDefinition.model_validate({"fields": [
            {"type": "number", "key": "a"},
            {"type": "number", "key": "half", "behavior": {"calculation": "{{a}} / 2"}},
        ]})
        session = FormSession(definition, {"a": 4})
        assert session.get_value("half") == 2
        assert session.set_value("a", "9" * 400) == {}
        assert session.get_value("a") == "9" * 400
        assert session.get_value("half") == 2


class TestSteps:
    """Tests para la navegación del wizard."""

    def test_wizard_steps(self, wizard_definition):
        """Dos pasos separados por el divider."""
        session = FormSession(wizard_definition)
        assert session.step_count == 2
        assert [f.key for f in session.visible_fields()] == ["name"]
        session.next()
        assert [f.key for f in session.visible_fields()] == ["age"]
        assert session.is_last_step

    def test_navigation_does_not_validate(self, wizard_definition):
        """Avanzar no exige un paso válido."""
        session = FormSession(wizard_definition)
        assert session.step_errors() == {"name": "This field is required."}
        assert session.next() == 1

    def test_back_and_go_to(self, wizard_definition):
        """Retroceder y saltar."""
        session = FormSession(wizard_definition)
        session.go_to(1)
        assert session.back() == 0
        assert session.is_first_step

    def test_replan(self, wizard_definition):
        """Recalcular pasos tras editar la definición."""
        session = FormSession(wizard_definition)
        wizard_definition.layout_mode = "single"
        session.replan()
        assert session.step_count == 1


class TestValidationAndRender:
    """Tests para errores, envío y vista."""

    def test_submit(self, wizard_definition):
        """El envío reporta todos los errores."""
        session = FormSession(wizard_definition, {"age": 15})
        assert session.submit() == {
            "name": "This field is required.",
            "age": "Value must be at least 18.",
        }
        session.update({"name": "Ana", "age": 20})
        assert session.submit() == {}

    def test_step_errors_by_index(self, wizard_definition):
        """Errores de un paso concreto."""
        session = FormSession(wizard_definition, {"age": 15})
        assert session.step_errors(1) == {"age": "Value must be at least 18."}
        assert session.step_errors(9) == {}

    def test_conditional_required(self):
        """Un requerido oculto no bloquea el envío."""
        session = FormSession(onboarding_with_rules(), {
            "employeeName": "Ana", "dept": "HR", "accessLevel": "Standard",
        })
        assert session.submit() == {}
        session.set_value("needsVPN", True)
        assert session.submit() == {"vpnReason": "This field is required."}

    def test_roles(self):
        """Campos ocultos o de solo lectura según el rol."""
        definition = FormDefinition.model_validate({"fields": [
            {"type": "text", "key": "name", "label": "Name"},
            {"type": "number", "key": "salary", "label": "Salary", "required": True, "permissions": [
                {"roleId": "employee", "access": "hidden"},
                {"roleId": "manager", "access": "read_only"},
            ]},
        ]})
        employee = FormSession(definition, roles=["employee"])
        assert [f.key for f in employee.visible_fields()] == ["name"]
        assert employee.submit() == {}

        manager = FormSession(definition, roles=["manager"])
        views = {vm.key: vm for vm in manager.render()}
        assert views["salary"].read_only
        assert not views["name"].read_only

    def test_render(self, order_definition):
        """Modelos de vista con los valores del registro."""
        session = FormSession(order_definition, {"price": 2, "qty": 3})
        views = session.render()
        assert [vm.key for vm in views] == ["price", "qty", "total", "subtotal"]
        assert views[2].value == 9
        assert views[2].read_only
