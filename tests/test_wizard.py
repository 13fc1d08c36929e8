"""
Tests para core/wizard.py - Pasos del wizard.
"""

from nexform.config import LayoutMode
from nexform.core.wizard import WizardNavigator, plan_steps
from nexform.models import FormField


def fld(key, type="text", label=None):
    return FormField.model_validate({"key": key, "type": type, "label": label or key})


class TestPlanSteps:
    """Tests para la división en pasos."""

    def test_divider_splits_steps(self, wizard_definition):
        """El divider separa los pasos y no aparece en ninguno."""
        steps = plan_steps(wizard_definition.fields, wizard_definition.layout_mode)
        assert [s.keys for s in steps] == [["name"], ["age"]]
        assert [s.index for s in steps] == [0, 1]

    def test_step_titles(self, wizard_definition):
        """El título es la etiqueta del divider que abre el paso."""
        steps = plan_steps(wizard_definition.fields, "wizard")
        assert steps[0].title is None
        assert steps[1].title == "Details"

    def test_single_mode(self, wizard_definition):
        """En modo simple hay un único paso con todos los campos."""
        steps = plan_steps(wizard_definition.fields, LayoutMode.SINGLE)
        assert len(steps) == 1
        assert steps[0].keys == ["name", "div_1", "age"]

    def test_empty_steps_dropped(self):
        """Dividers consecutivos o en los bordes no generan pasos vacíos."""
        fields = [fld("d1", "divider"), fld("a"), fld("d2", "divider"), fld("d3", "divider", "Extra"),
                  fld("b"), fld("d4", "divider")]
        steps = plan_steps(fields, "wizard")
        assert [s.keys for s in steps] == [["a"], ["b"]]
        assert steps[1].title == "Extra"
        assert steps[1].index == 1

    def test_only_dividers_fallback(self):
        """Sin campos con valor el plan es un único paso."""
        fields = [fld("d1", "divider"), fld("d2", "divider")]
        steps = plan_steps(fields, "wizard")
        assert len(steps) == 1
        assert steps[0].keys == ["d1", "d2"]

    def test_empty_form(self):
        """Formulario vacío."""
        steps = plan_steps([], "wizard")
        assert len(steps) == 1
        assert steps[0].fields == []


class TestWizardNavigator:
    """Tests para la navegación entre pasos."""

    def make(self, n):
        fields = []
        for i in range(n):
            if i:
                fields.append(fld(f"div{i}", "divider"))
            fields.append(fld(f"k{i}"))
        return WizardNavigator(plan_steps(fields, "wizard"))

    def test_next_and_back(self):
        """Avanza y retrocede."""
        nav = self.make(3)
        assert nav.is_first
        assert nav.next() == 1
        assert nav.next() == 2
        assert nav.is_last
        assert nav.back() == 1

    def test_clamped(self):
        """No pasa de los extremos."""
        nav = self.make(2)
        nav.back()
        assert nav.current_step == 0
        nav.next()
        nav.next()
        assert nav.current_step == 1

    def test_go_to(self):
        """Saltos limitados al rango."""
        nav = self.make(3)
        assert nav.go_to(2) == 2
        assert nav.go_to(10) == 2
        assert nav.go_to(-1) == 0

    def test_progress(self):
        """Fracción completada."""
        nav = self.make(4)
        assert nav.progress == 0.25
        nav.go_to(3)
        assert nav.progress == 1.0

    def test_replan_keeps_valid_index(self):
        """Al replanificar se conserva el paso si sigue existiendo."""
        nav = self.make(3)
        nav.go_to(2)
        nav.replan(self.make(2).steps)
        assert nav.current_step == 1
        assert nav.current.keys == ["k1"]
