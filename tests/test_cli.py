"""
Tests para cli/ - Comandos inspect, plan, validate y compute.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from nexform.cli import app
from nexform.cli.validators import validate_step_number


runner = CliRunner()


@pytest.fixture
def wizard_file(wizard_definition, tmp_path):
    """Formulario wizard guardado como JSON."""
    return str(wizard_definition.to_file(tmp_path / "wizard.json"))


@pytest.fixture
def order_file(order_definition, tmp_path):
    """Formulario con campos calculados guardado como JSON."""
    return str(order_definition.to_file(tmp_path / "order.json"))


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestInspect:
    """Tests para comando inspect."""

    def test_sample(self):
        """Inspecciona un ejemplo incluido."""
        result = runner.invoke(app, ["inspect", "--sample", "expense"])
        assert result.exit_code == 0
        assert "Expense Reimbursement" in result.output
        assert "Sin problemas de diseño" in result.output

    def test_file_with_problems(self, tmp_path):
        """Reporta keys repetidas y ciclos."""
        path = write_json(tmp_path, "bad.json", {"name": "Bad", "fields": [
            {"id": "a", "type": "number", "key": "x", "behavior": {"calculation": "{{y}} + 1"}},
            {"id": "b", "type": "number", "key": "y", "behavior": {"calculation": "{{x}} + 1"}},
            {"id": "c", "type": "text", "key": "x"},
        ]})
        result = runner.invoke(app, ["inspect", path])
        assert result.exit_code == 0
        assert "Key repetida 'x'" in result.output
        assert "Ciclo entre fórmulas" in result.output

    def test_no_input(self):
        """Sin archivo ni ejemplo."""
        result = runner.invoke(app, ["inspect"])
        assert result.exit_code == 1
        assert "--sample" in result.output

    def test_missing_file(self, tmp_path):
        """Archivo inexistente."""
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "no encontrado" in result.output

    def test_unknown_sample(self):
        """Ejemplo desconocido."""
        result = runner.invoke(app, ["inspect", "--sample", "payroll"])
        assert result.exit_code == 1

    def test_invalid_definition(self, tmp_path):
        """JSON que no es un formulario válido."""
        path = write_json(tmp_path, "broken.json", {"fields": [{"type": "hologram"}]})
        result = runner.invoke(app, ["inspect", path])
        assert result.exit_code == 1
        assert "Formulario inválido" in result.output


class TestPlan:
    """Tests para comando plan."""

    def test_wizard(self, wizard_file):
        """Muestra un paso por sección."""
        result = runner.invoke(app, ["plan", wizard_file])
        assert result.exit_code == 0
        assert "Paso 1 de 2" in result.output
        assert "Paso 2 de 2" in result.output
        assert "* Name (name) [text]" in result.output
        assert "Age (age) [number]" in result.output

    def test_single(self):
        """Formulario simple: un solo paso."""
        result = runner.invoke(app, ["plan", "--sample", "onboarding"])
        assert result.exit_code == 0
        assert "Paso 1 de 1" in result.output


class TestValidate:
    """Tests para comando validate."""

    def test_errors(self, wizard_file, tmp_path):
        """Registro con errores termina con código 1."""
        record = write_json(tmp_path, "data.json", {"age": 15})
        result = runner.invoke(app, ["validate", wizard_file, record])
        assert result.exit_code == 1
        assert "formulario completo" in result.output
        assert "name" in result.output
        assert "age" in result.output

    def test_valid(self, wizard_file, tmp_path):
        """Registro válido."""
        record = write_json(tmp_path, "data.json", {"name": "Ana", "age": 30})
        result = runner.invoke(app, ["validate", wizard_file, record])
        assert result.exit_code == 0
        assert "Sin errores de validación" in result.output

    def test_single_step(self, wizard_file, tmp_path):
        """Solo el paso indicado."""
        record = write_json(tmp_path, "data.json", {"name": "Ana", "age": 15})
        result = runner.invoke(app, ["validate", wizard_file, record, "--step", "1"])
        assert result.exit_code == 0
        assert "paso 1 de 2" in result.output

    def test_step_out_of_range(self, wizard_file):
        """Paso inexistente."""
        result = runner.invoke(app, ["validate", wizard_file, "--step", "3"])
        assert result.exit_code == 1
        assert "Paso fuera de rango" in result.output

    def test_record_not_object(self, wizard_file, tmp_path):
        """El registro debe ser un objeto JSON."""
        record = write_json(tmp_path, "data.json", [1, 2])
        result = runner.invoke(app, ["validate", wizard_file, record])
        assert result.exit_code == 1
        assert "objeto JSON" in result.output

    def test_record_bad_json(self, wizard_file, tmp_path):
        """JSON mal formado."""
        path = tmp_path / "data.json"
        path.write_text("{nope", encoding="utf-8")
        result = runner.invoke(app, ["validate", wizard_file, str(path)])
        assert result.exit_code == 1
        assert "JSON inválido" in result.output


class TestCompute:
    """Tests para comando compute."""

    def test_json_output(self, order_file, tmp_path):
        """Imprime el registro completo."""
        record = write_json(tmp_path, "data.json", {"price": "10", "qty": 3})
        result = runner.invoke(app, ["compute", order_file, record, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {"price": "10", "qty": 3, "subtotal": 30, "total": 45}

    def test_table_output(self, order_file, tmp_path):
        """Muestra los campos que cambiaron."""
        record = write_json(tmp_path, "data.json", {"price": 2, "qty": 2})
        result = runner.invoke(app, ["compute", order_file, record])
        assert result.exit_code == 0
        assert "Valores calculados" in result.output
        assert "subtotal" in result.output

    def test_no_changes(self, order_file, tmp_path):
        """Registro ya calculado."""
        record = write_json(tmp_path, "data.json", {"price": 2, "qty": 2, "subtotal": 4, "total": 6})
        result = runner.invoke(app, ["compute", order_file, record])
        assert result.exit_code == 0
        assert "Sin cambios" in result.output

    def test_default_feeds_formula(self, tmp_path):
        """compute usa los valores por defecto igual que validate."""
        form = write_json(tmp_path, "defaults.json", {"fields": [
            {"id": "q", "type": "number", "key": "qty", "defaultValue": 2},
            {"id": "d", "type": "number", "key": "double", "behavior": {"calculation": "{{qty}} * 2"}},
        ]})
        record = write_json(tmp_path, "data.json", {})
        result = runner.invoke(app, ["compute", form, record, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"qty": 2, "double": 4}

        result = runner.invoke(app, ["compute", form, record])
        assert "qty" in result.output
        assert "double" in result.output

    def test_cycle_reported(self, tmp_path):
        """Los ciclos se informan y no se recalculan."""
        form = write_json(tmp_path, "cycle.json", {"fields": [
            {"id": "a", "type": "number", "key": "a", "behavior": {"calculation": "{{b}} + 1"}},
            {"id": "b", "type": "number", "key": "b", "behavior": {"calculation": "{{a}} + 1"}},
        ]})
        result = runner.invoke(app, ["compute", form])
        assert result.exit_code == 0
        assert "Ciclo entre fórmulas: a -> b" in result.output
        assert "NOTA" in result.output


class TestOptions:
    """Tests para opciones globales."""

    def test_theme(self):
        """Tema alternativo."""
        result = runner.invoke(app, ["--theme", "minimal", "plan", "--sample", "expense"])
        assert result.exit_code == 0
        runner.invoke(app, ["--theme", "default", "plan", "--sample", "expense"])

    def test_unknown_theme(self):
        """Tema desconocido es un error de uso."""
        result = runner.invoke(app, ["--theme", "neon", "plan", "--sample", "expense"])
        assert result.exit_code == 2

    def test_verbose(self):
        """Modo detallado."""
        root = logging.getLogger()
        saved = (root.level, root.handlers[:])
        result = runner.invoke(app, ["--verbose", "plan", "--sample", "expense"])
        root.setLevel(saved[0])
        root.handlers[:] = saved[1]
        assert result.exit_code == 0


class TestValidators:
    """Tests para validación de argumentos."""

    def test_step_number(self):
        """Rango de pasos sin terminar el programa."""
        assert validate_step_number(1, 2, exit_on_error=False)
        assert not validate_step_number(0, 2, exit_on_error=False)
