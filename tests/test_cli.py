"""Integration tests for the command line interface.

Each test runs ``python -m payment_templates`` in a subprocess, the same way
the commands are used from scripts.
"""

import json
import os
import subprocess
import sys

from conftest import PROJECT_ROOT, TUKASH_BASE_DATA

CLI_CMD = [sys.executable, "-m", "payment_templates"]


def run_cli(*args, input=None, env=None):
    """Run the CLI. Returns (returncode, stdout, stderr)."""
    result = subprocess.run(
        CLI_CMD + list(args),
        input=input,
        capture_output=True,
        text=True,
        cwd=str(PROJECT_ROOT),
        timeout=30,
        encoding="utf-8",
        env={**os.environ, "COLUMNS": "200", "PYTHONIOENCODING": "utf-8", **(env or {})},
    )
    return result.returncode, result.stdout, result.stderr


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


class TestTemplatesCommand:

    def test_lists_builtins(self):
        code, out, _ = run_cli("templates")
        assert code == 0
        assert "tarjetas-tukash" in out
        assert "pago-servicios-internos" in out

    def test_templates_dir_from_environment(self, tmp_path):
        write_json(tmp_path / "extra.json", {
            "id": "plantilla-extra",
            "nombre": "PLANTILLA EXTRA",
            "secciones": [{"id": "s", "titulo": "S", "campos": [
                {"id": "a", "tipo": "texto", "etiqueta": "A"},
            ]}],
        })
        code, out, _ = run_cli("templates", env={"TEMPLATES_DIR": str(tmp_path)})
        assert code == 0
        assert "plantilla-extra" in out


class TestTemplateCommand:

    def test_fields(self):
        code, out, _ = run_cli("template", "tarjetas-tukash", "--fields")
        assert code == 0
        assert "SOLICITUD DE PAGO TARJETAS TUKASH" in out
        assert "numero_tarjeta" in out

    def test_unknown(self):
        code, out, _ = run_cli("template", "no-existe")
        assert code == 1
        assert "Plantilla no encontrada: no-existe" in out


class TestValidateCommand:

    def test_valid_data(self, tmp_path):
        data_file = write_json(tmp_path / "datos.json", TUKASH_BASE_DATA)
        code, out, _ = run_cli("validate", "tarjetas-tukash", data_file, "--json")
        assert code == 0
        result = json.loads(out)
        assert result["valid"] is True
        assert result["errores"] == {}
        assert result["campos_visibles"][0] == "asunto"
        assert "tipo_tarjeta" not in result["campos_visibles"]

    def test_invalid_data(self, tmp_path):
        data_file = write_json(tmp_path / "datos.json", {**TUKASH_BASE_DATA, "tipo_cuenta_destino": "Tarjeta"})
        code, out, _ = run_cli("validate", "tarjetas-tukash", data_file, "--json")
        assert code == 1
        result = json.loads(out)
        assert result["valid"] is False
        assert result["errores"]["tipo_tarjeta"] == "Tipo de Tarjeta es requerido"

    def test_accepts_submission_payload(self, tmp_path):
        data_file = write_json(tmp_path / "payload.json", {
            "plantilla_id": "tarjetas-tukash",
            "datos_formulario": TUKASH_BASE_DATA,
        })
        code, out, _ = run_cli("validate", "tarjetas-tukash", data_file)
        assert code == 0
        assert "Datos válidos" in out

    def test_table_output_lists_errors(self, tmp_path):
        data_file = write_json(tmp_path / "datos.json", {})
        code, out, _ = run_cli("validate", "pago-servicios-internos", data_file)
        assert code == 1
        assert "descripcion_pago" in out

    def test_unknown_template(self, tmp_path):
        data_file = write_json(tmp_path / "datos.json", {})
        code, out, _ = run_cli("validate", "no-existe", data_file, "--json")
        assert code == 1
        assert json.loads(out) == {"error": "Plantilla no encontrada: no-existe"}


class TestDetectCommand:

    def test_detects_and_normalizes(self, tmp_path):
        request_file = write_json(tmp_path / "solicitud.json", {
            "id_solicitud": 15,
            "tipo_pago_descripcion": "Plantilla: tukash",
            "plantilla_datos": json.dumps({"beneficiario": "Juan", "monto": "250"}),
        })
        code, out, _ = run_cli("detect", request_file, "--json")
        assert code == 0
        result = json.loads(out)
        assert result["template_id"] == "tarjetas-tukash"
        assert result["datos"]["beneficiario_tarjeta"] == "Juan"
        assert result["datos"]["monto_total_tukash"] == "250"

    def test_table_uses_labels(self, tmp_path):
        request_file = write_json(tmp_path / "solicitud.json", {
            "plantilla_datos": {"templateType": "regresos-efectivo", "persona_recibe": "Ana", "cuenta": "123"},
        })
        code, out, _ = run_cli("detect", request_file)
        assert code == 0
        assert "Persona que Recibe" in out
        assert "123" not in out

    def test_plain_request(self, tmp_path):
        request_file = write_json(tmp_path / "solicitud.json", {"concepto": "Pago a proveedor"})
        code, out, _ = run_cli("detect", request_file, "--json")
        assert code == 0
        assert json.loads(out)["template_id"] is None


class TestFillCommand:

    def test_fill_prints_payload(self):
        answers = "\n".join([
            "Servicios de TI",
            "Finanzas",
            "Soporte mensual de la plataforma de nomina",
            "15000",
            "2025-01-31",
        ]) + "\n"
        code, out, _ = run_cli("fill", "pago-servicios-internos", input=answers)
        assert code == 0
        payload = json.loads(out)
        assert payload["plantilla_id"] == "pago-servicios-internos"
        assert payload["datos_formulario"]["departamento"] == "Finanzas"
        assert payload["datos_formulario"]["monto"] == "15000"

    def test_fill_asks_again_for_failing_fields(self):
        answers = "\n".join([
            "Servicios de TI",
            "Finanzas",
            "corta",
            "15000",
            "2025-01-31",
            "Soporte mensual de la plataforma de nomina",
        ]) + "\n"
        code, out, err = run_cli("fill", "pago-servicios-internos", input=answers)
        assert code == 0
        assert "al menos 20 caracteres" in err
        payload = json.loads(out)
        assert payload["datos_formulario"]["descripcion_pago"] == "Soporte mensual de la plataforma de nomina"

    def test_unknown_template(self):
        code, _, err = run_cli("fill", "no-existe")
        assert code == 1
        assert "Plantilla no encontrada" in err
