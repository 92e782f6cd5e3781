"""Tests for the form-session API and its session store"""

import asyncio
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import TUKASH_BASE_DATA
from payment_templates.api.app import create_app
from payment_templates.api.session_store import FormSessionStore


@pytest.fixture
def client():
    return TestClient(create_app())


def _open(client, template_id="tarjetas-tukash", initial_data=None):
    body = {"template_id": template_id}
    if initial_data is not None:
        body["initial_data"] = initial_data
    response = client.post("/api/forms", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestTemplatesEndpoints:

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert data["templates"] >= 9

    def test_list(self, client):
        templates = client.get("/api/templates").json()["templates"]
        ids = [t["id"] for t in templates]
        assert "tarjetas-tukash" in ids
        assert all(t["field_count"] > 0 for t in templates)

    def test_detail_uses_stored_keys(self, client):
        data = client.get("/api/templates/regresos-efectivo").json()
        assert data["nombre"] == "REGRESOS EN EFECTIVO"
        assert data["secciones"][0]["campos"][0]["id"] == "asunto"

    def test_detail_unknown(self, client):
        response = client.get("/api/templates/no-existe")
        assert response.status_code == 404
        assert response.json()["detail"] == "Plantilla no encontrada: no-existe"


class TestFormSessions:

    def test_open_form(self, client):
        form = _open(client)
        assert form["template_id"] == "tarjetas-tukash"
        assert form["status"] == "editing"
        assert form["campos_visibles"][:3] == ["asunto", "cliente", "beneficiario_tarjeta"]
        assert "tipo_tarjeta" not in form["campos_visibles"]

    def test_open_requires_template(self, client):
        assert client.post("/api/forms", json={}).status_code == 400
        assert client.post("/api/forms", json={"template_id": "no-existe"}).status_code == 404

    def test_open_stored_request(self, client):
        response = client.post("/api/forms", json={"stored_request": {
            "id_solicitud": 3,
            "tipo_pago_descripcion": "Plantilla: tukash",
            "plantilla_datos": '{"beneficiario": "Juan", "tipo_cuenta_destino": "Tarjeta"}',
        }})
        assert response.status_code == 201
        form = response.json()
        assert form["template_id"] == "tarjetas-tukash"
        assert form["datos"]["beneficiario_tarjeta"] == "Juan"
        assert "tipo_tarjeta" in form["campos_visibles"]

    def test_open_undetectable_stored_request(self, client):
        response = client.post("/api/forms", json={"stored_request": {"concepto": "Pago"}})
        assert response.status_code == 404
        assert client.get("/api/health").json()["active_sessions"] == 0

    def test_field_edit_updates_visibility(self, client):
        sid = _open(client)["session_id"]
        response = client.patch(f"/api/forms/{sid}/fields/tipo_cuenta_destino", json={"value": "Tarjeta"})
        assert response.status_code == 200
        form = response.json()
        assert "tipo_tarjeta" in form["campos_visibles"]
        assert form["datos"]["tipo_cuenta_destino"] == "Tarjeta"

    def test_field_edit_reports_error(self, client):
        sid = _open(client)["session_id"]
        form = client.patch(f"/api/forms/{sid}/fields/cliente", json={"value": "AB"}).json()
        assert form["errores"] == {"cliente": "Cliente debe tener al menos 3 caracteres"}

    @pytest.mark.parametrize("value", [{"x": [1, 2]}, [[1]], ["a", {"nombre": "b.pdf"}]])
    def test_field_edit_rejects_unsupported_values(self, client, value):
        sid = _open(client)["session_id"]
        response = client.patch(f"/api/forms/{sid}/fields/cliente", json={"value": value})
        assert response.status_code == 422
        assert client.get(f"/api/forms/{sid}").json()["datos"]["cliente"] == ""

    def test_open_rejects_unsupported_initial_data(self, client):
        response = client.post("/api/forms", json={
            "template_id": "tarjetas-tukash",
            "initial_data": {"cliente": {"nombre": "ACME"}},
        })
        assert response.status_code == 422

    def test_file_values_round_trip_with_stored_keys(self, client):
        sid = _open(client)["session_id"]
        files = [{"nombre": "recibo.pdf", "tamano": 2048, "tipo": "application/pdf", "ruta": None}]
        form = client.patch(f"/api/forms/{sid}/fields/archivos_adjuntos", json={"value": files}).json()
        assert form["datos"]["archivos_adjuntos"] == files
        assert "archivos_adjuntos" not in form["errores"]

    def test_validate(self, client):
        sid = _open(client, initial_data={**TUKASH_BASE_DATA, "tipo_cuenta_destino": "Tarjeta"})["session_id"]
        result = client.post(f"/api/forms/{sid}/validate").json()
        assert result["valid"] is False
        assert result["errores"]["tipo_tarjeta"] == "Tipo de Tarjeta es requerido"

    def test_unknown_session(self, client):
        assert client.get("/api/forms/no-existe").status_code == 404
        assert client.delete("/api/forms/no-existe").status_code == 404

    def test_delete(self, client):
        sid = _open(client)["session_id"]
        assert client.delete(f"/api/forms/{sid}").json() == {"deleted": True}
        assert client.get(f"/api/forms/{sid}").status_code == 404


class TestSubmission:

    def test_invalid_form_is_rejected(self, client):
        sid = _open(client)["session_id"]
        response = client.post(f"/api/forms/{sid}/submit")
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert "cliente" in detail["errores"]
        assert client.get(f"/api/forms/{sid}").json()["status"] == "editing"

    def test_submit_then_fail_then_succeed(self, client):
        sid = _open(client, initial_data=TUKASH_BASE_DATA)["session_id"]

        response = client.post(f"/api/forms/{sid}/submit")
        assert response.status_code == 200
        submitted = response.json()
        assert submitted["status"] == "submitting"
        assert submitted["payload"]["plantilla_id"] == "tarjetas-tukash"
        assert submitted["payload"]["datos_formulario"]["cliente"] == "ACME SA DE CV"

        assert client.post(f"/api/forms/{sid}/submit").status_code == 409
        assert client.patch(f"/api/forms/{sid}/fields/cliente", json={"value": "Otro"}).status_code == 409

        form = client.post(f"/api/forms/{sid}/complete", json={"success": False}).json()
        assert form["status"] == "editing"
        assert form["datos"]["cliente"] == "ACME SA DE CV"

        client.post(f"/api/forms/{sid}/submit")
        form = client.post(f"/api/forms/{sid}/complete", json={"success": True}).json()
        assert form["status"] == "idle"
        assert form["template_id"] is None
        assert form["datos"] == {}

    def test_complete_without_submission(self, client):
        sid = _open(client)["session_id"]
        response = client.post(f"/api/forms/{sid}/complete", json={"success": True})
        assert response.status_code == 409


class TestFormSessionStore:

    def test_expired_sessions(self):
        async def scenario():
            store = FormSessionStore(ttl_minutes=5)
            old = await store.create()
            fresh = await store.create()
            old.last_active = datetime.now() - timedelta(minutes=10)

            assert await store.get(old.session_id) is None
            assert await store.get(fresh.session_id) is fresh
            assert await store.evict_expired() == [old.session_id]
            return store.active_count

        assert asyncio.run(scenario()) == 1

    def test_session_limit_drops_least_recent(self):
        async def scenario():
            store = FormSessionStore(max_sessions=2)
            first = await store.create()
            second = await store.create()
            first.last_active = datetime.now() - timedelta(minutes=1)
            third = await store.create()
            return store, first, second, third

        store, first, second, third = asyncio.run(scenario())
        assert store.active_count == 2
        assert first.session_id not in store._sessions
        assert {second.session_id, third.session_id} == set(store._sessions)

    def test_session_limit_spares_saving_sessions(self):
        async def scenario():
            store = FormSessionStore(max_sessions=2)
            saving = await store.create()
            idle = await store.create()
            saving.engine.state.busy = True
            saving.last_active = datetime.now() - timedelta(minutes=1)
            await store.create()
            return store, saving, idle

        store, saving, idle = asyncio.run(scenario())
        assert saving.session_id in store._sessions
        assert idle.session_id not in store._sessions

    def test_sweep_evicts_until_cancelled(self):
        async def scenario():
            store = FormSessionStore(ttl_minutes=0)
            await store.create()
            sweeper = asyncio.create_task(store.sweep(0))
            await asyncio.sleep(0.05)
            sweeper.cancel()
            await asyncio.gather(sweeper, return_exceptions=True)
            return store.active_count

        assert asyncio.run(scenario()) == 0
