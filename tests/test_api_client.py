import unittest

from lbgeo_app.api_client import ApiError
from tests.fake_store import FakeStore


class EntityApiTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore()
        self.store.seed(
            "clientes",
            {"id_cliente": 1, "nombre": "Ana", "apellido": "Pérez", "email": "ana@example.com"},
            {"id_cliente": 2, "nombre": "Luis", "apellido": "Gómez", "eliminado": True},
        )
        self.apis = self.store.apis()

    def test_get_all_returns_every_row(self):
        rows = self.apis.clientes.get_all()
        self.assertEqual([row["id_cliente"] for row in rows], [1, 2])
        self.assertEqual(self.store.calls[0][:2], ("GET", "/clientes"))

    def test_get_all_rejects_non_list_body(self):
        self.store.fail("GET", "/clientes", status=200, body={"items": []})
        with self.assertRaises(ApiError):
            self.apis.clientes.get_all()

    def test_create_strips_primary_key_and_clears_deleted_flag(self):
        created = self.apis.clientes.create(
            {"id_cliente": 99, "nombre": "Eva", "apellido": "Ruiz", "eliminado": True}
        )

        self.assertEqual(len(self.store.mutations()), 1)
        method, path, _, payload = self.store.mutations()[0]
        self.assertEqual((method, path), ("POST", "/clientes"))
        self.assertNotIn("id_cliente", payload)
        self.assertIs(payload["eliminado"], False)
        self.assertEqual(created["id_cliente"], 3)

    def test_update_sends_put(self):
        self.apis.clientes.update(1, {"id_cliente": 1, "nombre": "Ana María", "eliminado": False})
        method, path, _, payload = self.store.mutations()[0]
        self.assertEqual((method, path), ("PUT", "/clientes/1"))
        self.assertEqual(payload["nombre"], "Ana María")

    def test_update_with_empty_body_returns_payload(self):
        self.store.put_returns_body = False
        result = self.apis.clientes.update(1, {"id_cliente": 1, "nombre": "Ana"})
        self.assertEqual(result, {"id_cliente": 1, "nombre": "Ana"})

    def test_soft_delete_resends_entity_and_never_issues_delete(self):
        current = self.store.tables["clientes"][1]
        self.apis.clientes.delete(1, current=dict(current))

        mutations = self.store.mutations()
        self.assertEqual(len(mutations), 1)
        method, path, _, payload = mutations[0]
        self.assertEqual((method, path), ("PUT", "/clientes/1"))
        self.assertIs(payload["eliminado"], True)
        self.assertEqual(payload["email"], "ana@example.com")
        self.assertNotIn("DELETE", [call[0] for call in self.store.calls])

    def test_soft_delete_fetches_current_entity_when_not_given(self):
        self.store.seed("proveedores", {"id_proveedor": 7, "nombre": "Autopartes Sur"})
        self.apis.proveedores.delete(7)

        self.assertEqual([call[:2] for call in self.store.calls], [("GET", "/proveedores/7"), ("PUT", "/proveedores/7")])
        self.assertTrue(self.store.tables["proveedores"][7]["eliminado"])
        self.assertEqual(self.store.tables["proveedores"][7]["nombre"], "Autopartes Sur")

    def test_soft_deleted_row_is_still_reachable_by_id(self):
        self.store.seed("usuarios", {"id_usuario": 4, "nombre": "Caro", "rol": "Vendedor"})
        self.apis.usuarios.delete(4)
        fetched = self.apis.usuarios.get_by_id(4)
        self.assertIs(fetched["eliminado"], True)

    def test_http_error_uses_store_message(self):
        self.store.fail("POST", "/clientes", status=400, body={"message": "El email ya existe"})
        with self.assertLogs("lbgeo_app.api_client", level="ERROR") as captured:
            with self.assertRaises(ApiError) as ctx:
                self.apis.clientes.create({"nombre": "X"})
        self.assertEqual(ctx.exception.message, "El email ya existe")
        self.assertEqual(ctx.exception.kind, "http")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertTrue(any("/clientes" in line for line in captured.output))

    def test_http_error_message_falls_back_to_detail_text_and_code(self):
        self.store.fail("GET", "/clientes/5", status=422, body={"detail": "Id inválido"})
        self.store.fail("GET", "/clientes/6", status=500, body="Internal failure")
        self.store.fail("GET", "/clientes/8", status=503, body=None)
        with self.assertLogs("lbgeo_app.api_client", level="ERROR"):
            messages = []
            for entity_id in (5, 6, 8):
                with self.assertRaises(ApiError) as ctx:
                    self.apis.clientes.get_by_id(entity_id)
                messages.append(ctx.exception.message)
        self.assertEqual(messages, ["Id inválido", "Internal failure", "HTTP 503"])

    def test_not_found(self):
        with self.assertLogs("lbgeo_app.api_client", level="ERROR"):
            with self.assertRaises(ApiError) as ctx:
                self.apis.clientes.get_by_id(404)
        self.assertTrue(ctx.exception.is_not_found)

    def test_transport_error(self):
        self.store.fail_transport("GET", "/clientes")
        with self.assertLogs("lbgeo_app.api_client", level="ERROR"):
            with self.assertRaises(ApiError) as ctx:
                self.apis.clientes.get_all()
        self.assertEqual(ctx.exception.kind, "transport")
        self.assertIsNone(ctx.exception.status_code)

    def test_server_side_searches(self):
        self.store.seed(
            "equivalencias",
            {"id_equivalencia": 3, "codigo_OEM_original": "ABC-100", "codigo_OEM_equivalente": "XYZ-900"},
            {"id_equivalencia": 4, "codigo_OEM_original": "DEF-200", "codigo_OEM_equivalente": "QRS-300"},
        )
        self.store.seed(
            "repuestos",
            {"id_repuesto": 10, "codigo_OEM_original": "ABC-100", "marca_auto": "Ford"},
        )

        equivalencias = self.apis.equivalencias.search_by_code(" xyz ")
        repuestos = self.apis.repuestos.search_by_oem("ABC")

        self.assertEqual([row["id_equivalencia"] for row in equivalencias], [3])
        self.assertEqual([row["id_repuesto"] for row in repuestos], [10])
        self.assertIn(("GET", "/equivalencias/search", {"codigo": "xyz"}, None), self.store.calls)
        self.assertIn(("GET", "/repuestos/search", {"codigo_oem": "ABC"}, None), self.store.calls)

    def test_registry_lookup(self):
        self.assertIs(self.apis["registros"], self.apis.registros)
        with self.assertRaises(KeyError):
            self.apis["facturas"]


if __name__ == "__main__":
    unittest.main()
