import unittest
from datetime import date

from lbgeo_app.api_client import ApiError
from lbgeo_app.enums import FormState
from lbgeo_app.loaders import Lookup
from lbgeo_app.services.form_controller import FormController, FormValidationError
from tests.fake_store import FakeStore

CLIENTE = {
    "nombre": "Ana",
    "apellido": "Pérez",
    "email": "ana@example.com",
    "telefono": "351-555-0101",
    "nro_documento": "30111222",
    "direccion": "Av. Colón 100",
}


class SaleFormTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore()
        self.store.seed("clientes", {"id_cliente": 5, **CLIENTE})
        self.store.seed("repuestos", {"id_repuesto": 10, "marca_auto": "Ford", "precio": 120.5})
        self.apis = self.store.apis()
        self.saved = []
        self.controller = FormController(self.apis.registrosventas, on_saved=self.saved.append)
        self.parts = Lookup(self.store.tables["repuestos"].values(), "id_repuesto")

    def test_create_then_edit_keeps_total_exact(self):
        draft = self.controller.open_create()
        self.assertEqual(self.controller.state, FormState.CREATING)
        self.assertEqual(draft["cantidad"], 1)
        self.assertEqual(draft["fecha_venta"], date.today().isoformat())

        self.controller.set_field("id_cliente", "5")
        self.controller.select_part("10", self.parts)
        self.assertEqual(self.controller.draft["precio_unitario"], 120.5)
        self.controller.set_field("cantidad", "3")
        self.assertEqual(self.controller.draft["precio_total"], 361.5)

        created = self.controller.submit()

        mutations = self.store.mutations()
        self.assertEqual(len(mutations), 1)
        method, path, _, payload = mutations[0]
        self.assertEqual((method, path), ("POST", "/registrosventas"))
        self.assertEqual(payload["precio_total"], 361.5)
        self.assertEqual(payload["cantidad"], 3)
        self.assertEqual(payload["id_cliente"], 5)
        self.assertEqual(payload["id_repuesto"], 10)
        self.assertIs(payload["eliminado"], False)
        self.assertNotIn("id_registro_venta", payload)
        self.assertEqual(self.controller.state, FormState.CLOSED)
        self.assertEqual(self.saved, [created])

        stored = self.store.tables["registrosventas"][created["id_registro_venta"]]
        self.controller.open_edit(stored)
        self.controller.set_field("cantidad", 4)
        self.assertEqual(self.controller.draft["precio_total"], 482.0)
        self.controller.submit()

        method, path, _, payload = self.store.mutations()[1]
        self.assertEqual((method, path), ("PUT", f"/registrosventas/{created['id_registro_venta']}"))
        self.assertEqual(payload["precio_total"], 482.0)
        self.assertEqual(payload["id_registro_venta"], created["id_registro_venta"])
        self.assertIs(payload["eliminado"], False)
        self.assertEqual(len(self.store.mutations()), 2)

    def test_unreadable_quantity_counts_as_missing(self):
        self.controller.open_create()
        self.controller.set_field("id_cliente", "5")
        self.controller.select_part("10", self.parts)
        self.controller.set_field("cantidad", "abc")

        with self.assertRaises(FormValidationError) as ctx:
            self.controller.submit()

        self.assertEqual(ctx.exception.missing, ["Cantidad"])
        self.assertEqual(self.store.mutations(), [])
        self.assertEqual(self.controller.state, FormState.CREATING)

    def test_shown_total_matches_sent_total(self):
        self.controller.open_create()
        self.controller.set_field("id_cliente", "5")
        self.controller.select_part("10", self.parts)
        self.controller.set_field("cantidad", "2.5")
        shown = self.controller.draft["precio_total"]

        self.controller.submit()

        payload = self.store.mutations()[0][3]
        self.assertEqual(payload["cantidad"], 3)
        self.assertEqual(shown, 361.5)
        self.assertEqual(payload["precio_total"], shown)

    def test_edit_cuts_dates_to_iso_day(self):
        draft = self.controller.open_edit(
            {
                "id_registro_venta": 3,
                "id_cliente": 5,
                "id_repuesto": 10,
                "cantidad": 2,
                "precio_unitario": 10,
                "precio_total": 20,
                "fecha_venta": "2024-03-05T00:00:00",
            }
        )
        self.assertEqual(draft["fecha_venta"], "2024-03-05")
        self.assertEqual(self.controller.title, "Editar Venta")


class ClientFormTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore()
        self.apis = self.store.apis()
        self.controller = FormController(self.apis.clientes)

    def test_missing_required_fields_send_no_request(self):
        self.controller.open_create()
        self.controller.set_field("nombre", "Ana")
        self.controller.set_field("apellido", "   ")

        with self.assertRaises(FormValidationError) as ctx:
            self.controller.submit()

        self.assertIn("Apellido", ctx.exception.missing)
        self.assertNotIn("Nombre", ctx.exception.missing)
        self.assertEqual(self.store.calls, [])
        self.assertEqual(self.controller.state, FormState.CREATING)

    def test_store_failure_keeps_draft_and_surfaces_message(self):
        self.store.fail("POST", "/clientes", status=400, body={"message": "El email ya existe"})
        self.controller.open_create()
        for name, value in CLIENTE.items():
            self.controller.set_field(name, value)

        with self.assertLogs("lbgeo_app", level="WARNING"):
            with self.assertRaises(ApiError):
                self.controller.submit()

        self.assertEqual(self.controller.state, FormState.CREATING)
        self.assertEqual(self.controller.draft["nombre"], "Ana")
        self.assertEqual(self.controller.error, "El email ya existe")
        self.assertEqual(len(self.store.mutations()), 1)

    def test_submit_requires_an_open_idle_form(self):
        with self.assertRaises(RuntimeError):
            self.controller.submit()
        self.controller.open_create()
        self.controller.state = FormState.SUBMITTING
        with self.assertRaises(RuntimeError):
            self.controller.submit()

    def test_close_discards_draft(self):
        self.controller.open_create()
        self.controller.set_field("nombre", "Ana")
        self.controller.close()
        self.assertEqual(self.controller.draft, {})
        self.assertFalse(self.controller.is_open)


class PartFormTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore()
        self.apis = self.store.apis()
        self.controller = FormController(self.apis.repuestos)

    def _fill(self):
        for name, value in {
            "marca_auto": "Fiat",
            "modelo_auto": "Uno",
            "codigo_OEM_original": "F-100",
            "marca_OEM": "Bosch",
            "motor": "1.4",
            "precio": "1.234,50",
            "id_proveedor": "7",
        }.items():
            self.controller.set_field(name, value)

    def test_defaults_and_optional_blanks(self):
        draft = self.controller.open_create()
        self.assertEqual(draft["anio"], date.today().year)
        self.assertIsNone(draft["id_equivalencia"])
        self._fill()
        self.controller.set_field("id_equivalencia", "")

        self.controller.submit()

        payload = self.store.mutations()[0][3]
        self.assertEqual(payload["precio"], 1234.5)
        self.assertEqual(payload["id_proveedor"], 7)
        self.assertIsNone(payload["id_equivalencia"])
        self.assertIsNone(payload["imagen_url"])
        self.assertIsNone(payload["texto"])
        self.assertEqual(len(self.store.mutations()), 1)

    def test_edit_preserves_passthrough_fields(self):
        self.store.seed(
            "repuestos",
            {
                "id_repuesto": 10,
                "marca_auto": "Fiat",
                "modelo_auto": "Uno",
                "codigo_OEM_original": "F-100",
                "marca_OEM": "Bosch",
                "anio": 2019,
                "motor": "1.4",
                "precio": 100,
                "id_proveedor": 7,
                "id_equivalencia": 3,
                "stock": 12,
            },
        )
        self.controller.open_edit(self.store.tables["repuestos"][10])
        self.controller.set_field("precio", "150")
        self.controller.submit()

        payload = self.store.mutations()[0][3]
        self.assertEqual(payload["stock"], 12)
        self.assertEqual(payload["precio"], 150.0)
        self.assertEqual(payload["id_equivalencia"], 3)
        self.assertEqual(payload["id_repuesto"], 10)


if __name__ == "__main__":
    unittest.main()
