import unittest
from decimal import Decimal

from lbgeo_app.loaders import LoadResult, ViewModelLoader
from lbgeo_app.services.search_filter import filter_rows
from lbgeo_app.services.view_models import (
    CLIENTE_NO_ENCONTRADO,
    RECORD_SEARCH_FIELDS,
    REPUESTO_NO_ENCONTRADO,
    SALE_SEARCH_FIELDS,
    SIN_REFERENCIA,
    average_sale,
    dashboard_stats,
    part_rows,
    record_rows,
    sale_option_label,
    sale_rows,
)
from tests.fake_store import FakeStore


class JoinTests(unittest.TestCase):
    def setUp(self):
        self.store = FakeStore()
        self.store.seed(
            "clientes",
            {"id_cliente": 4, "nombre": "Ana", "apellido": "Pérez", "email": "ana@example.com"},
            {"id_cliente": 5, "nombre": "Luis", "apellido": "Gómez", "eliminado": True},
        )
        self.store.seed("proveedores", {"id_proveedor": 7, "nombre": "Autopartes Sur"})
        self.store.seed(
            "equivalencias",
            {"id_equivalencia": 3, "codigo_OEM_original": "ABC-100", "codigo_OEM_equivalente": "XYZ-900"},
        )
        self.store.seed(
            "repuestos",
            {
                "id_repuesto": 10,
                "marca_auto": "Dragon",
                "modelo_auto": "X1",
                "codigo_OEM_original": "ABC-100",
                "marca_OEM": "Bosch",
                "precio": 120.5,
                "id_proveedor": 7,
                "id_equivalencia": 3,
            },
            {
                "id_repuesto": 11,
                "marca_auto": "Ford",
                "modelo_auto": "Ka",
                "codigo_OEM_original": "F-1",
                "id_proveedor": 99,
                "id_equivalencia": None,
            },
        )
        self.store.seed(
            "registrosventas",
            {"id_registro_venta": 1, "id_cliente": 4, "id_repuesto": 10, "precio_total": 361.5, "fecha_venta": "2024-03-05T00:00:00"},
            {"id_registro_venta": 2, "id_cliente": 5, "id_repuesto": 12, "precio_total": 100},
        )
        self.store.seed(
            "registros",
            {"id_registro": 1, "id_registro_venta": 1, "id_repuesto": 10, "tipo_act": "Salida"},
            {"id_registro": 2, "id_registro_venta": 9, "id_repuesto": 10, "tipo_act": "Entrada"},
        )
        self.apis = self.store.apis()

    def _load(self, screen):
        return ViewModelLoader.for_screen(self.apis, screen).load()

    def test_part_joins_supplier_and_equivalence(self):
        rows = {row["id_repuesto"]: row for row in part_rows(self._load("repuestos"))}
        self.assertEqual(rows[10]["proveedor"], "Autopartes Sur")
        self.assertEqual(rows[10]["equivalencia"], "ABC-100 → XYZ-900")
        self.assertEqual(rows[11]["proveedor"], SIN_REFERENCIA)
        self.assertEqual(rows[11]["equivalencia"], SIN_REFERENCIA)

    def test_sale_of_deleted_client_is_listed_with_fallback(self):
        rows = {row["id_registro_venta"]: row for row in sale_rows(self._load("ventas"))}
        self.assertEqual(rows[1]["cliente"], "Ana Pérez")
        self.assertEqual(rows[1]["cliente_email"], "ana@example.com")
        self.assertEqual(rows[1]["repuesto"], "Dragon X1")
        self.assertEqual(rows[1]["repuesto_codigo"], "ABC-100 - Bosch")
        self.assertEqual(rows[2]["cliente"], CLIENTE_NO_ENCONTRADO)
        self.assertEqual(rows[2]["repuesto"], REPUESTO_NO_ENCONTRADO)
        self.assertEqual(rows[2]["repuesto_codigo"], "")

    def test_sales_search_on_joined_fields(self):
        rows = sale_rows(self._load("ventas"))
        self.assertEqual([row["id_registro_venta"] for row in filter_rows(rows, "gon", SALE_SEARCH_FIELDS)], [1])
        self.assertEqual([row["id_registro_venta"] for row in filter_rows(rows, "PÉREZ", SALE_SEARCH_FIELDS)], [1])
        self.assertEqual(len(filter_rows(rows, "", SALE_SEARCH_FIELDS)), 2)

    def test_record_rows(self):
        rows = {row["id_registro"]: row for row in record_rows(self._load("registros"))}
        self.assertEqual(rows[1]["venta"], "Venta #1")
        self.assertEqual(rows[1]["venta_fecha"], "05/03/2024")
        self.assertEqual(rows[1]["repuesto_codigo"], "ABC-100")
        self.assertEqual(rows[2]["venta"], "Venta #9")
        self.assertEqual(rows[2]["venta_fecha"], "")

    def test_record_search_matches_only_resolved_sales(self):
        rows = record_rows(self._load("registros"))
        self.assertEqual([row["id_registro"] for row in filter_rows(rows, "9", RECORD_SEARCH_FIELDS)], [])
        self.assertEqual(len(filter_rows(rows, "dragon", RECORD_SEARCH_FIELDS)), 2)

    def test_sale_option_label(self):
        label = sale_option_label({"id_registro_venta": 1, "fecha_venta": "2024-03-05", "precio_total": 361.5})
        self.assertEqual(label, "Venta #1 - 05/03/2024 ($361.50)")


class DashboardTests(unittest.TestCase):
    def test_average_is_zero_without_sales(self):
        stats = dashboard_stats(LoadResult(collections={"registrosventas": [], "clientes": []}))
        self.assertEqual(stats.ventas, 0)
        self.assertEqual(stats.ventas_total, Decimal("0.00"))
        self.assertEqual(stats.promedio_venta, 0)

    def test_totals_and_half_up_average(self):
        result = LoadResult(
            collections={
                "registrosventas": [{"precio_total": 100.25}, {"precio_total": "200.25"}],
                "clientes": [{"id_cliente": 1}],
                "repuestos": [],
                "proveedores": [{"id_proveedor": 1}, {"id_proveedor": 2}],
            }
        )
        stats = dashboard_stats(result)
        self.assertEqual(stats.ventas_total, Decimal("300.50"))
        self.assertEqual(stats.promedio_venta, 150)
        self.assertEqual((stats.clientes, stats.repuestos, stats.proveedores, stats.ventas), (1, 0, 2, 2))

    def test_failed_collection_count_is_unknown(self):
        result = LoadResult(
            collections={"clientes": [], "registrosventas": [{"precio_total": 10}]},
            errors={"clientes": "timeout"},
        )
        stats = dashboard_stats(result)
        self.assertIsNone(stats.clientes)
        self.assertEqual(stats.ventas, 1)
        self.assertEqual(stats.unavailable, ["clientes"])

    def test_average_sale_rounds_half_up(self):
        self.assertEqual(average_sale(Decimal("1001"), 2), 501)
        self.assertEqual(average_sale(Decimal("1000"), 3), 333)
        self.assertEqual(average_sale(Decimal("50"), 0), 0)


if __name__ == "__main__":
    unittest.main()
