from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from lbgeo_app.loaders import LoadResult
from lbgeo_app.resources import (
    cliente_label,
    equivalencia_label,
    proveedor_label,
    repuesto_label,
    venta_label,
)
from lbgeo_app.services.pricing import CENT, format_date, parse_number, round_half_up
from lbgeo_app.services.search_filter import SearchField

CLIENTE_NO_ENCONTRADO = "Cliente no encontrado"
REPUESTO_NO_ENCONTRADO = "Repuesto no encontrado"
SIN_REFERENCIA = "N/A"


def _repuesto_codigo(repuesto: Optional[Dict[str, Any]]) -> str:
    if not repuesto:
        return ""
    return f"{repuesto.get('codigo_OEM_original') or ''} - {repuesto.get('marca_OEM') or ''}"


def _joined(row: Dict[str, Any], ref: str, key: str) -> Any:
    target = row.get(ref)
    return target.get(key) if target else None


def sale_rows(result: LoadResult) -> List[Dict[str, Any]]:
    clientes = result.lookup("clientes")
    repuestos = result.lookup("repuestos")
    rows: List[Dict[str, Any]] = []
    for venta in result.rows("registrosventas"):
        cliente = clientes.get(venta.get("id_cliente"))
        repuesto = repuestos.get(venta.get("id_repuesto"))
        rows.append(
            {
                **venta,
                "_cliente": cliente,
                "_repuesto": repuesto,
                "cliente": cliente_label(cliente) if cliente else CLIENTE_NO_ENCONTRADO,
                "cliente_email": (cliente or {}).get("email") or "",
                "repuesto": repuesto_label(repuesto) if repuesto else REPUESTO_NO_ENCONTRADO,
                "repuesto_codigo": _repuesto_codigo(repuesto),
            }
        )
    return rows


def part_rows(result: LoadResult) -> List[Dict[str, Any]]:
    proveedores = result.lookup("proveedores")
    equivalencias = result.lookup("equivalencias")
    rows: List[Dict[str, Any]] = []
    for repuesto in result.rows("repuestos"):
        equivalencia = equivalencias.get(repuesto.get("id_equivalencia"))
        rows.append(
            {
                **repuesto,
                "_proveedor": proveedores.get(repuesto.get("id_proveedor")),
                "_equivalencia": equivalencia,
                "proveedor": proveedores.label(repuesto.get("id_proveedor"), proveedor_label, SIN_REFERENCIA),
                "equivalencia": equivalencia_label(equivalencia) if equivalencia else SIN_REFERENCIA,
            }
        )
    return rows


def record_rows(result: LoadResult) -> List[Dict[str, Any]]:
    ventas = result.lookup("registrosventas")
    repuestos = result.lookup("repuestos")
    rows: List[Dict[str, Any]] = []
    for registro in result.rows("registros"):
        venta = ventas.get(registro.get("id_registro_venta"))
        repuesto = repuestos.get(registro.get("id_repuesto"))
        rows.append(
            {
                **registro,
                "_venta": venta,
                "_repuesto": repuesto,
                "venta": f"Venta #{registro.get('id_registro_venta')}",
                "venta_fecha": format_date(venta.get("fecha_venta")) if venta else "",
                "repuesto": repuesto_label(repuesto) if repuesto else REPUESTO_NO_ENCONTRADO,
                "repuesto_codigo": (repuesto or {}).get("codigo_OEM_original") or "",
            }
        )
    return rows


# Joined search fields: values are read from the resolved references
SALE_SEARCH_FIELDS: List[SearchField] = [
    lambda row: _joined(row, "_cliente", "nombre"),
    lambda row: _joined(row, "_cliente", "apellido"),
    lambda row: _joined(row, "_repuesto", "marca_auto"),
    lambda row: _joined(row, "_repuesto", "modelo_auto"),
    lambda row: _joined(row, "_repuesto", "codigo_OEM_original"),
]

RECORD_SEARCH_FIELDS: List[SearchField] = [
    "id_registro",
    lambda row: _joined(row, "_venta", "id_registro_venta"),
    lambda row: _joined(row, "_repuesto", "marca_auto"),
    lambda row: _joined(row, "_repuesto", "modelo_auto"),
    lambda row: _joined(row, "_repuesto", "codigo_OEM_original"),
]


@dataclass
class DashboardStats:
    clientes: Optional[int] = None
    repuestos: Optional[int] = None
    proveedores: Optional[int] = None
    ventas: Optional[int] = None
    ventas_total: Decimal = Decimal("0.00")
    promedio_venta: int = 0
    unavailable: List[str] = field(default_factory=list)


def average_sale(total: Decimal, count: int) -> int:
    if not count:
        return 0
    return round_half_up(total / count)


def dashboard_stats(result: LoadResult) -> DashboardStats:
    def count(key: str) -> Optional[int]:
        return None if result.failed(key) else len(result.rows(key))

    total = Decimal(0)
    for venta in result.rows("registrosventas"):
        total += parse_number(venta.get("precio_total")) or Decimal(0)
    total = total.quantize(CENT, rounding=ROUND_HALF_UP)

    ventas = count("registrosventas")
    return DashboardStats(
        clientes=count("clientes"),
        repuestos=count("repuestos"),
        proveedores=count("proveedores"),
        ventas=ventas,
        ventas_total=total,
        promedio_venta=average_sale(total, ventas or 0),
        unavailable=list(result.errors),
    )


def sale_option_label(sale: Dict[str, Any]) -> str:
    return venta_label(sale)
