"""
Declaración de las entidades expuestas por la API remota.

Cada ``ResourceSpec`` describe la ruta REST, la clave primaria, los campos del
formulario (con su tipo, obligatoriedad y valor por defecto) y los campos sobre
los que busca el filtro de la lista. Las pantallas, el cliente HTTP y el
controlador de formularios se construyen a partir de estas declaraciones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from lbgeo_app.enums import RolUsuario, TipoMovimiento
from lbgeo_app.services.pricing import format_date, format_money, today_iso

TEXT_KINDS = ("text", "email", "tel", "url", "multiline")
NUMERIC_KINDS = ("int", "number")


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = "text"  # text, email, tel, url, multiline, int, number, date, select
    required: bool = True
    default: Any = None
    options: Sequence[Tuple[str, str]] = ()
    source: Optional[str] = None  # resource key feeding a select
    width: int = 250

    def default_value(self) -> Any:
        if callable(self.default):
            return self.default()
        if self.default is not None:
            return self.default
        if self.kind in TEXT_KINDS:
            return ""
        return None

    @property
    def is_foreign_key(self) -> bool:
        return self.source is not None


@dataclass(frozen=True)
class ResourceSpec:
    key: str
    path: str
    id_field: str
    singular: str
    plural: str
    fields: Sequence[FieldSpec]
    search_fields: Sequence[str] = ()
    quantity_field: Optional[str] = None
    unit_price_field: Optional[str] = None
    total_field: Optional[str] = None

    @property
    def has_total(self) -> bool:
        return bool(self.total_field and self.quantity_field and self.unit_price_field)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.key} no tiene el campo {name!r}")

    @property
    def field_names(self) -> List[str]:
        return [spec.name for spec in self.fields]


# ---- Etiquetas de referencia (usadas en selects y columnas unidas) ----

def cliente_label(row: Dict[str, Any]) -> str:
    return f"{row.get('nombre') or ''} {row.get('apellido') or ''}".strip()


def proveedor_label(row: Dict[str, Any]) -> str:
    return str(row.get("nombre") or "")


def repuesto_label(row: Dict[str, Any]) -> str:
    return f"{row.get('marca_auto') or ''} {row.get('modelo_auto') or ''}".strip()


def repuesto_option_label(row: Dict[str, Any]) -> str:
    return f"{repuesto_label(row)} - {row.get('codigo_OEM_original') or ''} ({format_money(row.get('precio'))})"


def equivalencia_label(row: Dict[str, Any]) -> str:
    return f"{row.get('codigo_OEM_original') or ''} → {row.get('codigo_OEM_equivalente') or ''}"


def venta_label(row: Dict[str, Any]) -> str:
    return (
        f"Venta #{row.get('id_registro_venta')} - {format_date(row.get('fecha_venta'))} "
        f"({format_money(row.get('precio_total'))})"
    )


OPTION_LABELS: Dict[str, Callable[[Dict[str, Any]], str]] = {
    "clientes": cliente_label,
    "proveedores": proveedor_label,
    "repuestos": repuesto_option_label,
    "equivalencias": equivalencia_label,
    "registrosventas": venta_label,
}


def _current_year() -> int:
    return date.today().year


CLIENTES = ResourceSpec(
    key="clientes",
    path="/clientes",
    id_field="id_cliente",
    singular="Cliente",
    plural="Clientes",
    fields=(
        FieldSpec("nombre", "Nombre"),
        FieldSpec("apellido", "Apellido"),
        FieldSpec("email", "Email", kind="email", width=510),
        FieldSpec("telefono", "Teléfono", kind="tel"),
        FieldSpec("nro_documento", "Nro. Documento"),
        FieldSpec("direccion", "Dirección", width=510),
    ),
    search_fields=("nombre", "apellido", "email", "nro_documento"),
)

PROVEEDORES = ResourceSpec(
    key="proveedores",
    path="/proveedores",
    id_field="id_proveedor",
    singular="Proveedor",
    plural="Proveedores",
    fields=(
        FieldSpec("nombre", "Nombre", width=510),
        FieldSpec("email", "Email", kind="email"),
        FieldSpec("telefono", "Teléfono", kind="tel"),
        FieldSpec("direccion", "Dirección", width=510),
    ),
    search_fields=("nombre", "email", "telefono"),
)

REPUESTOS = ResourceSpec(
    key="repuestos",
    path="/repuestos",
    id_field="id_repuesto",
    singular="Repuesto",
    plural="Repuestos",
    fields=(
        FieldSpec("marca_auto", "Marca Auto"),
        FieldSpec("modelo_auto", "Modelo Auto"),
        FieldSpec("codigo_OEM_original", "Código OEM Original"),
        FieldSpec("marca_OEM", "Marca OEM"),
        FieldSpec("anio", "Año", kind="int", default=_current_year, width=120),
        FieldSpec("motor", "Motor"),
        FieldSpec("precio", "Precio", kind="number", default=0, width=160),
        FieldSpec("id_proveedor", "Proveedor", kind="select", source="proveedores"),
        FieldSpec("id_equivalencia", "Equivalencia", kind="select", source="equivalencias", required=False),
        FieldSpec("imagen_url", "URL Imagen", kind="url", required=False, width=510),
        FieldSpec("texto", "Descripción", kind="multiline", required=False, width=510),
    ),
    search_fields=("marca_auto", "modelo_auto", "codigo_OEM_original", "marca_OEM"),
)

EQUIVALENCIAS = ResourceSpec(
    key="equivalencias",
    path="/equivalencias",
    id_field="id_equivalencia",
    singular="Equivalencia",
    plural="Equivalencias",
    fields=(
        FieldSpec("codigo_OEM_original", "Código OEM Original"),
        FieldSpec("codigo_OEM_equivalente", "Código OEM Equivalente"),
    ),
    search_fields=("codigo_OEM_original", "codigo_OEM_equivalente"),
)

USUARIOS = ResourceSpec(
    key="usuarios",
    path="/usuarios",
    id_field="id_usuario",
    singular="Usuario",
    plural="Usuarios",
    fields=(
        FieldSpec("nombre", "Nombre"),
        FieldSpec("apellido", "Apellido"),
        FieldSpec("email", "Email", kind="email", width=510),
        FieldSpec(
            "rol",
            "Rol",
            kind="select",
            default="",
            options=tuple((rol.value, rol.value) for rol in RolUsuario),
        ),
    ),
    search_fields=("nombre", "apellido", "email", "rol"),
)

REGISTROS_VENTAS = ResourceSpec(
    key="registrosventas",
    path="/registrosventas",
    id_field="id_registro_venta",
    singular="Venta",
    plural="Ventas",
    fields=(
        FieldSpec("id_cliente", "Cliente", kind="select", source="clientes", width=510),
        FieldSpec("id_repuesto", "Repuesto", kind="select", source="repuestos", width=510),
        FieldSpec("cantidad", "Cantidad", kind="int", default=1, width=160),
        FieldSpec("precio_unitario", "Precio Unitario", kind="number", default=0, width=160),
        FieldSpec("fecha_venta", "Fecha de Venta", kind="date", default=today_iso, width=180),
    ),
    quantity_field="cantidad",
    unit_price_field="precio_unitario",
    total_field="precio_total",
)

REGISTROS = ResourceSpec(
    key="registros",
    path="/registros",
    id_field="id_registro",
    singular="Registro",
    plural="Registros",
    fields=(
        FieldSpec("id_registro_venta", "Venta", kind="select", source="registrosventas", width=510),
        FieldSpec("id_repuesto", "Repuesto", kind="select", source="repuestos", width=510),
        FieldSpec("cantidad", "Cantidad", kind="int", default=1, width=160),
        FieldSpec("precio_unitario", "Precio Unitario", kind="number", default=0, width=160),
        FieldSpec(
            "tipo_act",
            "Tipo de Movimiento",
            kind="select",
            default=TipoMovimiento.ENTRADA.value,
            options=tuple((tipo.value, tipo.value) for tipo in TipoMovimiento),
            width=180,
        ),
    ),
    quantity_field="cantidad",
    unit_price_field="precio_unitario",
    total_field="precio_total",
)

RESOURCES: Dict[str, ResourceSpec] = {
    spec.key: spec
    for spec in (
        CLIENTES,
        PROVEEDORES,
        REPUESTOS,
        EQUIVALENCIAS,
        USUARIOS,
        REGISTROS_VENTAS,
        REGISTROS,
    )
}
