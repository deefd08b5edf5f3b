from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

import flet as ft

from lbgeo_app.api_client import ApiClient, ApiError, ApiRegistry, build_apis
from lbgeo_app.components.button_styles import cancel_button, primary_button
from lbgeo_app.components.dashboard_view import DashboardView
from lbgeo_app.components.entity_form import EntityFormDialog
from lbgeo_app.components.generic_table import ColumnConfig, GenericTable, RowAction, style_input
from lbgeo_app.components.toast import ToastManager
from lbgeo_app.config import AppConfig, load_config
from lbgeo_app.enums import TipoMovimiento, rol_colores
from lbgeo_app.loaders import LoadResult, LoadSequencer, ViewModelLoader, active_rows
from lbgeo_app.resources import RESOURCES, equivalencia_label
from lbgeo_app.services.form_controller import FormController
from lbgeo_app.services.pricing import format_date, format_money
from lbgeo_app.services.search_filter import SearchField
from lbgeo_app.services.view_models import (
    RECORD_SEARCH_FIELDS,
    SALE_SEARCH_FIELDS,
    SIN_REFERENCIA,
    dashboard_stats,
    part_rows,
    record_rows,
    sale_option_label,
    sale_rows,
)

logger = logging.getLogger(__name__)

# Design system
COLOR_ACCENT = "#6366F1"       # Indigo 500
COLOR_PANEL = "#0F172A"        # Slate 900
COLOR_SIDEBAR_TEXT = "#94A3B8"
COLOR_SIDEBAR_ACTIVE = "#FFFFFF"
COLOR_BG = "#F8FAFC"
COLOR_CARD = "#FFFFFF"
COLOR_BORDER = "#E2E8F0"
COLOR_TEXT = "#1E293B"
COLOR_TEXT_MUTED = "#64748B"
COLOR_SUCCESS = "#10B981"
COLOR_ERROR = "#EF4444"

# Screen key -> resource edited on that screen
SCREEN_RESOURCE = {
    "clientes": "clientes",
    "proveedores": "proveedores",
    "repuestos": "repuestos",
    "equivalencias": "equivalencias",
    "usuarios": "usuarios",
    "ventas": "registrosventas",
    "registros": "registros",
}


def _pill(text: str, bg: str, fg: str) -> ft.Control:
    return ft.Container(
        padding=ft.padding.symmetric(horizontal=10, vertical=4),
        border_radius=999,
        bgcolor=bg,
        content=ft.Text(text or "—", size=11, weight=ft.FontWeight.BOLD, color=fg),
    )


def _rol_pill(row: Dict[str, Any]) -> ft.Control:
    bg, fg = rol_colores(row.get("rol"))
    return _pill(str(row.get("rol") or ""), bg, fg)


def _tipo_pill(row: Dict[str, Any]) -> ft.Control:
    if row.get("tipo_act") == TipoMovimiento.SALIDA.value:
        return _pill(TipoMovimiento.SALIDA.value, "#FEE2E2", "#991B1B")
    return _pill(str(row.get("tipo_act") or TipoMovimiento.ENTRADA.value), "#DCFCE7", "#166534")


def _two_lines(primary: str, secondary: str) -> Callable[[Dict[str, Any]], ft.Control]:
    def render(row: Dict[str, Any]) -> ft.Control:
        return ft.Column(
            [
                ft.Text(str(row.get(primary) or ""), size=12, weight=ft.FontWeight.W_600),
                ft.Text(str(row.get(secondary) or ""), size=11, color=COLOR_TEXT_MUTED),
            ],
            spacing=0,
            tight=True,
        )

    return render


class EntityScreen:
    """One list screen: loader + filtered table + create/edit dialog."""

    def __init__(
        self,
        page: ft.Page,
        key: str,
        apis: ApiRegistry,
        config: AppConfig,
        toasts: ToastManager,
        columns: Sequence[ColumnConfig],
        search_fields: Optional[Sequence[SearchField]] = None,
        rows_builder: Optional[Callable[[LoadResult], List[Dict[str, Any]]]] = None,
        extra_actions: Optional[Sequence[RowAction]] = None,
        option_labels: Optional[Dict[str, Callable[[Dict[str, Any]], str]]] = None,
    ) -> None:
        self.page = page
        self.key = key
        self.resource_key = SCREEN_RESOURCE[key]
        self.spec = RESOURCES[self.resource_key]
        self.api = apis[self.resource_key]
        self.toasts = toasts
        self.loader = ViewModelLoader.for_screen(apis, key, max_workers=config.fetch_workers)
        self.sequencer = LoadSequencer()
        self.result = LoadResult()
        self.rows_builder = rows_builder or (lambda result: result.rows(self.resource_key))

        self.table = GenericTable(
            columns,
            id_field=self.spec.id_field,
            search_fields=search_fields or self.spec.search_fields,
            on_edit=self.open_edit,
            on_delete=self.delete,
            extra_actions=extra_actions,
            on_retry=self.reload,
            entity_label=self.spec.singular.lower(),
            search_hint=f"Buscar {self.spec.plural.lower()}...",
        )
        self.controller = FormController(self.api, on_saved=lambda _: self.reload())
        self.form = EntityFormDialog(
            page,
            self.controller,
            toasts,
            options_provider=self.result_rows,
            parts_lookup=lambda: self.result.lookup("repuestos"),
            option_labels=option_labels,
        )
        self.new_button = primary_button(
            f"Nuevo {self.spec.singular}",
            lambda _: self.open_create(),
            icon=ft.Icons.ADD_ROUNDED,
        )

    def result_rows(self, key: str) -> List[Dict[str, Any]]:
        return self.result.rows(key)

    # ---- loading ----

    def reload(self, after: Optional[Callable[[], None]] = None) -> None:
        ticket = self.sequencer.begin()
        self.new_button.disabled = True
        self.table.set_loading(True)
        threading.Thread(target=self._load, args=(ticket, after), daemon=True).start()

    def deactivate(self) -> None:
        self.sequencer.invalidate()

    def _load(self, ticket: int, after: Optional[Callable[[], None]]) -> None:
        try:
            result = self.loader.load()
        except Exception as exc:
            logger.exception("Error cargando la pantalla %s", self.key)
            result = LoadResult(errors={self.resource_key: str(exc)})
        if not self.sequencer.is_current(ticket):
            logger.debug("Carga descartada de %s (ticket %s)", self.key, ticket)
            return
        self._apply(result)
        if after is not None and not result.failed(self.resource_key):
            after()

    def _apply(self, result: LoadResult) -> None:
        self.result = result
        self.new_button.disabled = False
        if result.failed(self.resource_key):
            self.table.set_notice(None)
            self.table.set_error(result.errors[self.resource_key])
            self.toasts.error(f"No se pudieron cargar {self.spec.plural.lower()}: {result.errors[self.resource_key]}")
            return
        secondary = [RESOURCES[key].plural for key in result.errors if key != self.resource_key]
        self.table.set_notice(
            f"{', '.join(secondary)} no disponible(s); se muestran valores de referencia."
            if secondary
            else None
        )
        self.table.set_rows(self.rows_builder(result))

    # ---- actions ----

    def raw_entity(self, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.result.lookup(self.resource_key).get(row.get(self.spec.id_field))

    @property
    def busy(self) -> bool:
        return self.table.busy

    def open_create(self) -> None:
        if self.busy:
            return
        self.form.open_create()

    def open_edit(self, row: Dict[str, Any]) -> None:
        if self.busy:
            return
        entity = self.raw_entity(row)
        if entity is None:
            self.toasts.error(f"{self.spec.singular} no encontrado, recargá la lista.")
            return
        self.form.open_edit(entity)

    def delete(self, row: Dict[str, Any]) -> None:
        if self.busy:
            return
        entity_id = row.get(self.spec.id_field)
        self.new_button.disabled = True
        self.table.set_loading(True)
        try:
            self.api.delete(entity_id, current=self.raw_entity(row))
        except ApiError as exc:
            self.new_button.disabled = False
            self.table.set_loading(False)
            self.toasts.error(f"No se pudo eliminar: {exc.message}")
            return
        self.toasts.success(f"{self.spec.singular} #{entity_id} eliminado")
        self.reload()


def main(page: ft.Page) -> None:
    page.title = "LBGeo - Gestión de Repuestos"
    page.window.width = 1360
    page.window.height = 880
    page.theme_mode = ft.ThemeMode.LIGHT
    page.padding = 0
    page.spacing = 0
    page.bgcolor = COLOR_BG
    page.locale_configuration = ft.LocaleConfiguration(
        current_locale=ft.Locale("es", "AR"),
        supported_locales=[ft.Locale("es", "AR")],
    )

    config = load_config()
    client = ApiClient.from_config(config)
    apis = build_apis(client)
    toasts = ToastManager(page)
    logger.info("Consola iniciada contra %s", config.api_base_url)

    def on_disconnect(_: Any) -> None:
        logger.info("Sesión finalizada")
        client.close()

    page.on_disconnect = on_disconnect

    # ---- layout helpers ----

    def make_card(title: str, subtitle: str, content: ft.Control, actions: Optional[List[ft.Control]] = None) -> ft.Control:
        header_row = ft.Row(
            [
                ft.Column(
                    [
                        ft.Text(title, size=24, weight=ft.FontWeight.W_800, color=COLOR_TEXT),
                        ft.Text(subtitle, size=13, color=COLOR_TEXT_MUTED),
                    ],
                    spacing=2,
                    expand=True,
                ),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )
        if actions:
            header_row.controls.append(ft.Row(actions, spacing=10))
        return ft.Column(
            [
                ft.Container(content=header_row, padding=ft.padding.only(bottom=15)),
                ft.Container(
                    content=content,
                    expand=1,
                    padding=ft.padding.all(20),
                    bgcolor=COLOR_CARD,
                    border_radius=16,
                    border=ft.border.all(1, COLOR_BORDER),
                    shadow=ft.BoxShadow(blur_radius=20, spread_radius=1, color="#0000000A", offset=ft.Offset(0, 4)),
                ),
            ],
            expand=True,
            spacing=0,
        )

    def info_row(label: str, value: Any, icon: Optional[str] = None) -> ft.Control:
        return ft.Row(
            [
                ft.Icon(icon, size=16, color=COLOR_TEXT_MUTED) if icon else ft.Container(width=16),
                ft.Text(f"{label}:", size=14, weight=ft.FontWeight.BOLD, color=COLOR_TEXT_MUTED, width=130),
                ft.Text(str(value if value not in (None, "") else "—"), size=14, color=COLOR_TEXT, expand=True, selectable=True),
            ],
            spacing=10,
        )

    def search_panel(
        title: str,
        hint: str,
        run_search: Callable[[str], List[Dict[str, Any]]],
        render_result: Callable[[Dict[str, Any]], ft.Control],
    ) -> ft.Control:
        """Server-side search: results are shown apart from the full table."""
        query = ft.TextField(hint_text=hint, expand=True, prefix_icon=ft.Icons.SEARCH_ROUNDED)
        style_input(query)
        status = ft.Text("", size=12, color=COLOR_TEXT_MUTED)
        results = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, height=220)
        button = primary_button("Buscar", None, icon=ft.Icons.TRAVEL_EXPLORE_ROUNDED)
        clear = ft.IconButton(icon=ft.Icons.CLEAR_ROUNDED, tooltip="Limpiar resultados")

        def do_search(_: Any = None) -> None:
            text = (query.value or "").strip()
            if not text:
                toasts.show("Ingresá un código para buscar", kind="warning")
                return
            button.disabled = True
            status.value = "Buscando..."
            page.update()
            try:
                found = active_rows(run_search(text))
            except ApiError as exc:
                status.value = ""
                toasts.error(f"No se pudo buscar: {exc.message}")
            else:
                results.controls = [render_result(row) for row in found]
                status.value = f"{len(found)} resultado(s) para “{text}”"
            finally:
                button.disabled = False
                page.update()

        def do_clear(_: Any) -> None:
            query.value = ""
            results.controls = []
            status.value = ""
            page.update()

        button.on_click = do_search
        query.on_submit = do_search
        clear.on_click = do_clear
        return ft.Container(
            content=ft.Column(
                [
                    ft.Text(title, size=14, weight=ft.FontWeight.BOLD, color=COLOR_ACCENT),
                    ft.Row([query, button, clear], vertical_alignment=ft.CrossAxisAlignment.CENTER),
                    status,
                    results,
                ],
                spacing=8,
            ),
            padding=16,
            bgcolor="#F8FAFC",
            border_radius=12,
            border=ft.border.all(1, COLOR_BORDER),
        )

    def result_tile(title: str, subtitle: str) -> ft.Control:
        return ft.Container(
            content=ft.Column(
                [
                    ft.Text(title, size=13, weight=ft.FontWeight.W_600, color=COLOR_TEXT),
                    ft.Text(subtitle, size=11, color=COLOR_TEXT_MUTED),
                ],
                spacing=0,
            ),
            padding=10,
            bgcolor=COLOR_CARD,
            border_radius=8,
            border=ft.border.all(1, COLOR_BORDER),
        )

    # ---- screens ----

    detail_dialog = ft.AlertDialog(modal=True, shape=ft.RoundedRectangleBorder(radius=20))

    def open_part_detail(row: Dict[str, Any]) -> None:
        equivalencia = row.get("_equivalencia")
        image: ft.Control
        if row.get("imagen_url"):
            image = ft.Image(
                src=row["imagen_url"],
                height=220,
                fit=ft.ImageFit.COVER,
                border_radius=12,
                error_content=ft.Text("No se pudo cargar la imagen", color=COLOR_TEXT_MUTED),
            )
        else:
            image = ft.Container(
                height=120,
                bgcolor="#F1F5F9",
                border_radius=12,
                alignment=ft.alignment.center,
                content=ft.Icon(ft.Icons.INVENTORY_2_ROUNDED, size=48, color=COLOR_TEXT_MUTED),
            )
        detail_dialog.title = ft.Text(
            f"{row.get('marca_auto') or ''} {row.get('modelo_auto') or ''}".strip() or "Repuesto",
            size=22,
            weight=ft.FontWeight.W_800,
        )
        detail_dialog.content = ft.Container(
            width=520,
            content=ft.Column(
                [
                    image,
                    info_row("Descripción", row.get("texto"), ft.Icons.NOTES_ROUNDED),
                    info_row("Código OEM", row.get("codigo_OEM_original"), ft.Icons.QR_CODE_ROUNDED),
                    info_row("Marca OEM", row.get("marca_OEM"), ft.Icons.LABEL_ROUNDED),
                    info_row("Año / Motor", f"{row.get('anio') or '—'} / {row.get('motor') or '—'}", ft.Icons.BUILD_ROUNDED),
                    info_row("Precio", format_money(row.get("precio")), ft.Icons.ATTACH_MONEY_ROUNDED),
                    info_row("Stock", row.get("stock"), ft.Icons.INVENTORY_ROUNDED),
                    info_row("Proveedor", row.get("proveedor"), ft.Icons.LOCAL_SHIPPING_ROUNDED),
                    info_row(
                        "Equivalencia",
                        equivalencia.get("codigo_OEM_equivalente") if equivalencia else SIN_REFERENCIA,
                        ft.Icons.COMPARE_ARROWS_ROUNDED,
                    ),
                ],
                spacing=10,
                tight=True,
                scroll=ft.ScrollMode.AUTO,
            ),
        )
        detail_dialog.actions = [cancel_button("Cerrar", lambda _: page.close(detail_dialog))]
        page.open(detail_dialog)

    money = lambda value, row: format_money(value)
    fecha = lambda value, row: format_date(value)

    screens: Dict[str, EntityScreen] = {
        "clientes": EntityScreen(
            page,
            "clientes",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_cliente", "ID", width=50),
                ColumnConfig("nombre", "Cliente", renderer=lambda r: ft.Text(f"{r.get('nombre') or ''} {r.get('apellido') or ''}", size=12, weight=ft.FontWeight.W_600)),
                ColumnConfig("email", "Email", width=200),
                ColumnConfig("telefono", "Teléfono"),
                ColumnConfig("nro_documento", "Documento"),
                ColumnConfig("direccion", "Dirección", width=220),
            ],
        ),
        "proveedores": EntityScreen(
            page,
            "proveedores",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_proveedor", "ID", width=50),
                ColumnConfig("nombre", "Nombre", width=200),
                ColumnConfig("email", "Email", width=200),
                ColumnConfig("telefono", "Teléfono"),
                ColumnConfig("direccion", "Dirección", width=220),
            ],
        ),
        "repuestos": EntityScreen(
            page,
            "repuestos",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_repuesto", "ID", width=50),
                ColumnConfig("marca_auto", "Vehículo", renderer=_two_lines("marca_auto", "modelo_auto")),
                ColumnConfig("codigo_OEM_original", "OEM", renderer=_two_lines("codigo_OEM_original", "marca_OEM")),
                ColumnConfig("anio", "Año", width=50),
                ColumnConfig("motor", "Motor"),
                ColumnConfig("precio", "Precio", formatter=money),
                ColumnConfig("proveedor", "Proveedor", width=160),
                ColumnConfig("equivalencia", "Equivalencia", width=200),
            ],
            rows_builder=part_rows,
            extra_actions=[RowAction(ft.Icons.VISIBILITY_ROUNDED, "Ver", open_part_detail)],
        ),
        "equivalencias": EntityScreen(
            page,
            "equivalencias",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_equivalencia", "ID", width=50),
                ColumnConfig("codigo_OEM_original", "Código OEM Original", width=200),
                ColumnConfig("codigo_OEM_equivalente", "Código OEM Equivalente", width=200),
            ],
        ),
        "usuarios": EntityScreen(
            page,
            "usuarios",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_usuario", "ID", width=50),
                ColumnConfig("nombre", "Usuario", renderer=lambda r: ft.Text(f"{r.get('nombre') or ''} {r.get('apellido') or ''}", size=12, weight=ft.FontWeight.W_600)),
                ColumnConfig("email", "Email", width=220),
                ColumnConfig("rol", "Rol", renderer=_rol_pill),
            ],
        ),
        "ventas": EntityScreen(
            page,
            "ventas",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_registro_venta", "ID", width=50),
                ColumnConfig("cliente", "Cliente", renderer=_two_lines("cliente", "cliente_email")),
                ColumnConfig("repuesto", "Repuesto", renderer=_two_lines("repuesto", "repuesto_codigo")),
                ColumnConfig("cantidad", "Cant.", width=50),
                ColumnConfig("precio_unitario", "P. Unitario", formatter=money),
                ColumnConfig("precio_total", "Total", formatter=money),
                ColumnConfig("fecha_venta", "Fecha", formatter=fecha),
            ],
            search_fields=SALE_SEARCH_FIELDS,
            rows_builder=sale_rows,
        ),
        "registros": EntityScreen(
            page,
            "registros",
            apis,
            config,
            toasts,
            [
                ColumnConfig("id_registro", "ID", width=50),
                ColumnConfig("venta", "Venta", renderer=_two_lines("venta", "venta_fecha")),
                ColumnConfig("repuesto", "Repuesto", renderer=_two_lines("repuesto", "repuesto_codigo")),
                ColumnConfig("cantidad", "Cant.", width=50),
                ColumnConfig("precio_unitario", "P. Unitario", formatter=money),
                ColumnConfig("precio_total", "Total", formatter=money),
                ColumnConfig("tipo_act", "Tipo", renderer=_tipo_pill),
            ],
            search_fields=RECORD_SEARCH_FIELDS,
            rows_builder=record_rows,
            option_labels={"registrosventas": sale_option_label},
        ),
    }

    oem_panel = search_panel(
        "Buscar OEM",
        "Código OEM exacto o parcial",
        apis.repuestos.search_by_oem,
        lambda row: result_tile(
            f"{row.get('codigo_OEM_original') or ''} · {row.get('marca_OEM') or ''}",
            f"{row.get('marca_auto') or ''} {row.get('modelo_auto') or ''} · {format_money(row.get('precio'))}",
        ),
    )
    code_panel = search_panel(
        "Buscar por código",
        "Código OEM original o equivalente",
        apis.equivalencias.search_by_code,
        lambda row: result_tile(equivalencia_label(row), f"ID {row.get('id_equivalencia')}"),
    )
    side_panels = {"repuestos": oem_panel, "equivalencias": code_panel}

    subtitles = {
        "clientes": "Cartera de clientes",
        "proveedores": "Proveedores de repuestos",
        "repuestos": "Catálogo de repuestos automotrices",
        "equivalencias": "Códigos OEM equivalentes",
        "usuarios": "Usuarios del sistema",
        "ventas": "Registro de ventas",
        "registros": "Movimientos por venta (entradas y salidas)",
    }

    views: Dict[str, ft.Control] = {}
    for key, screen in screens.items():
        body: ft.Control = screen.table.build()
        if key in side_panels:
            body = ft.Column([side_panels[key], body], spacing=12, expand=True)
        views[key] = make_card(screen.spec.plural, subtitles[key], body, actions=[screen.new_button])

    # ---- dashboard ----

    dashboard_loader = ViewModelLoader.for_screen(apis, "dashboard", max_workers=config.fetch_workers)
    dashboard_sequencer = LoadSequencer()

    def load_dashboard() -> None:
        ticket = dashboard_sequencer.begin()
        dashboard.show_loading()

        def work() -> None:
            try:
                result = dashboard_loader.load()
            except Exception as exc:
                logger.exception("Error cargando el tablero")
                if dashboard_sequencer.is_current(ticket):
                    dashboard.show_error(str(exc))
                return
            if not dashboard_sequencer.is_current(ticket):
                return
            dashboard.show_stats(dashboard_stats(result))
            if not result.ok:
                toasts.error(f"Datos no disponibles: {result.error_summary()}")

        threading.Thread(target=work, daemon=True).start()

    def quick_action(key: str) -> None:
        set_view(key, then=screens[key].open_create)

    dashboard = DashboardView(on_refresh=load_dashboard, on_quick_action=quick_action)
    views["dashboard"] = dashboard

    # ---- navigation ----

    content_holder = ft.Container(expand=1, content=dashboard)
    current_view = {"key": "dashboard"}
    nav_items: Dict[str, ft.Container] = {}

    def set_view(key: str, then: Optional[Callable[[], None]] = None) -> None:
        previous = current_view["key"]
        if previous in screens:
            screens[previous].deactivate()
        else:
            dashboard_sequencer.invalidate()
        current_view["key"] = key
        content_holder.content = views[key]
        update_nav()
        page.update()
        logger.debug("Vista activa: %s", key)
        # every activation reloads from scratch
        if key == "dashboard":
            load_dashboard()
        else:
            screens[key].reload(after=then)

    def nav_item(key: str, label: str, icon: str) -> ft.Container:
        item = ft.Container(
            content=ft.Row(
                [
                    ft.Icon(icon, size=20, color=COLOR_SIDEBAR_TEXT),
                    ft.Text(label, size=14, weight=ft.FontWeight.W_500, color=COLOR_SIDEBAR_TEXT),
                ],
                spacing=12,
            ),
            padding=ft.padding.symmetric(horizontal=16, vertical=12),
            border_radius=12,
            on_click=lambda e: set_view(key),
            on_hover=lambda e: on_nav_hover(e, key),
            animate=ft.Animation(200, ft.AnimationCurve.EASE_OUT),
        )
        nav_items[key] = item
        return item

    def on_nav_hover(e: ft.ControlEvent, key: str) -> None:
        if key == current_view["key"]:
            return
        e.control.bgcolor = "#1E293B" if e.data == "true" else None
        e.control.update()

    def update_nav() -> None:
        for key, item in nav_items.items():
            selected = key == current_view["key"]
            item.bgcolor = "#312E81" if selected else None
            icon, text = item.content.controls
            icon.color = COLOR_SIDEBAR_ACTIVE if selected else COLOR_SIDEBAR_TEXT
            text.color = COLOR_SIDEBAR_ACTIVE if selected else COLOR_SIDEBAR_TEXT
            text.weight = ft.FontWeight.BOLD if selected else ft.FontWeight.W_500

    sidebar = ft.Container(
        width=250,
        bgcolor=COLOR_PANEL,
        padding=ft.padding.all(20),
        content=ft.Column(
            [
                ft.Container(
                    content=ft.Row(
                        [
                            ft.Container(
                                width=42,
                                height=42,
                                bgcolor=COLOR_ACCENT,
                                border_radius=12,
                                alignment=ft.alignment.center,
                                content=ft.Icon(ft.Icons.CAR_REPAIR_ROUNDED, color="#FFFFFF", size=24),
                            ),
                            ft.Column(
                                [
                                    ft.Text("LBGeo", size=18, weight=ft.FontWeight.W_900, color="#FFFFFF"),
                                    ft.Text("REPUESTOS", size=10, weight=ft.FontWeight.W_600, color=COLOR_SIDEBAR_TEXT),
                                ],
                                spacing=-2,
                            ),
                        ],
                        spacing=12,
                    ),
                    padding=ft.padding.only(bottom=20, top=10),
                ),
                ft.Column(
                    [
                        ft.Text("NAVEGACIÓN", size=11, weight=ft.FontWeight.W_700, color=COLOR_SIDEBAR_TEXT),
                        nav_item("dashboard", "Dashboard", ft.Icons.DASHBOARD_ROUNDED),
                        nav_item("clientes", "Clientes", ft.Icons.PEOPLE_ALT_ROUNDED),
                        nav_item("repuestos", "Repuestos", ft.Icons.INVENTORY_2_ROUNDED),
                        nav_item("proveedores", "Proveedores", ft.Icons.LOCAL_SHIPPING_ROUNDED),
                        nav_item("ventas", "Ventas", ft.Icons.SHOPPING_CART_ROUNDED),
                        nav_item("equivalencias", "Equivalencias", ft.Icons.COMPARE_ARROWS_ROUNDED),
                        nav_item("registros", "Registros", ft.Icons.RECEIPT_LONG_ROUNDED),
                        nav_item("usuarios", "Usuarios", ft.Icons.ADMIN_PANEL_SETTINGS_ROUNDED),
                    ],
                    spacing=6,
                    scroll=ft.ScrollMode.ADAPTIVE,
                    expand=True,
                ),
                ft.Text(config.api_base_url, size=10, color=COLOR_SIDEBAR_TEXT, selectable=True),
            ],
            spacing=10,
            expand=True,
        ),
    )

    page.add(
        ft.Row(
            [
                sidebar,
                ft.Container(content=content_holder, expand=True, padding=ft.padding.all(30), bgcolor=COLOR_BG),
            ],
            expand=True,
            spacing=0,
        )
    )
    update_nav()
    page.update()
    load_dashboard()
