import datetime
from typing import Any, Callable, Optional

import flet as ft

from lbgeo_app.resources import RESOURCES
from lbgeo_app.services.pricing import format_money
from lbgeo_app.services.view_models import DashboardStats


class DashboardView(ft.Container):
    """Tablero: KPIs, resumen mensual y accesos rápidos.

    The view does not fetch anything itself; the shell runs the loader and
    calls ``show_loading`` / ``show_stats`` / ``show_error``.
    """

    def __init__(
        self,
        on_refresh: Callable[[], None],
        on_quick_action: Callable[[str], None],
    ):
        super().__init__()
        self.on_refresh = on_refresh
        self.on_quick_action = on_quick_action
        self.stats: Optional[DashboardStats] = None

        self.COLOR_BG = "#F1F5F9"
        self.COLOR_CARD = "#FFFFFF"
        self.COLOR_PRIMARY = "#4F46E5"
        self.COLOR_SUCCESS = "#10B981"
        self.COLOR_WARNING = "#F59E0B"
        self.COLOR_ERROR = "#EF4444"
        self.COLOR_INFO = "#3B82F6"
        self.COLOR_TEXT = "#1E293B"
        self.COLOR_TEXT_MUTED = "#64748B"
        self.COLOR_BORDER = "#E2E8F0"

        self.kpi_row = ft.Row(spacing=20, wrap=True)
        self.unavailable_row = ft.Row(spacing=8, wrap=True, visible=False)
        self.sections_row = ft.Row(spacing=20, wrap=True, vertical_alignment=ft.CrossAxisAlignment.START)
        self.last_updated_text = ft.Text("Actualizando...", size=12, color=self.COLOR_TEXT_MUTED)
        self.refresh_button = ft.IconButton(
            ft.Icons.REFRESH_ROUNDED,
            tooltip="Actualizar ahora",
            on_click=lambda _: self.on_refresh(),
        )
        self.loading = ft.Container(
            alignment=ft.alignment.center,
            padding=60,
            content=ft.ProgressRing(),
            visible=False,
        )
        self.error_text = ft.Text("", color=self.COLOR_ERROR, size=13, visible=False)

        self.padding = 25
        self.bgcolor = self.COLOR_BG
        self.expand = True
        self.content = self._get_main_content()

    def _get_main_content(self) -> ft.Control:
        return ft.Column(
            [
                ft.Container(
                    content=ft.Row(
                        [
                            ft.Column(
                                [
                                    ft.Text("Bienvenido a LBGeo", size=26, weight=ft.FontWeight.BOLD, color="#FFFFFF"),
                                    ft.Text("Sistema de Gestión de Repuestos Automotrices", size=14, color="#C7D2FE"),
                                ],
                                spacing=4,
                            ),
                            ft.Row([self.last_updated_text, self.refresh_button], spacing=6),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    padding=25,
                    border_radius=15,
                    gradient=ft.LinearGradient(colors=["#1E3A8A", "#1D4ED8"]),
                ),
                self.error_text,
                self.unavailable_row,
                self.loading,
                ft.Column(
                    [self.kpi_row, self.sections_row],
                    scroll=ft.ScrollMode.AUTO,
                    expand=True,
                    spacing=20,
                ),
            ],
            spacing=15,
            expand=True,
        )

    def _safe_update(self) -> None:
        if self.page is not None:
            self.update()

    def show_loading(self) -> None:
        self.loading.visible = True
        self.error_text.visible = False
        self.last_updated_text.value = "Actualizando..."
        self._safe_update()

    def show_error(self, message: str) -> None:
        self.loading.visible = False
        self.error_text.value = f"No se pudo cargar el tablero: {message}"
        self.error_text.visible = True
        self._safe_update()

    def show_stats(self, stats: DashboardStats) -> None:
        self.stats = stats
        self.loading.visible = False
        self.error_text.visible = False
        self.last_updated_text.value = f"Última actualización: {datetime.datetime.now().strftime('%H:%M:%S')}"
        self._build_dashboard_content()
        self._safe_update()

    def _count(self, value: Optional[int]) -> str:
        return "—" if value is None else str(value)

    def _build_dashboard_content(self) -> None:
        stats = self.stats or DashboardStats()

        self.unavailable_row.controls = [
            self._badge(RESOURCES[key].plural if key in RESOURCES else key, "no disponible")
            for key in stats.unavailable
        ]
        self.unavailable_row.visible = bool(stats.unavailable)

        self.kpi_row.controls = [
            self._kpi_card("Total Clientes", self._count(stats.clientes), ft.Icons.PEOPLE_ROUNDED, self.COLOR_INFO),
            self._kpi_card("Repuestos", self._count(stats.repuestos), ft.Icons.INVENTORY_2_ROUNDED, self.COLOR_SUCCESS),
            self._kpi_card("Proveedores", self._count(stats.proveedores), ft.Icons.LOCAL_SHIPPING_ROUNDED, "#A855F7"),
            self._kpi_card("Ventas", self._count(stats.ventas), ft.Icons.SHOPPING_CART_ROUNDED, self.COLOR_WARNING),
            self._kpi_card(
                "Ingresos Totales",
                format_money(stats.ventas_total) if stats.ventas is not None else "—",
                ft.Icons.ATTACH_MONEY_ROUNDED,
                "#059669",
            ),
        ]

        self.sections_row.controls = [
            self._section_container("Acciones Rápidas", ft.Icons.BOLT_ROUNDED, self._build_quick_actions()),
            self._section_container("Resumen Mensual", ft.Icons.INSIGHTS_ROUNDED, self._build_summary(stats)),
        ]

    def _build_quick_actions(self) -> ft.Control:
        return ft.Column(
            [
                self._quick_action("Agregar Cliente", ft.Icons.PERSON_ADD_ROUNDED, "#DBEAFE", "#2563EB", "clientes"),
                self._quick_action("Nuevo Repuesto", ft.Icons.INVENTORY_2_ROUNDED, "#DCFCE7", "#16A34A", "repuestos"),
                self._quick_action("Registrar Venta", ft.Icons.SHOPPING_CART_ROUNDED, "#FFEDD5", "#EA580C", "ventas"),
            ],
            spacing=10,
        )

    def _build_summary(self, stats: DashboardStats) -> ft.Control:
        sales_known = stats.ventas is not None
        return ft.Column(
            [
                self._stat_item("Ventas Completadas", self._count(stats.ventas)),
                self._stat_item(
                    "Promedio por Venta",
                    format_money(stats.promedio_venta) if sales_known else "—",
                ),
                self._stat_item(
                    "Total Ingresos",
                    format_money(stats.ventas_total) if sales_known else "—",
                    self.COLOR_PRIMARY,
                    bgcolor="#EFF6FF",
                ),
            ],
            spacing=10,
        )

    def _quick_action(self, label: str, icon: str, bg: str, color: str, screen: str) -> ft.Control:
        return ft.Container(
            content=ft.Row(
                [
                    ft.Container(
                        content=ft.Icon(icon, color=color, size=20),
                        bgcolor=ft.Colors.with_opacity(0.6, "#FFFFFF"),
                        border_radius=10,
                        padding=8,
                    ),
                    ft.Text(label, size=14, weight=ft.FontWeight.W_600, color=self.COLOR_TEXT),
                ],
                spacing=12,
            ),
            bgcolor=bg,
            border_radius=10,
            padding=12,
            ink=True,
            on_click=lambda _: self.on_quick_action(screen),
        )

    def _kpi_card(self, title: str, value: str, icon: str, color: str) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                [
                    ft.Row(
                        [
                            ft.Icon(icon, color=color, size=24),
                            ft.Text(title, size=14, color=self.COLOR_TEXT_MUTED, weight=ft.FontWeight.W_500),
                        ],
                        spacing=10,
                    ),
                    ft.Text(value, size=26, weight=ft.FontWeight.BOLD, color=self.COLOR_TEXT),
                ],
                spacing=5,
                alignment=ft.MainAxisAlignment.CENTER,
            ),
            width=220,
            padding=20,
            bgcolor=self.COLOR_CARD,
            border_radius=15,
            border=ft.border.all(1, self.COLOR_BORDER),
            shadow=ft.BoxShadow(blur_radius=10, color="#0000000D", offset=ft.Offset(0, 4)),
        )

    def _section_container(self, title: str, icon: str, content: ft.Control) -> ft.Container:
        return ft.Container(
            content=ft.Column(
                [
                    ft.Row(
                        [
                            ft.Icon(icon, color=self.COLOR_PRIMARY, size=20),
                            ft.Text(title, size=16, weight=ft.FontWeight.BOLD, color=self.COLOR_TEXT),
                        ],
                        spacing=10,
                    ),
                    ft.Divider(height=1, color=self.COLOR_BORDER),
                    ft.Container(content=content, padding=ft.padding.only(top=10)),
                ],
                spacing=5,
            ),
            width=460,
            padding=20,
            bgcolor=self.COLOR_CARD,
            border_radius=15,
            border=ft.border.all(1, self.COLOR_BORDER),
        )

    def _stat_item(self, label: str, value: Any, color: str = None, bgcolor: str = "#F8FAFC") -> ft.Control:
        if color is None:
            color = self.COLOR_TEXT
        return ft.Container(
            content=ft.Row(
                [
                    ft.Text(label, size=13, color=self.COLOR_TEXT_MUTED),
                    ft.Text(str(value), size=15, weight=ft.FontWeight.BOLD, color=color),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            bgcolor=bgcolor,
            border_radius=8,
            padding=12,
        )

    def _badge(self, label: str, value: str) -> ft.Container:
        return ft.Container(
            content=ft.Row(
                [
                    ft.Text(label, size=10, weight=ft.FontWeight.BOLD, color=self.COLOR_TEXT_MUTED),
                    ft.Text(value, size=11, weight=ft.FontWeight.BOLD, color=self.COLOR_ERROR),
                ],
                spacing=5,
                tight=True,
            ),
            padding=ft.padding.symmetric(horizontal=10, vertical=4),
            bgcolor="#FEF2F2",
            border_radius=20,
            border=ft.border.all(1, "#FECACA"),
        )
