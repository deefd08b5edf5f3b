from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import flet as ft

from lbgeo_app.services.search_filter import SearchField, filter_rows

RowCallback = Callable[[Dict[str, Any]], None]


def _maybe_set(obj: Any, name: str, value: Any) -> None:
    if hasattr(obj, name):
        setattr(obj, name, value)


def style_input(control: Any) -> None:
    is_dropdown = isinstance(control, ft.Dropdown)
    _maybe_set(control, "border_color", "#475569")
    _maybe_set(control, "focused_border_color", "#4F46E5")
    _maybe_set(control, "border_radius", 12)
    _maybe_set(control, "text_size", 14)
    _maybe_set(control, "label_style", ft.TextStyle(color="#1E293B", size=13, weight=ft.FontWeight.BOLD))
    _maybe_set(control, "content_padding", ft.padding.all(12))
    _maybe_set(control, "filled", True)
    _maybe_set(control, "bgcolor", "#F8FAFC")
    if is_dropdown:
        _maybe_set(control, "border_width", 2)
        _maybe_set(control, "enable_search", True)
        return
    _maybe_set(control, "border_width", 1)
    _maybe_set(control, "cursor_color", "#4F46E5")
    _maybe_set(control, "selection_color", "#C7D2FE")


@dataclass
class ColumnConfig:
    key: str
    label: str
    width: Optional[int] = None
    formatter: Optional[Callable[[Any, Dict[str, Any]], str]] = None
    renderer: Optional[Callable[[Dict[str, Any]], ft.Control]] = None


@dataclass
class RowAction:
    icon: str
    tooltip: str
    on_click: RowCallback
    color: str = "#475569"


class GenericTable:
    """In-memory table: the screen loads the rows, the table filters them live.

    Error state ("No se pudo cargar") and empty state ("Sin resultados") are
    distinct; edit and delete row actions are optional, and delete always
    asks for confirmation first.
    """

    def __init__(
        self,
        columns: Sequence[ColumnConfig],
        id_field: str,
        search_fields: Sequence[SearchField],
        on_edit: Optional[RowCallback] = None,
        on_delete: Optional[RowCallback] = None,
        extra_actions: Optional[Sequence[RowAction]] = None,
        on_retry: Optional[Callable[[], None]] = None,
        entity_label: str = "registro",
        search_hint: str = "Buscar...",
    ) -> None:
        self.columns = list(columns)
        self.id_field = id_field
        self.search_fields = list(search_fields)
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.extra_actions = list(extra_actions or [])
        self.on_retry = on_retry
        self.entity_label = entity_label
        self.all_rows: List[Dict[str, Any]] = []
        self.visible_rows: List[Dict[str, Any]] = []
        self._error: Optional[str] = None
        self._busy = False
        self.root: Optional[ft.Control] = None

        self.search_field = ft.TextField(
            expand=1,
            hint_text=search_hint,
            prefix_icon=ft.Icons.SEARCH_ROUNDED,
            on_change=lambda e: self.apply_filter(),
        )
        style_input(self.search_field)
        self.results_label = ft.Text("0 resultados", size=11, color="#64748B")
        self.notice = ft.Container(
            visible=False,
            bgcolor="#FEF3C7",
            border=ft.border.all(1, "#FCD34D"),
            border_radius=8,
            padding=ft.padding.symmetric(horizontal=12, vertical=8),
            content=ft.Row(
                [
                    ft.Icon(ft.Icons.WARNING_AMBER_ROUNDED, color="#B45309", size=18),
                    ft.Text("", size=12, color="#92400E", expand=True),
                ],
                spacing=8,
            ),
        )

        table_columns = [ft.DataColumn(ft.Text(col.label)) for col in self.columns]
        if self._has_actions:
            table_columns.append(ft.DataColumn(ft.Text("Acciones")))
        self.table = ft.DataTable(
            columns=table_columns,
            column_spacing=24,
            bgcolor="#FFFFFF",
            heading_row_color="#F1F5F9",
            divider_thickness=1,
            heading_text_style=ft.TextStyle(size=12, weight=ft.FontWeight.W_700, color="#475569"),
            data_text_style=ft.TextStyle(size=13, color="#1E293B"),
        )

        self._empty_title = ft.Text("Sin resultados", weight=ft.FontWeight.BOLD)
        self._empty_message = ft.Text("Ajustá el buscador.", size=12, color="#64748B")
        self._retry_button = ft.OutlinedButton(
            "Reintentar",
            icon=ft.Icons.REFRESH_ROUNDED,
            visible=False,
            on_click=lambda e: self.on_retry() if self.on_retry else None,
        )
        self._empty_overlay = ft.Container(
            visible=False,
            alignment=ft.alignment.center,
            padding=40,
            content=ft.Column(
                [self._empty_title, self._empty_message, self._retry_button],
                alignment=ft.MainAxisAlignment.CENTER,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=6,
                tight=True,
            ),
        )
        self._loading_overlay = ft.Container(
            visible=False,
            alignment=ft.alignment.center,
            padding=40,
            content=ft.Column(
                [ft.ProgressRing(), ft.Text("Cargando…", size=12, color="#64748B")],
                alignment=ft.MainAxisAlignment.CENTER,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=8,
                tight=True,
            ),
        )
        self._table_viewport = ft.Column(
            [ft.Row([self.table], scroll=ft.ScrollMode.ADAPTIVE)],
            expand=True,
            scroll=ft.ScrollMode.AUTO,
        )
        self.table_container = ft.Container(
            ft.Column(
                [self._loading_overlay, self._empty_overlay, self._table_viewport],
                expand=True,
                spacing=0,
            ),
            expand=1,
            bgcolor="#FFFFFF",
            border=ft.border.all(1, "#E2E8F0"),
            border_radius=12,
        )
        self._confirm_dialog: Optional[ft.AlertDialog] = None

    @property
    def _has_actions(self) -> bool:
        return bool(self.on_edit or self.on_delete or self.extra_actions)

    def build(self) -> ft.Control:
        clear = ft.IconButton(icon=ft.Icons.CLEAR_ROUNDED, tooltip="Limpiar", on_click=lambda e: self._clear_search())
        controls: List[ft.Control] = [
            ft.Row([self.search_field, clear], vertical_alignment=ft.CrossAxisAlignment.CENTER),
            self.notice,
            self.results_label,
            self.table_container,
        ]
        if self.on_retry:
            controls[0].controls.append(
                ft.IconButton(icon=ft.Icons.REFRESH_ROUNDED, tooltip="Actualizar", on_click=lambda e: self.on_retry())
            )
        self.root = ft.Column(controls, expand=1, spacing=8)
        return self.root

    # ---- state ----

    @property
    def busy(self) -> bool:
        return self._busy

    def set_loading(self, value: bool) -> None:
        self._busy = value
        self._loading_overlay.visible = value
        if self._error is None:
            # row actions follow the busy flag
            self.table.rows = self._build_rows(self.visible_rows)
        if value:
            self._table_viewport.visible = False
            self._empty_overlay.visible = False
        else:
            self._render_state()
        self.update()

    def set_rows(self, rows: Sequence[Dict[str, Any]]) -> None:
        self.all_rows = list(rows)
        self._error = None
        self._busy = False
        self._loading_overlay.visible = False
        self.apply_filter()

    def set_error(self, message: str) -> None:
        self.all_rows = []
        self.visible_rows = []
        self._error = message
        self._busy = False
        self.table.rows = []
        self._loading_overlay.visible = False
        self._render_state()
        self.update()

    def set_notice(self, text: Optional[str]) -> None:
        self.notice.content.controls[1].value = text or ""
        self.notice.visible = bool(text)
        self.update()

    def apply_filter(self) -> None:
        if self._error is not None:
            return
        self.visible_rows = filter_rows(self.all_rows, self.search_field.value, self.search_fields)
        self.table.rows = self._build_rows(self.visible_rows)
        self._render_state()
        self.update()

    def _render_state(self) -> None:
        if self._error is not None:
            self.results_label.value = "Sin datos"
            self._empty_title.value = "No se pudo cargar"
            self._empty_message.value = self._error
            self._retry_button.visible = self.on_retry is not None
            self._empty_overlay.visible = True
            self._table_viewport.visible = False
            return
        total = len(self.visible_rows)
        self.results_label.value = (
            f"{total} de {len(self.all_rows)} resultados"
            if self.search_field.value
            else f"{total} resultados"
        )
        self._retry_button.visible = False
        self._empty_title.value = "Sin resultados"
        self._empty_message.value = (
            "Ajustá el buscador." if self.all_rows else "Todavía no hay registros cargados."
        )
        self._empty_overlay.visible = total == 0
        self._table_viewport.visible = total > 0

    def _clear_search(self) -> None:
        self.search_field.value = ""
        self.apply_filter()

    def update(self) -> None:
        if self.root is not None and self.root.page is not None:
            self.root.page.update()

    # ---- rows ----

    def _build_rows(self, rows: List[Dict[str, Any]]) -> List[ft.DataRow]:
        result: List[ft.DataRow] = []
        for row in rows:
            cells = [ft.DataCell(self._render_cell(row, col)) for col in self.columns]
            if self._has_actions:
                cells.append(ft.DataCell(self._actions_cell(row)))
            result.append(ft.DataRow(cells=cells))
        return result

    def _render_cell(self, row: Dict[str, Any], col: ColumnConfig) -> ft.Control:
        if col.renderer:
            return col.renderer(row)
        value = row.get(col.key)
        text = col.formatter(value, row) if col.formatter else ("" if value is None else str(value))
        return ft.Text(text, size=12, width=col.width, overflow=ft.TextOverflow.ELLIPSIS)

    def _actions_cell(self, row: Dict[str, Any]) -> ft.Control:
        buttons: List[ft.Control] = []
        for action in self.extra_actions:
            buttons.append(
                ft.IconButton(
                    icon=action.icon,
                    icon_size=18,
                    icon_color=action.color,
                    tooltip=action.tooltip,
                    on_click=lambda e, r=row, cb=action.on_click: cb(r),
                )
            )
        if self.on_edit:
            buttons.append(
                ft.IconButton(
                    icon=ft.Icons.EDIT_ROUNDED,
                    icon_size=18,
                    icon_color="#4F46E5",
                    tooltip="Editar",
                    disabled=self._busy,
                    on_click=lambda e, r=row: self.request_edit(r),
                )
            )
        if self.on_delete:
            buttons.append(
                ft.IconButton(
                    icon=ft.Icons.DELETE_OUTLINE_ROUNDED,
                    icon_size=18,
                    icon_color="#DC2626",
                    tooltip="Eliminar",
                    disabled=self._busy,
                    on_click=lambda e, r=row: self._confirm_delete(r),
                )
            )
        return ft.Row(buttons, spacing=0, tight=True)

    def request_edit(self, row: Dict[str, Any]) -> None:
        if self._busy or self.on_edit is None:
            return
        self.on_edit(row)

    def request_delete(self, row: Dict[str, Any]) -> None:
        if self._busy or self.on_delete is None:
            return
        self.on_delete(row)

    def _confirm_delete(self, row: Dict[str, Any]) -> None:
        page = self.root.page if self.root is not None else None
        if page is None or self.on_delete is None or self._busy:
            return

        def close(_: Any = None) -> None:
            page.close(dialog)

        def confirm(_: Any) -> None:
            close()
            self.request_delete(row)

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Confirmar eliminación"),
            content=ft.Text(
                f"¿Eliminar el {self.entity_label} #{row.get(self.id_field)}? "
                "Dejará de aparecer en los listados."
            ),
            actions=[
                ft.TextButton("Cancelar", on_click=close),
                ft.ElevatedButton(
                    "Eliminar",
                    bgcolor="#DC2626",
                    color="#FFFFFF",
                    on_click=confirm,
                ),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self._confirm_dialog = dialog
        page.open(dialog)
