from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import flet as ft

from lbgeo_app.api_client import ApiError
from lbgeo_app.components.button_styles import cancel_button
from lbgeo_app.components.generic_table import style_input
from lbgeo_app.components.toast import ToastManager
from lbgeo_app.loaders import Lookup
from lbgeo_app.resources import OPTION_LABELS, RESOURCES, FieldSpec
from lbgeo_app.services.form_controller import FormController, FormValidationError
from lbgeo_app.services.pricing import format_money

logger = logging.getLogger(__name__)

OptionsProvider = Callable[[str], Sequence[Dict[str, Any]]]

_EMPTY_OPTION_LABELS = {
    "equivalencias": "Sin equivalencia",
}


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def date_field(
    page: ft.Page,
    label: str,
    width: int = 180,
    on_pick: Optional[Callable[[str], None]] = None,
) -> ft.TextField:
    tf = ft.TextField(label=label, width=width, hint_text="AAAA-MM-DD")
    style_input(tf)

    def on_date_change(e):
        if e.control.value:
            tf.value = e.control.value.strftime("%Y-%m-%d")
            tf.update()
            if on_pick:
                on_pick(tf.value)

    dp = ft.DatePicker(
        on_change=on_date_change,
        help_text="SELECCIONAR FECHA",
        cancel_text="CANCELAR",
        confirm_text="ACEPTAR",
        error_format_text="Formato inválido",
        error_invalid_text="Fecha fuera de rango",
    )
    tf.suffix = ft.IconButton(
        icon=ft.Icons.CALENDAR_MONTH_ROUNDED,
        icon_size=18,
        on_click=lambda _: page.open(dp),
    )
    return tf


class EntityFormDialog:
    """Alta/edición de una entidad, dibujada a partir de sus ``FieldSpec``."""

    def __init__(
        self,
        page: ft.Page,
        controller: FormController,
        toasts: ToastManager,
        options_provider: Optional[OptionsProvider] = None,
        parts_lookup: Optional[Callable[[], Lookup]] = None,
        option_labels: Optional[Dict[str, Callable[[Dict[str, Any]], str]]] = None,
    ) -> None:
        self.page = page
        self.controller = controller
        self.toasts = toasts
        self.options_provider = options_provider
        self.parts_lookup = parts_lookup
        self.option_labels = {**OPTION_LABELS, **(option_labels or {})}
        self.controls: Dict[str, ft.Control] = {}
        self.error_text = ft.Text("", color="#B91C1C", size=12, visible=False, selectable=True)
        self.total_text = ft.Text("", size=16, weight=ft.FontWeight.BOLD, color="#1E293B")
        self.submit_button = ft.ElevatedButton(
            "Guardar",
            icon=ft.Icons.SAVE_ROUNDED,
            bgcolor="#6366F1",
            color="#FFFFFF",
            style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=12)),
            on_click=lambda _: self.submit(),
        )
        self.dialog = ft.AlertDialog(modal=True, shape=ft.RoundedRectangleBorder(radius=20))

    @property
    def spec(self):
        return self.controller.spec

    # ---- open / close ----

    def open_create(self) -> None:
        self.controller.open_create()
        self._show()

    def open_edit(self, entity: Dict[str, Any]) -> None:
        self.controller.open_edit(entity)
        self._show()

    def close(self, _: Any = None) -> None:
        self.controller.close()
        self.page.close(self.dialog)

    def _show(self) -> None:
        self.controls = {}
        rows: List[ft.Control] = []
        current: List[ft.Control] = []
        for field in self.spec.fields:
            control = self._build_control(field)
            self.controls[field.name] = control
            if field.width > 300 and current:
                rows.append(ft.Row(current, spacing=10))
                current = []
            current.append(control)
            if field.width > 300 or len(current) == 2:
                rows.append(ft.Row(current, spacing=10))
                current = []
        if current:
            rows.append(ft.Row(current, spacing=10))
        if self.spec.has_total:
            rows.append(
                ft.Container(
                    content=ft.Row(
                        [ft.Text("Precio total", size=13, color="#64748B"), self.total_text],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    bgcolor="#EFF6FF",
                    border_radius=10,
                    padding=12,
                    width=510,
                )
            )
        rows.append(self.error_text)
        self._refresh_total()
        self._set_error(None)
        self.submit_button.text = "Actualizar" if self.controller.is_editing else "Crear"
        self.submit_button.disabled = False

        self.dialog.title = ft.Text(self.controller.title, size=22, weight=ft.FontWeight.W_800)
        self.dialog.content = ft.Container(
            content=ft.Column(rows, spacing=12, tight=True, scroll=ft.ScrollMode.AUTO),
            width=540,
            padding=ft.padding.only(top=10),
        )
        self.dialog.actions = [cancel_button("Cancelar", self.close), self.submit_button]
        self.page.open(self.dialog)

    # ---- controls ----

    def _label(self, field: FieldSpec) -> str:
        return f"{field.label} *" if field.required else field.label

    def _build_control(self, field: FieldSpec) -> ft.Control:
        value = self.controller.draft.get(field.name)
        if field.kind == "select":
            return self._build_select(field, value)
        if field.kind == "date":
            control = date_field(
                self.page,
                self._label(field),
                width=field.width,
                on_pick=lambda text, name=field.name: self._on_change(name, text),
            )
            control.value = _as_text(value)
        else:
            kwargs: Dict[str, Any] = {"label": self._label(field), "width": field.width, "value": _as_text(value)}
            if field.kind in ("int", "number"):
                kwargs["keyboard_type"] = ft.KeyboardType.NUMBER
            elif field.kind == "email":
                kwargs["keyboard_type"] = ft.KeyboardType.EMAIL
            elif field.kind == "tel":
                kwargs["keyboard_type"] = ft.KeyboardType.PHONE
            elif field.kind == "url":
                kwargs["keyboard_type"] = ft.KeyboardType.URL
            elif field.kind == "multiline":
                kwargs.update(multiline=True, min_lines=2, max_lines=4)
            control = ft.TextField(**kwargs)
            style_input(control)
        control.on_change = lambda e, name=field.name: self._on_change(name, e.control.value)
        return control

    def _select_options(self, field: FieldSpec, value: Any) -> List[Tuple[str, str]]:
        if not field.source:
            options = [(str(key), label) for key, label in field.options]
        else:
            formatter = self.option_labels[field.source]
            rows = list(self.options_provider(field.source)) if self.options_provider else []
            id_field = RESOURCES[field.source].id_field
            options = [(_as_text(row.get(id_field)), formatter(row)) for row in rows]
            if not field.required:
                options.insert(0, ("", _EMPTY_OPTION_LABELS.get(field.source, "—")))
        selected = _as_text(value)
        if selected and selected not in {key for key, _ in options}:
            # Referenced row was deleted or failed to load
            options.append((selected, f"#{selected} (no disponible)"))
        return options

    def _build_select(self, field: FieldSpec, value: Any) -> ft.Dropdown:
        options = self._select_options(field, value)
        dd = ft.Dropdown(
            label=self._label(field),
            width=field.width,
            value=_as_text(value) or None,
            options=[ft.dropdown.Option(key, text) for key, text in options],
        )
        style_input(dd)
        if field.name == "id_repuesto" and self.spec.has_total and self.parts_lookup:
            dd.on_change = lambda e: self._on_part_selected(e.control.value)
        else:
            dd.on_change = lambda e, name=field.name: self._on_change(name, e.control.value or None)
        return dd

    def _on_change(self, name: str, value: Any) -> None:
        self.controller.set_field(name, value)
        control = self.controls.get(name)
        if control is not None and getattr(control, "error_text", None):
            control.error_text = None
        if name in (self.spec.quantity_field, self.spec.unit_price_field):
            self._refresh_total()
        self.page.update()

    def _on_part_selected(self, value: Any) -> None:
        self.controller.select_part(value or None, self.parts_lookup())
        price_control = self.controls.get(self.spec.unit_price_field)
        if price_control is not None:
            price_control.value = _as_text(self.controller.draft.get(self.spec.unit_price_field))
        self._refresh_total()
        self.page.update()

    def _refresh_total(self) -> None:
        if self.spec.has_total:
            self.total_text.value = format_money(self.controller.draft.get(self.spec.total_field))

    def _set_error(self, message: Optional[str]) -> None:
        self.error_text.value = message or ""
        self.error_text.visible = bool(message)

    # ---- submit ----

    def _flag_missing(self) -> None:
        for field in self.spec.fields:
            control = self.controls.get(field.name)
            if control is None:
                continue
            blank = field.label in self.controller.missing_required()
            control.error_text = "Campo obligatorio" if blank else None

    def submit(self) -> None:
        if self.controller.is_submitting:
            return
        editing = self.controller.is_editing
        self.submit_button.disabled = True
        self.page.update()
        try:
            saved = self.controller.submit()
        except FormValidationError as exc:
            self._flag_missing()
            self._set_error(str(exc))
            self.submit_button.disabled = False
            self.page.update()
            return
        except ApiError as exc:
            self._set_error(exc.message)
            self.submit_button.disabled = False
            self.toasts.error(f"No se pudo guardar: {exc.message}")
            self.page.update()
            return
        except Exception as exc:
            logger.exception("Error inesperado guardando %s", self.spec.singular)
            self._set_error(str(exc))
            self.submit_button.disabled = False
            self.toasts.error(f"Error inesperado: {exc}")
            self.page.update()
            return

        self.page.close(self.dialog)
        verb = "actualizado" if editing else "creado"
        self.toasts.success(f"{self.spec.singular} {verb} correctamente")
