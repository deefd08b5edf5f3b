import logging
import threading
from typing import Callable, Optional

import flet as ft

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 4000

_STYLES = {
    "info": (ft.Colors.BLUE_50, ft.Colors.BLUE_200, ft.Colors.BLUE_500, ft.Colors.BLUE_900, ft.Icons.INFO_OUTLINE),
    "success": (ft.Colors.GREEN_50, ft.Colors.GREEN_200, ft.Colors.GREEN_500, ft.Colors.GREEN_900, ft.Icons.CHECK_CIRCLE_OUTLINE),
    "warning": (ft.Colors.AMBER_50, ft.Colors.AMBER_200, ft.Colors.AMBER_500, ft.Colors.AMBER_900, ft.Icons.WARNING_AMBER_ROUNDED),
    "error": (ft.Colors.RED_50, ft.Colors.RED_200, ft.Colors.RED_500, ft.Colors.RED_900, ft.Icons.ERROR_OUTLINE),
}


class ToastNotification(ft.Container):
    """Dismissible toast; ``duration=0`` keeps it until the user closes it."""

    def __init__(
        self,
        message: str,
        kind: str = "info",
        duration: int = DEFAULT_DURATION_MS,
        on_dismiss: Optional[Callable[["ToastNotification"], None]] = None,
    ):
        super().__init__()
        self.message = message
        self.kind = kind if kind in _STYLES else "info"
        self.duration = duration
        self.on_dismiss = on_dismiss
        self._timer: Optional[threading.Timer] = None

        bg, border, icon_color, text_color, icon = _STYLES[self.kind]
        self.content = ft.Row(
            controls=[
                ft.Icon(icon, color=icon_color, size=22),
                ft.Text(message, color=text_color, size=13, weight=ft.FontWeight.W_500, expand=True, selectable=True),
                ft.IconButton(
                    icon=ft.Icons.CLOSE,
                    icon_size=16,
                    icon_color=text_color,
                    tooltip="Cerrar",
                    on_click=lambda e: self.dismiss(),
                    style=ft.ButtonStyle(shape=ft.CircleBorder(), padding=0),
                ),
            ],
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=10,
        )
        self.bgcolor = bg
        self.border = ft.border.all(1, border)
        self.border_radius = 8
        self.padding = ft.padding.symmetric(horizontal=12, vertical=8)
        self.shadow = ft.BoxShadow(
            spread_radius=1,
            blur_radius=10,
            color=ft.Colors.with_opacity(0.1, ft.Colors.BLACK),
            offset=ft.Offset(0, 4),
        )
        self.width = 380
        self.opacity = 0
        self.offset = ft.Offset(0.5, 0)
        self.animate_opacity = 300
        self.animate_offset = ft.Animation(300, ft.AnimationCurve.EASE_OUT_CUBIC)

    def did_mount(self):
        self.opacity = 1
        self.offset = ft.Offset(0, 0)
        self.update()
        if self.duration > 0:
            self._timer = threading.Timer(self.duration / 1000, self.dismiss)
            self._timer.daemon = True
            self._timer.start()

    def dismiss(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.opacity = 0
        self.offset = ft.Offset(0.5, 0)
        try:
            self.update()
        except AssertionError:
            # Already detached from the page
            pass
        threading.Timer(0.3, self._remove_from_view).start()

    def _remove_from_view(self):
        if self.on_dismiss:
            self.on_dismiss(self)


class ToastManager:
    def __init__(self, page: ft.Page):
        self.page = page
        self.container = ft.Column(
            controls=[],
            bottom=20,
            right=20,
            spacing=10,
            alignment=ft.MainAxisAlignment.END,
            horizontal_alignment=ft.CrossAxisAlignment.END,
        )
        self.page.overlay.append(self.container)
        self.page.update()

    def _on_dismiss(self, toast: ToastNotification) -> None:
        if toast in self.container.controls:
            self.container.controls.remove(toast)
            self.page.update()

    def show(self, message: str, kind: str = "info", duration: Optional[int] = None) -> ToastNotification:
        if duration is None:
            # errors stay until dismissed
            duration = 0 if kind == "error" else DEFAULT_DURATION_MS
        if self.container in self.page.overlay:
            self.page.overlay.remove(self.container)
        self.page.overlay.append(self.container)

        toast = ToastNotification(message, kind, duration, self._on_dismiss)
        self.container.controls.append(toast)
        self.page.update()
        if kind == "error":
            logger.debug("Toast de error mostrado: %s", message)
        return toast

    def error(self, message: str) -> ToastNotification:
        return self.show(message, "error")

    def success(self, message: str) -> ToastNotification:
        return self.show(message, "success")
