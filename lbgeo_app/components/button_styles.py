from __future__ import annotations

from typing import Any, Callable, Optional

import flet as ft

COLOR_ACCENT = "#6366F1"


def cancel_button(
    label: str,
    on_click: Optional[Callable],
    icon: Optional[Any] = ft.Icons.CLOSE_ROUNDED,
    *,
    text_color: str = "#1E293B",
    bgcolor: str = "#F1F5F9",
    radius: int = 8,
) -> ft.ElevatedButton:
    style = ft.ButtonStyle(
        shape=ft.RoundedRectangleBorder(radius=radius),
        color=text_color,
        bgcolor=bgcolor,
        elevation=0,
    )
    return ft.ElevatedButton(label, icon=icon, on_click=on_click, style=style)


def primary_button(
    label: str,
    on_click: Optional[Callable],
    icon: Optional[Any] = None,
    *,
    bgcolor: str = COLOR_ACCENT,
) -> ft.ElevatedButton:
    return ft.ElevatedButton(
        label,
        icon=icon,
        bgcolor=bgcolor,
        color="#FFFFFF",
        on_click=on_click,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=12)),
    )
