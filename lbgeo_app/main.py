from __future__ import annotations

import logging

import flet as ft

from lbgeo_app.config import load_config
from lbgeo_app.logging_setup import configure_logging
from lbgeo_app.ui_basic import main as ui_main

logger = logging.getLogger(__name__)


def run() -> None:
    config = load_config()
    configure_logging(config)
    if config.ui_view == "desktop":
        logger.info("Iniciando la consola en modo escritorio")
        ft.app(target=ui_main)
        return
    logger.info("Iniciando la consola web en el puerto %s", config.web_port)
    ft.app(target=ui_main, port=config.web_port, view=ft.AppView.WEB_BROWSER)


if __name__ == "__main__":
    run()
