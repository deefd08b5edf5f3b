import sys
from pathlib import Path

import flet as ft

# Ensure project root is in path (running from scripts/)
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from lbgeo_app.config import load_config
from lbgeo_app.logging_setup import configure_logging
from lbgeo_app.ui_basic import main

if __name__ == "__main__":
    config = load_config()
    logger = configure_logging(config)
    logger.info("Starting web app on port %s...", config.web_port)
    ft.app(target=main, port=config.web_port, view=ft.AppView.WEB_BROWSER)
