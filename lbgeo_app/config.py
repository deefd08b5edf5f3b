import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_API_URL = "https://datalbgeo.azurewebsites.net/api"


@dataclass(frozen=True)
class AppConfig:
    api_base_url: str = DEFAULT_API_URL
    api_timeout: float = 15.0
    fetch_workers: int = 4
    log_level: str = "INFO"
    log_dir: str = "logs"
    web_port: int = 8550
    ui_view: str = "web"


def _normalize_api_url(raw: str) -> str:
    url = raw.strip().rstrip("/")
    if not url.lower().startswith(("http://", "https://")):
        raise EnvironmentError(
            "LBGEO_API_URL debe comenzar con http:// o https:// "
            f"(valor recibido: {raw!r})."
        )
    return url


def _read_int_env(name: str, default: int, *, min_value: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= min_value else default


def _read_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_config() -> AppConfig:
    load_dotenv()
    api_base_url = _normalize_api_url(os.getenv("LBGEO_API_URL") or DEFAULT_API_URL)

    ui_view = (os.getenv("LBGEO_UI_VIEW") or "web").strip().lower()
    if ui_view not in ("web", "desktop"):
        ui_view = "web"

    return AppConfig(
        api_base_url=api_base_url,
        api_timeout=_read_float_env("LBGEO_API_TIMEOUT", 15.0),
        fetch_workers=_read_int_env("LBGEO_FETCH_WORKERS", 4, min_value=1),
        log_level=(os.getenv("LBGEO_LOG_LEVEL") or "INFO").strip().upper(),
        log_dir=(os.getenv("LBGEO_LOG_DIR") or "logs").strip(),
        web_port=_read_int_env("LBGEO_WEB_PORT", 8550, min_value=1),
        ui_view=ui_view,
    )
