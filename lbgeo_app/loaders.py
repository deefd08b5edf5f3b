"""
View-model loaders for the console screens.

Each screen declares the collections it needs (``SCREEN_COLLECTIONS``). The
loader fetches them concurrently, waits for all of them to settle, drops the
soft-deleted rows and returns a ``LoadResult`` that tracks errors per
collection, so a screen can still render its primary rows when a secondary
collection is unavailable.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from lbgeo_app.api_client import ApiError, ApiRegistry
from lbgeo_app.resources import RESOURCES

logger = logging.getLogger(__name__)

SCREEN_COLLECTIONS: Dict[str, Sequence[str]] = {
    "dashboard": ("clientes", "repuestos", "proveedores", "registrosventas"),
    "clientes": ("clientes",),
    "proveedores": ("proveedores",),
    "repuestos": ("repuestos", "proveedores", "equivalencias"),
    "equivalencias": ("equivalencias",),
    "usuarios": ("usuarios",),
    "ventas": ("registrosventas", "clientes", "repuestos"),
    "registros": ("registros", "registrosventas", "repuestos"),
}


def is_deleted(row: Dict[str, Any]) -> bool:
    return bool(row.get("eliminado"))


def active_rows(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [row for row in rows if not is_deleted(row)]


def _to_key(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


class Lookup:
    """Primary-key index over one loaded collection (first row wins)."""

    def __init__(self, rows: Iterable[Dict[str, Any]], id_field: str) -> None:
        self.id_field = id_field
        self._index: Dict[int, Dict[str, Any]] = {}
        for row in rows:
            key = _to_key(row.get(id_field))
            if key is None or key in self._index:
                continue
            self._index[key] = row

    def get(self, value: Any) -> Optional[Dict[str, Any]]:
        key = _to_key(value)
        if key is None:
            return None
        return self._index.get(key)

    def label(
        self,
        value: Any,
        formatter: Callable[[Dict[str, Any]], str],
        fallback: str,
    ) -> str:
        row = self.get(value)
        if row is None:
            return fallback
        return formatter(row) or fallback

    def __contains__(self, value: Any) -> bool:
        return self.get(value) is not None

    def __len__(self) -> int:
        return len(self._index)


@dataclass
class LoadResult:
    collections: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def failed(self, key: str) -> bool:
        return key in self.errors

    def rows(self, key: str) -> List[Dict[str, Any]]:
        return self.collections.get(key, [])

    def lookup(self, key: str) -> Lookup:
        return Lookup(self.rows(key), RESOURCES[key].id_field)

    def error_summary(self) -> str:
        return "; ".join(
            f"{RESOURCES[key].plural}: {message}" if key in RESOURCES else f"{key}: {message}"
            for key, message in self.errors.items()
        )


class ViewModelLoader:
    """Fetches a screen's collections in parallel and filters soft deletes."""

    def __init__(self, apis: ApiRegistry, keys: Sequence[str], max_workers: int = 4) -> None:
        unknown = [key for key in keys if key not in RESOURCES]
        if unknown:
            raise KeyError(f"Colecciones desconocidas: {', '.join(unknown)}")
        self.apis = apis
        self.keys = list(keys)
        self.max_workers = max(1, int(max_workers))

    @classmethod
    def for_screen(cls, apis: ApiRegistry, screen: str, max_workers: int = 4) -> "ViewModelLoader":
        return cls(apis, SCREEN_COLLECTIONS[screen], max_workers=max_workers)

    def load(self) -> LoadResult:
        result = LoadResult()
        workers = min(self.max_workers, len(self.keys)) or 1
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lbgeo-load") as pool:
            futures = {key: pool.submit(self.apis[key].get_all) for key in self.keys}
            for key, future in futures.items():
                try:
                    rows = future.result()
                except ApiError as exc:
                    result.errors[key] = exc.message
                    result.collections[key] = []
                    logger.error("No se pudo cargar %s: %s", key, exc.message)
                    continue
                except Exception as exc:
                    result.errors[key] = str(exc)
                    result.collections[key] = []
                    logger.exception("Error inesperado cargando %s", key)
                    continue
                active = active_rows(rows)
                result.collections[key] = active
                logger.info(
                    "%s cargado: %d filas (%d eliminadas)",
                    key,
                    len(active),
                    len(rows) - len(active),
                )
        return result


class LoadSequencer:
    """Tickets for screen loads; results of superseded loads are discarded."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    def begin(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def invalidate(self) -> None:
        self.begin()

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._current
