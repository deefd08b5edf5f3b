"""In-memory stand-in for the remote store, plugged in as a ``requests.Session``."""

import copy
import json
import threading
from typing import Any, Dict, List, Optional, Tuple

import requests

from lbgeo_app.api_client import ApiClient, build_apis
from lbgeo_app.resources import RESOURCES

BASE_URL = "http://store.test/api"

_BY_PATH = {spec.path.strip("/"): spec for spec in RESOURCES.values()}


def _response(status: int, body: Any = None, url: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.url = url
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class FakeStore:
    def __init__(self) -> None:
        self.tables: Dict[str, Dict[int, Dict[str, Any]]] = {key: {} for key in RESOURCES}
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]], Optional[Dict[str, Any]]]] = []
        self.failures: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.transport_failures: set = set()
        self.put_returns_body = True
        self._lock = threading.Lock()

    # ---- setup ----

    def seed(self, key: str, *rows: Dict[str, Any]) -> None:
        id_field = RESOURCES[key].id_field
        for row in rows:
            stored = {"eliminado": False, **row}
            self.tables[key][int(stored[id_field])] = stored

    def fail(self, method: str, path: str, status: int = 500, body: Any = None) -> None:
        self.failures[(method, path)] = (status, body)

    def fail_transport(self, method: str, path: str) -> None:
        self.transport_failures.add((method, path))

    def session(self) -> "FakeSession":
        return FakeSession(self)

    def client(self) -> ApiClient:
        return ApiClient(BASE_URL, timeout=1.0, session=self.session())

    def apis(self):
        return build_apis(self.client())

    # ---- inspection ----

    def mutations(self) -> List[Tuple[str, str, Optional[Dict[str, Any]], Optional[Dict[str, Any]]]]:
        return [call for call in self.calls if call[0] != "GET"]

    # ---- routing ----

    def handle(self, method: str, url: str, params: Optional[Dict[str, Any]], payload: Any) -> requests.Response:
        path = url[len(BASE_URL):]
        with self._lock:
            self.calls.append((method, path, params, copy.deepcopy(payload)))
        if (method, path) in self.transport_failures:
            raise requests.ConnectionError(f"connection refused: {url}")
        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return _response(status, body, url)

        parts = [part for part in path.split("/") if part]
        spec = _BY_PATH.get(parts[0]) if parts else None
        if spec is None:
            return _response(404, {"message": f"Ruta desconocida {path}"}, url)
        table = self.tables[spec.key]
        body = json.loads(json.dumps(payload)) if payload is not None else None

        with self._lock:
            if len(parts) == 1:
                if method == "GET":
                    return _response(200, list(table.values()), url)
                if method == "POST":
                    new_id = max(table, default=0) + 1
                    row = {**body, spec.id_field: new_id}
                    table[new_id] = row
                    return _response(201, row, url)
                return _response(405, {"message": "Método no permitido"}, url)

            if parts[1] == "search" and method == "GET":
                return _response(200, self._search(spec.key, params or {}), url)

            entity_id = int(parts[1])
            if method == "GET":
                if entity_id not in table:
                    return _response(404, {"message": f"{spec.singular} no encontrado"}, url)
                return _response(200, table[entity_id], url)
            if method == "PUT":
                if entity_id not in table:
                    return _response(404, {"message": f"{spec.singular} no encontrado"}, url)
                table[entity_id] = {**body, spec.id_field: entity_id}
                return _response(200, table[entity_id], url) if self.put_returns_body else _response(204, None, url)
            return _response(405, {"message": "Método no permitido"}, url)

    def _search(self, key: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        rows = list(self.tables[key].values())
        if key == "equivalencias":
            code = str(params.get("codigo", "")).lower()
            return [
                row
                for row in rows
                if code in str(row.get("codigo_OEM_original", "")).lower()
                or code in str(row.get("codigo_OEM_equivalente", "")).lower()
            ]
        if key == "repuestos":
            code = str(params.get("codigo_oem", "")).lower()
            return [row for row in rows if code in str(row.get("codigo_OEM_original", "")).lower()]
        return []


class FakeSession(requests.Session):
    def __init__(self, store: FakeStore) -> None:
        super().__init__()
        self.store = store

    def request(self, method, url, params=None, json=None, timeout=None, **kwargs):  # noqa: A002
        return self.store.handle(method, url, params, json)
