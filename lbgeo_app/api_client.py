"""
HTTP layer for the remote entity store.

This module is the only place that talks to the REST API. It exposes one
``EntityApi`` per resource (getAll / getById / create / update / delete) on
top of a shared ``ApiClient`` that wraps a ``requests.Session``.

Rules enforced here:
- No caching and no retries: every call is attempted exactly once.
- Every failure is raised as ``ApiError`` (transport or HTTP) and logged.
- ``delete`` never issues an HTTP DELETE; it re-sends the full entity with
  ``eliminado = True`` (soft delete) for every resource.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from lbgeo_app.config import AppConfig
from lbgeo_app.resources import RESOURCES, ResourceSpec

logger = logging.getLogger(__name__)

_ERROR_KEYS = ("message", "detail", "title", "error")


class ApiError(Exception):
    """Failure talking to the store: ``kind`` is ``transport`` or ``http``."""

    def __init__(
        self,
        message: str,
        *,
        kind: str = "http",
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.method = method
        self.path = path

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _extract_error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _ERROR_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    elif isinstance(body, str) and body.strip():
        return body.strip()
    text = (response.text or "").strip()
    if text:
        return text[:300]
    return f"HTTP {response.status_code}"


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_config(cls, config: AppConfig) -> "ApiClient":
        return cls(config.api_base_url, timeout=config.api_timeout)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Error de red en %s %s: %s", method, path, exc)
            raise ApiError(
                f"No se pudo conectar con el servidor: {exc}",
                kind="transport",
                method=method,
                path=path,
            ) from exc

        if not response.ok:
            message = _extract_error_message(response)
            logger.error("%s %s respondió %s: %s", method, path, response.status_code, message)
            raise ApiError(
                message,
                kind="http",
                status_code=response.status_code,
                method=method,
                path=path,
            )

        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Respuesta no JSON en %s %s", method, path)
            raise ApiError(
                "Respuesta inválida del servidor",
                kind="http",
                status_code=response.status_code,
                method=method,
                path=path,
            ) from exc

    def close(self) -> None:
        self.session.close()


class EntityApi:
    """CRUD operations for one resource of the store."""

    def __init__(self, client: ApiClient, spec: ResourceSpec) -> None:
        self.client = client
        self.spec = spec

    @property
    def id_field(self) -> str:
        return self.spec.id_field

    def _item_path(self, entity_id: Any) -> str:
        return f"{self.spec.path}/{int(entity_id)}"

    def _expect_list(self, data: Any, path: str) -> List[Dict[str, Any]]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(
                f"Se esperaba una lista de {self.spec.plural.lower()}",
                kind="http",
                method="GET",
                path=path,
            )
        return [row for row in data if isinstance(row, dict)]

    def get_all(self) -> List[Dict[str, Any]]:
        data = self.client.request("GET", self.spec.path)
        return self._expect_list(data, self.spec.path)

    def get_by_id(self, entity_id: Any) -> Dict[str, Any]:
        path = self._item_path(entity_id)
        data = self.client.request("GET", path)
        if not isinstance(data, dict):
            raise ApiError(
                f"{self.spec.singular} #{entity_id} no encontrado",
                kind="http",
                status_code=404,
                method="GET",
                path=path,
            )
        return data

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {key: value for key, value in payload.items() if key != self.id_field}
        body["eliminado"] = False
        created = self.client.request("POST", self.spec.path, payload=body)
        if not isinstance(created, dict):
            created = body
        logger.info("%s creado: id=%s", self.spec.singular, created.get(self.id_field))
        return created

    def update(self, entity_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        updated = self.client.request("PUT", self._item_path(entity_id), payload=payload)
        logger.info("%s #%s actualizado", self.spec.singular, entity_id)
        return updated if isinstance(updated, dict) else dict(payload)

    def delete(self, entity_id: Any, current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Soft delete: re-send the full entity with ``eliminado = True``."""
        if current is None:
            current = self.get_by_id(entity_id)
        payload = dict(current)
        payload["eliminado"] = True
        result = self.update(entity_id, payload)
        logger.info("%s #%s marcado como eliminado", self.spec.singular, entity_id)
        return result

    def search(self, **params: Any) -> List[Dict[str, Any]]:
        path = f"{self.spec.path}/search"
        data = self.client.request("GET", path, params=params)
        return self._expect_list(data, path)


class EquivalenciasApi(EntityApi):
    def search_by_code(self, codigo: str) -> List[Dict[str, Any]]:
        return self.search(codigo=codigo.strip())


class RepuestosApi(EntityApi):
    def search_by_oem(self, codigo_oem: str) -> List[Dict[str, Any]]:
        return self.search(codigo_oem=codigo_oem.strip())


class ApiRegistry:
    """One ``EntityApi`` per resource, reachable by attribute or by key."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.clientes = EntityApi(client, RESOURCES["clientes"])
        self.proveedores = EntityApi(client, RESOURCES["proveedores"])
        self.repuestos = RepuestosApi(client, RESOURCES["repuestos"])
        self.equivalencias = EquivalenciasApi(client, RESOURCES["equivalencias"])
        self.usuarios = EntityApi(client, RESOURCES["usuarios"])
        self.registrosventas = EntityApi(client, RESOURCES["registrosventas"])
        self.registros = EntityApi(client, RESOURCES["registros"])

    def __getitem__(self, key: str) -> EntityApi:
        if key not in RESOURCES:
            raise KeyError(key)
        return getattr(self, key)

    def keys(self) -> List[str]:
        return list(RESOURCES)


def build_apis(client: ApiClient) -> ApiRegistry:
    return ApiRegistry(client)
