"""
Controlador de formularios de alta/edición.

Mantiene el borrador de una entidad mientras el diálogo está abierto y envía
exactamente una petición por ``submit``. Estados: closed -> creating/editing
-> submitting -> closed (éxito) o de vuelta a creating/editing (fallo, con el
borrador intacto y ``error`` cargado).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from lbgeo_app.api_client import ApiError, EntityApi
from lbgeo_app.enums import FormState
from lbgeo_app.loaders import Lookup
from lbgeo_app.resources import NUMERIC_KINDS, FieldSpec, ResourceSpec
from lbgeo_app.services.pricing import line_total, parse_int, parse_number, to_wire

logger = logging.getLogger(__name__)


class FormValidationError(ValueError):
    def __init__(self, missing: List[str]) -> None:
        self.missing = list(missing)
        super().__init__("Completá los campos obligatorios: " + ", ".join(self.missing))


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _cut_date(value: Any) -> Any:
    if isinstance(value, str) and len(value) >= 10:
        return value[:10]
    return value


class FormController:
    def __init__(
        self,
        api: EntityApi,
        on_saved: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> None:
        self.api = api
        self.spec: ResourceSpec = api.spec
        self.on_saved = on_saved
        self.state = FormState.CLOSED
        self.draft: Dict[str, Any] = {}
        self.original: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state != FormState.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.original is not None

    @property
    def is_submitting(self) -> bool:
        return self.state == FormState.SUBMITTING

    @property
    def title(self) -> str:
        prefix = "Editar" if self.is_editing else "Nuevo"
        return f"{prefix} {self.spec.singular}"

    def open_create(self) -> Dict[str, Any]:
        self.original = None
        self.error = None
        self.draft = {field.name: field.default_value() for field in self.spec.fields}
        self._recompute_total()
        self.state = FormState.CREATING
        return self.draft

    def open_edit(self, entity: Dict[str, Any]) -> Dict[str, Any]:
        self.original = dict(entity)
        self.error = None
        draft: Dict[str, Any] = {}
        for field in self.spec.fields:
            value = entity.get(field.name)
            if field.kind == "date":
                value = _cut_date(value)
            if value is None and field.kind not in NUMERIC_KINDS and not field.is_foreign_key:
                value = field.default_value() if field.kind != "select" else ""
            draft[field.name] = value
        self.draft = draft
        self._recompute_total()
        self.state = FormState.EDITING
        return self.draft

    def close(self) -> None:
        self.state = FormState.CLOSED
        self.draft = {}
        self.original = None
        self.error = None

    def set_field(self, name: str, value: Any) -> None:
        if not self.is_open:
            raise RuntimeError("El formulario no está abierto")
        self.draft[name] = value
        if name in (self.spec.quantity_field, self.spec.unit_price_field):
            self._recompute_total()

    def select_part(self, part_id: Any, parts: Lookup) -> None:
        """Set ``id_repuesto`` and copy the part's current price."""
        self.set_field("id_repuesto", part_id)
        part = parts.get(part_id)
        if part is not None and self.spec.unit_price_field:
            self.set_field(self.spec.unit_price_field, part.get("precio"))

    def _line_total(self, values: Dict[str, Any]) -> float:
        quantity = self.spec.field(self.spec.quantity_field)
        unit_price = self.spec.field(self.spec.unit_price_field)
        return to_wire(
            line_total(
                self._coerce(quantity, values.get(quantity.name)),
                self._coerce(unit_price, values.get(unit_price.name)),
            )
        )

    def _recompute_total(self) -> None:
        if self.spec.has_total:
            self.draft[self.spec.total_field] = self._line_total(self.draft)

    def missing_required(self) -> List[str]:
        """Labels of required fields that are blank or hold an unreadable number."""
        missing = []
        for field in self.spec.fields:
            if not field.required:
                continue
            value = self.draft.get(field.name)
            if _is_blank(value):
                missing.append(field.label)
            elif (field.kind in NUMERIC_KINDS or field.is_foreign_key) and self._coerce(field, value) is None:
                missing.append(field.label)
        return missing

    def _coerce(self, field: FieldSpec, value: Any) -> Any:
        if field.kind == "int" or field.is_foreign_key:
            return parse_int(value)
        if field.kind == "number":
            parsed = parse_number(value)
            return to_wire(parsed) if parsed is not None else None
        if field.kind == "date":
            return _cut_date(value) if not _is_blank(value) else None
        if _is_blank(value):
            return None if not field.required else ""
        return value.strip() if isinstance(value, str) else value

    def build_payload(self) -> Dict[str, Any]:
        payload = {
            field.name: self._coerce(field, self.draft.get(field.name))
            for field in self.spec.fields
        }
        if self.spec.has_total:
            payload[self.spec.total_field] = self._line_total(payload)
        return payload

    def submit(self) -> Dict[str, Any]:
        if self.state == FormState.CLOSED:
            raise RuntimeError("El formulario no está abierto")
        if self.state == FormState.SUBMITTING:
            raise RuntimeError("Ya hay un envío en curso")

        missing = self.missing_required()
        if missing:
            self.error = f"Completá los campos obligatorios: {', '.join(missing)}"
            raise FormValidationError(missing)

        payload = self.build_payload()
        previous = self.state
        self.state = FormState.SUBMITTING
        self.error = None
        try:
            if self.original is None:
                saved = self.api.create(payload)
            else:
                entity_id = self.original.get(self.spec.id_field)
                saved = self.api.update(entity_id, {**self.original, **payload})
        except ApiError as exc:
            self.state = previous
            self.error = exc.message
            logger.warning("No se pudo guardar %s: %s", self.spec.singular, exc.message)
            raise
        except Exception:
            self.state = previous
            raise

        self.state = FormState.CLOSED
        self.draft = {}
        self.original = None
        if self.on_saved is not None:
            self.on_saved(saved)
        return saved
