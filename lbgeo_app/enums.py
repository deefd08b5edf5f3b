"""
Enums centralizados para roles, tipos de movimiento y estados de formularios.
Previene typos y proporciona un único punto de verdad para constantes del negocio.
"""

from enum import Enum


class RolUsuario(str, Enum):
    """Roles ofrecidos en el formulario de usuarios (texto libre en la API)."""
    ADMINISTRADOR = "Administrador"
    GERENTE = "Gerente"
    VENDEDOR = "Vendedor"
    OPERADOR = "Operador"


class TipoMovimiento(str, Enum):
    """Tipo de movimiento de un registro (línea de venta)."""
    ENTRADA = "Entrada"
    SALIDA = "Salida"


class FormState(str, Enum):
    """Estados del controlador de formularios."""
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"
    SUBMITTING = "submitting"


# Colores (fondo, texto) para la pastilla de rol en la pantalla de usuarios
_ROL_COLORES = {
    "admin": ("#FEE2E2", "#991B1B"),
    "administrador": ("#FEE2E2", "#991B1B"),
    "vendedor": ("#DBEAFE", "#1E40AF"),
    "gerente": ("#F3E8FF", "#6B21A8"),
}
ROL_COLOR_DEFAULT = ("#F1F5F9", "#1E293B")


def rol_colores(rol: str) -> tuple:
    return _ROL_COLORES.get((rol or "").strip().lower(), ROL_COLOR_DEFAULT)
