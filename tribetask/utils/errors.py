"""Manejo centralizado de errores y excepciones."""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Categorías de errores."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Contexto de un error para logging y monitoreo."""

    category: ErrorCategory
    operation: str
    error_type: str
    message: str
    details: dict[str, Any] | None = None
    traceback_str: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario para logging."""
        return {
            "category": self.category.value,
            "operation": self.operation,
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details,
        }


class TribeTaskError(Exception):
    """Excepción base para TribeTask."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class NotFoundError(TribeTaskError):
    """La operación referenció un ID inexistente."""

    def __init__(self, entity: str, entity_id: Any, details: dict[str, Any] | None = None):
        details = details or {}
        details["entity"] = entity
        details["id"] = entity_id
        super().__init__(f"{entity} not found", ErrorCategory.NOT_FOUND, details)
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(TribeTaskError):
    """Error de validación de datos."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, ErrorCategory.VALIDATION, details)
        self.field = field


class PersistenceError(TribeTaskError):
    """
    Fallo al escribir en el almacenamiento durable.

    Nunca se propaga a los llamadores: el store lo registra y lo
    notifica a sus listeners, el estado en memoria sigue siendo válido.
    """

    def __init__(self, message: str, key: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, ErrorCategory.PERSISTENCE, details)
        self.key = key


def log_error(
    error: Exception,
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    extra: dict[str, Any] | None = None,
) -> ErrorContext:
    """
    Registra un error con contexto estructurado.

    Args:
        error: La excepción capturada
        operation: Nombre de la operación que falló
        category: Categoría del error
        extra: Información adicional

    Returns:
        ErrorContext con los detalles del error
    """
    if isinstance(error, TribeTaskError):
        category = error.category
        details = {**(error.details or {}), **(extra or {})}
    else:
        details = extra or {}

    context = ErrorContext(
        category=category,
        operation=operation,
        error_type=type(error).__name__,
        message=str(error),
        details=details,
        traceback_str=traceback.format_exc(),
    )

    logger.error(
        f"Error en {operation}: {error}",
        extra={"error_context": context.to_dict()},
    )

    return context
