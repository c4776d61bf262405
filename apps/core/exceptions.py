"""
Exceptions for ERP business operations.

Every failure raised inside a service carries a structured code so views and
API endpoints can react to it, plus the human-readable message shown to the user.
"""
from decimal import Decimal
from typing import Any


class ERPError(Exception):
    """
    Base error for business operations.

    Usage:
        try:
            StockService.apply_movement(...)
        except ERPError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(e.data['available'])

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}
    default_code = 'ERROR'

    def __init__(self, code: str | None = None, message: str | None = None, **data: Any):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class PermissionDeniedError(ERPError):
    """No authenticated session or the role lacks the capability."""

    default_code = 'PERMISSION_DENIED'
    _default_messages = {
        'NOT_AUTHENTICATED': 'No autorizado',
        'PERMISSION_DENIED': 'No tienes permisos para realizar esta acción.',
    }


class InvalidInputError(ERPError):
    """Missing or malformed input."""

    default_code = 'INVALID_INPUT'
    _default_messages = {
        'INVALID_INPUT': 'Datos incompletos.',
        'MISSING_FIELDS': 'Faltan campos',
        'INVALID_QUANTITY': 'Cantidad inválida (debe ser positiva)',
        'REASON_REQUIRED': 'Motivo requerido',
        'FILE_REQUIRED': 'Falta archivo',
        'MALFORMED_PAYLOAD': 'Formato de datos inválido.',
        'INVALID_ID': 'Identificador inválido.',
    }


class BusinessRuleError(ERPError):
    """A rule of the workflow or of the ledger forbids the operation."""

    default_code = 'BUSINESS_RULE'
    _default_messages = {
        'INVALID_STATUS': 'Estado inválido para esta operación',
        'INSUFFICIENT_STOCK': 'Stock insuficiente',
        'NO_STOCK': 'No hay stock registrado para descontar.',
        'VOUCHER_COLLISION': 'El N° de Operación ya fue utilizado.',
        'PENDING_DOCUMENTS': 'Hay documentos pendientes de revisión.',
        'NOT_FOUND': 'Registro no encontrado',
    }
