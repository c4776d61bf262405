"""
Core services - uniform action results and the transactional action wrapper.

Every mutating operation of the ERP returns an ActionResult instead of raising:
the caller (view, API endpoint, task) receives a success flag and a message.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import wraps
from typing import Any

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from apps.core.exceptions import ERPError, InvalidInputError

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Error inesperado. Intenta de nuevo."
DUPLICATE_MESSAGE = "El registro ya existe (dato duplicado)."

CURRENCIES = [
    {'code': 'PEN', 'name': 'Soles'},
    {'code': 'USD', 'name': 'Dólares'},
]


@dataclass
class ActionResult:
    """Result of a business action."""
    success: bool
    message: str
    code: str = ''
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data) -> 'ActionResult':
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, code: str = '', **data) -> 'ActionResult':
        return cls(success=False, message=message, code=code, data=data)

    def __bool__(self) -> bool:
        return self.success

    def as_dict(self) -> dict[str, Any]:
        return {'success': self.success, 'message': self.message}


def _validation_message(exc: ValidationError) -> str:
    if hasattr(exc, 'message_dict'):
        return " ".join(msg for messages in exc.message_dict.values() for msg in messages)
    return " ".join(exc.messages)


def service_action(capability=None, atomic: bool = True):
    """
    Wraps a service function whose first argument is the acting user.

    - checks the session and, when given, the role capability
    - runs the body inside transaction.atomic() (whole action or nothing)
    - converts business/validation/integrity errors into a failed ActionResult
    - logs infrastructure errors and returns a generic message

    The wrapped function returns the success ActionResult itself.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(user, *args, **kwargs):
            from apps.accounts.permissions import require_authenticated, require_capability

            try:
                if capability is not None:
                    require_capability(user, capability)
                else:
                    require_authenticated(user)

                if atomic:
                    with transaction.atomic():
                        return func(user, *args, **kwargs)
                return func(user, *args, **kwargs)
            except ERPError as e:
                logger.info(f"{func.__qualname__} rechazado [{e.code}]: {e.message}")
                return ActionResult.fail(e.message, code=e.code, **e.data)
            except ValidationError as e:
                message = _validation_message(e)
                logger.info(f"{func.__qualname__} inválido: {message}")
                return ActionResult.fail(message, code='VALIDATION_ERROR')
            except IntegrityError as e:
                logger.warning(f"{func.__qualname__} violó una restricción: {e}")
                return ActionResult.fail(DUPLICATE_MESSAGE, code='INTEGRITY_ERROR')
            except DatabaseError:
                logger.exception(f"{func.__qualname__} falló por error de base de datos")
                return ActionResult.fail(GENERIC_FAILURE_MESSAGE, code='DATABASE_ERROR')

        return wrapper
    return decorator


def parse_decimal(value, code='INVALID_QUANTITY', message=None) -> Decimal:
    """Finite Decimal from user input; raises InvalidInputError when malformed."""
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip().replace(',', '.'))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInputError(code, message)
    if not number.is_finite():
        raise InvalidInputError(code, message)
    return number


def parse_positive(value, code='INVALID_QUANTITY', message=None) -> Decimal:
    number = parse_decimal(value, code, message)
    if number <= 0:
        raise InvalidInputError(code, message)
    return number


def parse_id(value, code='INVALID_ID', message=None) -> int:
    """Primary key from user input (int or digit string)."""
    if isinstance(value, bool):
        raise InvalidInputError(code, message)
    if isinstance(value, int):
        return value
    text = str(value if value is not None else '').strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidInputError(code, message)
    return int(text)


def optional_id(value):
    """Primary key from a query-string filter, None when absent or malformed."""
    try:
        return parse_id(value)
    except InvalidInputError:
        return None
