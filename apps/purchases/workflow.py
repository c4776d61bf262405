"""
Purchase request state machine.

    PENDIENTE ──► APROBADO ──► COMPLETADO ────────┐
        │             └──────► COMPRA REALIZADA ──┴──► VALIDADA
        └──► RECHAZADO

RECHAZADO and VALIDADA are terminal.
"""
from apps.core.exceptions import BusinessRuleError

from .models import RequestStatus

TRANSITIONS = {
    RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
    RequestStatus.APPROVED: {RequestStatus.COMPLETED, RequestStatus.PURCHASED},
    RequestStatus.COMPLETED: {RequestStatus.VALIDATED},
    RequestStatus.PURCHASED: {RequestStatus.VALIDATED},
    RequestStatus.REJECTED: set(),
    RequestStatus.VALIDATED: set(),
}

TERMINAL = frozenset({RequestStatus.REJECTED, RequestStatus.VALIDATED})

# Stage gates
EDITABLE = frozenset({RequestStatus.PENDING})
EXECUTABLE = frozenset({RequestStatus.APPROVED})
RECEIVABLE = frozenset({RequestStatus.APPROVED, RequestStatus.COMPLETED, RequestStatus.PURCHASED})
CLOSABLE = frozenset({RequestStatus.COMPLETED, RequestStatus.PURCHASED})


def can_transition(current, target):
    return target in TRANSITIONS.get(current, set())


def is_terminal(status):
    return status in TERMINAL


def require_status(request, allowed, message=None):
    """Raises INVALID_STATUS unless the request status is in `allowed`"""
    if request.status not in allowed:
        raise BusinessRuleError(
            'INVALID_STATUS',
            message or f"Operación no permitida en estado: {request.status}",
            status=request.status,
        )


def transition(request, target):
    """Moves the request to `target` if the table allows it (caller saves)"""
    if not can_transition(request.status, target):
        raise BusinessRuleError(
            'INVALID_STATUS',
            f"Transición no permitida: {request.status} → {target}",
            status=request.status,
        )
    request.status = target
    return request
